"""
WorkforceOne Pricing - Exchange Rate Service

Refreshes the display currency table from a latest-rates API
(response shape: {"base": "USD", "rates": {"EUR": 0.92, ...}}).

The static table in catalog_config is always the fallback: a failed
refresh logs a warning and leaves the table untouched.
"""

import logging
from dataclasses import replace
from decimal import Decimal, InvalidOperation
from typing import Any, Dict, Mapping, Optional

import httpx

from app.config.catalog_config import BASE_CURRENCY
from app.config.settings import Settings, settings as default_settings
from app.models.currency import CurrencyInfo
from app.models.pricing import to_decimal
from app.utils.error_handling import ExchangeRateAPIException

logger = logging.getLogger(__name__)


class ExchangeRateService:
    """
    Client for the latest-rates API.

    Features:
    - Real API calls via httpx
    - Falls back to the static currency table on any failure
    - Only currencies already in the table are updated
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        settings = settings or default_settings
        self.url = settings.exchange_rate_api_url
        self.timeout = settings.exchange_rate_timeout_seconds
        self._transport = transport

    async def fetch_rates(self) -> Dict[str, Decimal]:
        """
        Fetch the latest USD rates.

        Returns:
            Mapping of ISO code to units per 1 USD

        Raises:
            ExchangeRateAPIException: On timeouts, HTTP errors or a malformed payload
        """
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                response = await client.get(self.url)
                logger.debug(f"Exchange rate API GET {self.url}: status={response.status_code}")
                response.raise_for_status()
                payload = response.json()
        except httpx.TimeoutException as e:
            raise ExchangeRateAPIException("Exchange rate API timed out", original_error=e)
        except httpx.HTTPStatusError as e:
            raise ExchangeRateAPIException(
                f"Exchange rate API returned HTTP {e.response.status_code}",
                original_error=e,
            )
        except httpx.RequestError as e:
            raise ExchangeRateAPIException(f"Exchange rate API request failed: {e}", original_error=e)
        except ValueError as e:
            raise ExchangeRateAPIException("Exchange rate API returned invalid JSON", original_error=e)

        return self._parse_rates(payload)

    @staticmethod
    def _parse_rates(payload: Any) -> Dict[str, Decimal]:
        if not isinstance(payload, dict) or not isinstance(payload.get("rates"), dict):
            raise ExchangeRateAPIException("Exchange rate API payload has no 'rates' object")

        base = payload.get("base", BASE_CURRENCY)
        if str(base).upper() != BASE_CURRENCY:
            raise ExchangeRateAPIException(f"Exchange rate API base is {base}, expected {BASE_CURRENCY}")

        rates: Dict[str, Decimal] = {}
        for code, value in payload["rates"].items():
            try:
                rate = to_decimal(value)
            except (InvalidOperation, ValueError):
                logger.warning(f"Skipping unparseable exchange rate for {code}: {value!r}")
                continue
            if not rate.is_finite() or rate <= 0:
                logger.warning(f"Skipping non-positive exchange rate for {code}: {value!r}")
                continue
            rates[str(code).upper()] = rate
        return rates

    async def refresh_rates(self, table: Mapping[str, CurrencyInfo]) -> Dict[str, CurrencyInfo]:
        """
        Return a copy of table with rates replaced by the latest ones.

        The input table is never modified. USD stays pinned at 1. On failure
        the original rates are returned unchanged.
        """
        try:
            rates = await self.fetch_rates()
        except ExchangeRateAPIException as e:
            logger.warning(f"Using static exchange rates: {e.message}")
            return dict(table)

        refreshed: Dict[str, CurrencyInfo] = {}
        updated = 0
        for code, currency in table.items():
            rate = rates.get(code)
            if rate is None or code == BASE_CURRENCY:
                refreshed[code] = currency
                continue
            refreshed[code] = replace(currency, exchange_rate=rate)
            updated += 1

        logger.info(f"Refreshed {updated} of {len(table)} exchange rates")
        return refreshed
