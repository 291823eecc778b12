"""
WorkforceOne Pricing - Currency Hand-off

Converts USD prices into a display currency and formats them. This is the
only place where amounts are rounded: to the currency's minor unit, half up.
"""

from decimal import Decimal, ROUND_HALF_UP
from typing import Mapping, Optional

from app.config.catalog_config import BASE_CURRENCY, COUNTRY_CURRENCY_MAP, CURRENCIES
from app.models.currency import CurrencyInfo
from app.models.pricing import to_decimal
from app.utils.error_handling import UnknownCurrencyException


def get_currency(
    code: str,
    currencies: Optional[Mapping[str, CurrencyInfo]] = None,
) -> CurrencyInfo:
    """Look up a currency by ISO code (case-insensitive)."""
    table = CURRENCIES if currencies is None else currencies
    currency = table.get(code.upper())
    if currency is None:
        raise UnknownCurrencyException(code)
    return currency


def get_currency_by_country(
    country_code: str,
    currencies: Optional[Mapping[str, CurrencyInfo]] = None,
) -> CurrencyInfo:
    """Currency for a country; falls back to USD for unmapped countries."""
    table = CURRENCIES if currencies is None else currencies
    code = COUNTRY_CURRENCY_MAP.get(country_code.upper(), BASE_CURRENCY)
    return table.get(code) or table[BASE_CURRENCY]


def convert_price(amount_usd: Decimal, currency: CurrencyInfo) -> Decimal:
    """
    Convert a USD amount and round it to the currency's minor unit.

    JPY, KRW, VND and IDR round to whole units; everything else to cents.
    """
    converted = to_decimal(amount_usd) * currency.exchange_rate
    quantum = Decimal(1).scaleb(-currency.minor_unit_digits)
    return converted.quantize(quantum, rounding=ROUND_HALF_UP)


def format_price(amount_usd: Decimal, currency: CurrencyInfo) -> str:
    """Format a USD amount in the given currency, e.g. "$1,680.00" or "¥18,480"."""
    converted = convert_price(amount_usd, currency)
    sign = "-" if converted < 0 else ""
    return f"{sign}{currency.symbol}{abs(converted):,.{currency.minor_unit_digits}f}"
