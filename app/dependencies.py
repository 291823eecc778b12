"""
WorkforceOne Pricing - FastAPI Dependencies

Shared dependencies for the pricing routers:
1. The pricing engine over the configured catalog
2. The display currency table (refreshed at startup when enabled)
3. Feature access checks over the same catalog
"""

from typing import Mapping

from fastapi import Depends, Request

from app.config.catalog_config import CURRENCIES
from app.models.currency import CurrencyInfo
from app.services.feature_access_service import FeatureAccessService
from app.services.pricing import PricingEngine, get_default_engine


def get_pricing_engine() -> PricingEngine:
    """Pricing engine for the request. Overridable in tests."""
    return get_default_engine()


def get_currency_table(request: Request) -> Mapping[str, CurrencyInfo]:
    """
    Currency table for the request.

    Uses the table refreshed during startup when present, otherwise the
    static rates.
    """
    return getattr(request.app.state, "currencies", CURRENCIES)


def get_feature_access_service(
    engine: PricingEngine = Depends(get_pricing_engine),
) -> FeatureAccessService:
    """Feature access checks over the engine's catalog."""
    return FeatureAccessService(engine.features)
