"""
WorkforceOne Pricing - Models Package

Value objects for the pricing engine and subscription records.
"""

from app.models.pricing_enums import (
    FeatureCategory,
    BillingUnit,
    BillingPeriod,
    SubscriptionStatus,
)
from app.models.pricing import (
    Feature,
    UserTier,
    SelectionState,
    PriceBreakdown,
    to_decimal,
)
from app.models.subscription import SubscriptionInfo
from app.models.currency import CurrencyInfo

__all__ = [
    "FeatureCategory",
    "BillingUnit",
    "BillingPeriod",
    "SubscriptionStatus",
    "Feature",
    "UserTier",
    "SelectionState",
    "PriceBreakdown",
    "to_decimal",
    "SubscriptionInfo",
    "CurrencyInfo",
]
