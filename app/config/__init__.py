"""
WorkforceOne Pricing - Configuration Package

Application settings and pricing reference data.
"""

from app.config.settings import Settings, get_settings, settings
from app.config.catalog_config import (
    MONTHS_PER_YEAR,
    YEARLY_DISCOUNT_RATE,
    BASE_CURRENCY,
    DEFAULT_USER_TIERS,
    DEFAULT_FEATURES,
    CATEGORY_NAMES,
    CURRENCIES,
    COUNTRY_CURRENCY_MAP,
    ZERO_DECIMAL_CURRENCIES,
    get_default_features,
    get_default_user_tiers,
    get_category_name,
    get_free_feature_ids,
)

__all__ = [
    # Settings
    "settings",
    "Settings",
    "get_settings",
    # Catalog
    "MONTHS_PER_YEAR",
    "YEARLY_DISCOUNT_RATE",
    "BASE_CURRENCY",
    "DEFAULT_USER_TIERS",
    "DEFAULT_FEATURES",
    "CATEGORY_NAMES",
    "CURRENCIES",
    "COUNTRY_CURRENCY_MAP",
    "ZERO_DECIMAL_CURRENCIES",
    "get_default_features",
    "get_default_user_tiers",
    "get_category_name",
    "get_free_feature_ids",
]
