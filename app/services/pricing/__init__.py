"""
WorkforceOne Pricing - Pricing Engine Package

Pure, stateless pricing calculations.

Modules:
- tier_resolver: user count -> user tier, tier table validation
- feature_selection: free-feature inclusion, dependency closure, toggling
- price_calculator: price breakdown, yearly discount, upgrade deltas
- currency: conversion to display currencies and formatting
- engine: PricingEngine bundling a validated catalog and tier table
"""

from app.services.pricing.tier_resolver import resolve_tier, validate_tiers
from app.services.pricing.feature_selection import (
    dependency_closure,
    dependents_of,
    index_catalog,
    normalize,
    toggle_feature,
)
from app.services.pricing.price_calculator import (
    UpgradeOption,
    annual_savings,
    annualize,
    calculate,
    feature_cost,
    upgrade_delta,
    upgrade_options,
    yearly_discount_rate,
)
from app.services.pricing.currency import (
    convert_price,
    format_price,
    get_currency,
    get_currency_by_country,
)
from app.services.pricing.engine import PricingEngine, get_default_engine

__all__ = [
    "resolve_tier",
    "validate_tiers",
    "dependency_closure",
    "dependents_of",
    "index_catalog",
    "normalize",
    "toggle_feature",
    "UpgradeOption",
    "annual_savings",
    "annualize",
    "calculate",
    "feature_cost",
    "upgrade_delta",
    "upgrade_options",
    "yearly_discount_rate",
    "convert_price",
    "format_price",
    "get_currency",
    "get_currency_by_country",
    "PricingEngine",
    "get_default_engine",
]
