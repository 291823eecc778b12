"""
WorkforceOne Pricing - Pricing Enums

Shared enums for the pricing engine, the catalog configuration and the API
schemas. Kept dependency-free so that config, models and schemas can all
import them without circular imports.
"""

from enum import Enum


class FeatureCategory(str, Enum):
    """Closed set of catalog categories (display grouping only)."""
    CORE = "core"
    PRODUCTIVITY = "productivity"
    ANALYTICS = "analytics"
    LOCATION = "location"
    INTEGRATION = "integration"
    SUPPORT = "support"


class BillingUnit(str, Enum):
    """
    How a feature's unit price is applied.

    - PER_USER: unit price x user count
    - PER_ORGANIZATION: unit price, flat
    """
    PER_USER = "per_user"
    PER_ORGANIZATION = "per_organization"


class BillingPeriod(str, Enum):
    """Billing period options."""
    MONTHLY = "monthly"
    YEARLY = "yearly"


class SubscriptionStatus(str, Enum):
    """Lifecycle status of an organization's subscription record."""
    TRIAL = "trial"
    ACTIVE = "active"
    PAST_DUE = "past_due"
    CANCELED = "canceled"
    PAUSED = "paused"
    EXPIRED = "expired"
