"""
WorkforceOne Pricing - Pricing Schemas

Pydantic schemas for the pricing API. Money is Decimal throughout and
serialised as a string so no precision is lost on the way to the client.
"""

from datetime import datetime
from decimal import Decimal
from typing import Dict, List, Optional

from pydantic import BaseModel, Field

from app.models.currency import CurrencyInfo
from app.models.pricing import Feature, UserTier
from app.models.pricing_enums import BillingPeriod, BillingUnit, FeatureCategory, SubscriptionStatus
from app.models.subscription import SubscriptionInfo


# ===========================================
# CATALOG SCHEMAS
# ===========================================

class FeatureResponse(BaseModel):
    """A catalog feature."""
    id: str
    name: str
    category: FeatureCategory
    unit_price: Decimal
    billing_unit: BillingUnit
    is_free: bool
    dependencies: List[str] = []
    popular: bool = False
    description: str = ""

    @classmethod
    def from_feature(cls, feature: Feature) -> "FeatureResponse":
        return cls(
            id=feature.id,
            name=feature.name,
            category=feature.category,
            unit_price=feature.unit_price,
            billing_unit=feature.billing_unit,
            is_free=feature.is_free,
            dependencies=sorted(feature.dependencies),
            popular=feature.popular,
            description=feature.description,
        )


class UserTierResponse(BaseModel):
    """A user tier band."""
    name: str
    range_start: int
    range_end: Optional[int] = Field(None, description="None for the unbounded top tier")
    per_user_price: Decimal

    @classmethod
    def from_tier(cls, tier: UserTier) -> "UserTierResponse":
        return cls(
            name=tier.name,
            range_start=tier.range_start,
            range_end=tier.range_end,
            per_user_price=tier.per_user_price,
        )


class FeatureCategoryResponse(BaseModel):
    """Features of one category."""
    category: FeatureCategory
    name: str
    features: List[FeatureResponse]


class CatalogResponse(BaseModel):
    """Full pricing catalog for the plan builder."""
    categories: List[FeatureCategoryResponse]
    tiers: List[UserTierResponse]
    yearly_discount_rate: Decimal
    base_currency: str


# ===========================================
# QUOTE SCHEMAS
# ===========================================

class QuoteRequest(BaseModel):
    """Price a feature selection."""
    selected_feature_ids: List[str] = Field(default_factory=list)
    user_count: int = Field(..., description="Number of users (positive integer)")
    billing_period: BillingPeriod = BillingPeriod.MONTHLY
    currency: Optional[str] = Field(None, min_length=3, max_length=3, description="Display currency (ISO code)")


class ConvertedTotal(BaseModel):
    """Total in the requested display currency."""
    currency: str
    amount: Decimal
    formatted: str


class QuoteResponse(BaseModel):
    """Price breakdown in USD, with an optional converted total."""
    tier: UserTierResponse
    user_count: int
    billing_period: BillingPeriod
    effective_feature_ids: List[str]
    base_user_cost: Decimal
    per_feature_costs: Dict[str, Decimal]
    features_total: Decimal
    subtotal_monthly: Decimal
    yearly_discount_rate: Decimal
    total: Decimal
    annual_savings: Decimal = Field(..., description="Saved per year by billing yearly instead of monthly")
    converted: Optional[ConvertedTotal] = None


# ===========================================
# SELECTION SCHEMAS
# ===========================================

class ToggleFeatureRequest(BaseModel):
    """Select or deselect one feature."""
    selected_feature_ids: List[str] = Field(default_factory=list)
    feature_id: str = Field(..., min_length=1)


class ToggleFeatureResponse(BaseModel):
    """Selection after the toggle and its effective closure."""
    selected_feature_ids: List[str]
    effective_feature_ids: List[str]


# ===========================================
# UPGRADE SCHEMAS
# ===========================================

class UpgradeDeltaRequest(BaseModel):
    """Two tier prices to compare."""
    current_tier_price: Decimal
    target_tier_price: Decimal
    user_count: int
    billing_period: BillingPeriod = BillingPeriod.MONTHLY


class UpgradeDeltaResponse(BaseModel):
    delta: Decimal
    billing_period: BillingPeriod


class UpgradeOptionResponse(BaseModel):
    tier: UserTierResponse
    delta: Decimal


class UpgradeOptionsResponse(BaseModel):
    """Higher tiers and what each would add to the bill."""
    current_tier: UserTierResponse
    billing_period: BillingPeriod
    options: List[UpgradeOptionResponse]


# ===========================================
# CURRENCY SCHEMAS
# ===========================================

class CurrencyResponse(BaseModel):
    """A display currency."""
    code: str
    symbol: str
    name: str
    exchange_rate: Decimal
    minor_unit_digits: int

    @classmethod
    def from_currency(cls, currency: CurrencyInfo) -> "CurrencyResponse":
        return cls(
            code=currency.code,
            symbol=currency.symbol,
            name=currency.name,
            exchange_rate=currency.exchange_rate,
            minor_unit_digits=currency.minor_unit_digits,
        )


class CurrencyListResponse(BaseModel):
    default_currency: str
    currencies: List[CurrencyResponse]


# ===========================================
# FEATURE ACCESS SCHEMAS
# ===========================================

class SubscriptionPayload(BaseModel):
    """An organization's subscription as held by the subscription store."""
    organization_id: str = Field(..., min_length=1)
    status: SubscriptionStatus
    billing_period: BillingPeriod = BillingPeriod.MONTHLY
    user_count: int = Field(1, ge=1)
    feature_ids: List[str] = Field(default_factory=list)
    trial_ends_at: Optional[datetime] = None
    current_period_end: Optional[datetime] = None

    def to_subscription(self) -> SubscriptionInfo:
        return SubscriptionInfo(
            organization_id=self.organization_id,
            status=self.status,
            billing_period=self.billing_period,
            user_count=self.user_count,
            feature_ids=frozenset(self.feature_ids),
            trial_ends_at=self.trial_ends_at,
            current_period_end=self.current_period_end,
        )


class FeatureAccessRequest(BaseModel):
    """Features to check against a subscription (none = no subscription)."""
    subscription: Optional[SubscriptionPayload] = None
    feature_ids: List[str] = Field(..., min_length=1)


class SubscriptionStatusResponse(BaseModel):
    is_active: bool
    is_trial: bool
    days_remaining: int
    status: str


class FeatureAccessResponse(BaseModel):
    """Access per requested feature plus the subscription summary."""
    access: Dict[str, bool]
    effective_feature_ids: List[str]
    subscription_status: SubscriptionStatusResponse
