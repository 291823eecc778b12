"""
WorkforceOne Pricing - Pricing Models

Immutable value objects consumed and produced by the pricing engine.

Features and user tiers are reference data owned by the catalog provider;
a SelectionState is what the caller wants priced; a PriceBreakdown is the
result. None of these are persisted by this package.
"""

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, FrozenSet, Iterable, Mapping, Optional

from app.models.pricing_enums import BillingPeriod, BillingUnit, FeatureCategory
from app.utils.error_handling import ConfigurationError


# Catalog rows coming from the subscription database use "user" and
# "organization" for the billing unit.
_BILLING_UNIT_ALIASES = {
    "user": BillingUnit.PER_USER,
    "per_user": BillingUnit.PER_USER,
    "organization": BillingUnit.PER_ORGANIZATION,
    "per_organization": BillingUnit.PER_ORGANIZATION,
}


def to_decimal(value: Any) -> Decimal:
    """Convert a price to Decimal without going through binary float repr."""
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def _optional_int(value: Any) -> Optional[int]:
    return None if value is None else int(value)


@dataclass(frozen=True)
class Feature:
    """A priced capability in the feature catalog."""
    id: str
    name: str
    category: FeatureCategory
    unit_price: Decimal
    billing_unit: BillingUnit
    is_free: bool = False
    dependencies: FrozenSet[str] = field(default_factory=frozenset)
    popular: bool = False
    description: str = ""

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> "Feature":
        """
        Build a Feature from a catalog row.

        Accepts both the engine's own field names and the column names used
        by the features table (feature_key, base_price, billing_unit of
        "user"/"organization").
        """
        feature_id = record.get("feature_key") or record["id"]
        price = record.get("unit_price", record.get("base_price", 0))
        unit = record.get("billing_unit", BillingUnit.PER_ORGANIZATION.value)
        billing_unit = _BILLING_UNIT_ALIASES.get(getattr(unit, "value", unit))
        if billing_unit is None:
            raise ConfigurationError(
                f"Feature '{feature_id}' has unknown billing unit: {unit}",
                details={"feature_id": str(feature_id), "billing_unit": str(unit)},
            )
        return cls(
            id=str(feature_id),
            name=record.get("name", str(feature_id)),
            category=FeatureCategory(record.get("category", FeatureCategory.CORE.value)),
            unit_price=to_decimal(price),
            billing_unit=billing_unit,
            is_free=bool(record.get("is_free", False)),
            dependencies=frozenset(record.get("dependencies") or ()),
            popular=bool(record.get("popular", False)),
            description=record.get("description", ""),
        )


@dataclass(frozen=True)
class UserTier:
    """A team-size band with a flat per-user price."""
    range_start: int
    range_end: Optional[int]  # None = unbounded
    per_user_price: Decimal
    name: str = ""

    def contains(self, user_count: int) -> bool:
        """Whether user_count falls inside this band (both ends inclusive)."""
        if user_count < self.range_start:
            return False
        return self.range_end is None or user_count <= self.range_end

    @property
    def is_unbounded(self) -> bool:
        return self.range_end is None

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> "UserTier":
        """Build a tier from a user_tier_pricing row (min_users/max_users/price_per_user)."""
        return cls(
            range_start=int(record.get("range_start", record.get("min_users"))),
            range_end=_optional_int(record.get("range_end", record.get("max_users"))),
            per_user_price=to_decimal(record.get("per_user_price", record.get("price_per_user", 0))),
            name=record.get("name", ""),
        )


@dataclass(frozen=True)
class SelectionState:
    """What the caller wants priced."""
    selected_feature_ids: FrozenSet[str]
    user_count: int
    billing_period: BillingPeriod = BillingPeriod.MONTHLY

    @classmethod
    def create(
        cls,
        selected_feature_ids: Iterable[str],
        user_count: int,
        billing_period: BillingPeriod = BillingPeriod.MONTHLY,
    ) -> "SelectionState":
        return cls(
            selected_feature_ids=frozenset(selected_feature_ids),
            user_count=user_count,
            billing_period=BillingPeriod(billing_period),
        )


@dataclass(frozen=True)
class PriceBreakdown:
    """
    Result of a price calculation.

    Amounts carry full Decimal precision; rounding to a currency's minor unit
    happens only when formatting for display.
    """
    tier: UserTier
    user_count: int
    billing_period: BillingPeriod
    effective_feature_ids: FrozenSet[str]
    base_user_cost: Decimal
    per_feature_costs: Mapping[str, Decimal]  # read-only view
    subtotal_monthly: Decimal
    yearly_discount_rate: Decimal
    total: Decimal

    @property
    def features_total(self) -> Decimal:
        return sum(self.per_feature_costs.values(), Decimal("0"))

