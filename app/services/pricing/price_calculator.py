"""
WorkforceOne Pricing - Price Calculator

Tiered, feature-based subscription pricing:

    base user cost   = tier per-user price x user count
    feature cost     = unit price x user count   (per-user features)
                     = unit price                (per-organization features)
    subtotal/month   = base user cost + sum(feature costs)
    total            = subtotal                  (monthly)
                     = subtotal x 12 x 0.8       (yearly, 20% discount)

All arithmetic is Decimal and nothing is rounded here.
"""

import logging
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from types import MappingProxyType
from typing import Dict, Iterable, List

from app.config.catalog_config import MONTHS_PER_YEAR, YEARLY_DISCOUNT_RATE
from app.models.pricing import Feature, PriceBreakdown, SelectionState, UserTier, to_decimal
from app.models.pricing_enums import BillingPeriod, BillingUnit
from app.services.pricing.feature_selection import index_catalog, normalize
from app.services.pricing.tier_resolver import resolve_tier, require_positive_user_count
from app.utils.error_handling import InvalidAmountException

logger = logging.getLogger(__name__)

ZERO = Decimal("0")


def yearly_discount_rate(billing_period: BillingPeriod) -> Decimal:
    """Discount applied for the billing period (20% yearly, none monthly)."""
    return YEARLY_DISCOUNT_RATE if BillingPeriod(billing_period) == BillingPeriod.YEARLY else ZERO


def annualize(monthly_amount: Decimal, billing_period: BillingPeriod) -> Decimal:
    """Turn a monthly amount into the amount charged for the billing period."""
    if BillingPeriod(billing_period) == BillingPeriod.YEARLY:
        return monthly_amount * MONTHS_PER_YEAR * (1 - YEARLY_DISCOUNT_RATE)
    return monthly_amount


def annual_savings(subtotal_monthly: Decimal) -> Decimal:
    """What yearly billing saves compared to twelve monthly payments."""
    return subtotal_monthly * MONTHS_PER_YEAR * YEARLY_DISCOUNT_RATE


def feature_cost(feature: Feature, user_count: int) -> Decimal:
    """Monthly cost of one feature. Free features always cost 0."""
    if feature.is_free:
        return ZERO
    if feature.billing_unit == BillingUnit.PER_USER:
        return feature.unit_price * user_count
    return feature.unit_price


def calculate(
    catalog: Iterable[Feature],
    tiers: Iterable[UserTier],
    selection: SelectionState,
) -> PriceBreakdown:
    """
    Price a selection.

    Args:
        catalog: Feature catalog
        tiers: User tier table
        selection: Selected feature ids, user count and billing period

    Returns:
        PriceBreakdown with full-precision Decimal amounts

    Raises:
        InvalidUserCountException: user count is not a positive integer
        ConfigurationError: the tier table does not resolve to exactly one tier
        CyclicDependencyError: the selection reaches a dependency cycle
    """
    catalog = list(catalog)
    user_count = selection.user_count

    tier = resolve_tier(tiers, user_count)
    base_user_cost = tier.per_user_price * user_count

    effective = normalize(catalog, selection.selected_feature_ids)
    by_id = index_catalog(catalog)

    unknown = sorted(fid for fid in effective if fid not in by_id)
    if unknown:
        logger.warning(f"Ignoring feature ids not in catalog: {unknown}")

    costs: Dict[str, Decimal] = {
        fid: feature_cost(by_id[fid], user_count)
        for fid in sorted(effective)
        if fid in by_id
    }
    per_feature_costs = MappingProxyType(costs)

    subtotal_monthly = base_user_cost + sum(costs.values(), ZERO)
    billing_period = BillingPeriod(selection.billing_period)

    return PriceBreakdown(
        tier=tier,
        user_count=user_count,
        billing_period=billing_period,
        effective_feature_ids=effective,
        base_user_cost=base_user_cost,
        per_feature_costs=per_feature_costs,
        subtotal_monthly=subtotal_monthly,
        yearly_discount_rate=yearly_discount_rate(billing_period),
        total=annualize(subtotal_monthly, billing_period),
    )


# =============================================================================
# TIER UPGRADES (display only)
# =============================================================================

@dataclass(frozen=True)
class UpgradeOption:
    """A higher tier and what moving to it would add, for display."""
    tier: UserTier
    delta: Decimal


def _tier_price(value, field: str) -> Decimal:
    try:
        price = to_decimal(value)
    except (InvalidOperation, ValueError):
        raise InvalidAmountException(value, field=field)
    if not price.is_finite() or price < 0:
        raise InvalidAmountException(value, field=field, message=f"Tier price must be a non-negative amount: {value}")
    return price


def upgrade_delta(
    current_tier_price: Decimal,
    target_tier_price: Decimal,
    user_count: int,
    billing_period: BillingPeriod = BillingPeriod.MONTHLY,
) -> Decimal:
    """
    Price difference of moving between two tiers.

    Display only. The authoritative total after an upgrade always comes
    from calculate() with the new inputs.
    """
    require_positive_user_count(user_count)
    current = _tier_price(current_tier_price, "current_tier_price")
    target = _tier_price(target_tier_price, "target_tier_price")
    delta = (target - current) * user_count
    return annualize(delta, billing_period)


def upgrade_options(
    tiers: Iterable[UserTier],
    user_count: int,
    billing_period: BillingPeriod = BillingPeriod.MONTHLY,
) -> List[UpgradeOption]:
    """Every tier above the one user_count falls in, with its display delta."""
    tiers = list(tiers)
    current = resolve_tier(tiers, user_count)
    higher = sorted(
        (t for t in tiers if t.range_start > current.range_start),
        key=lambda t: t.range_start,
    )
    return [
        UpgradeOption(
            tier=tier,
            delta=upgrade_delta(current.per_user_price, tier.per_user_price, user_count, billing_period),
        )
        for tier in higher
    ]
