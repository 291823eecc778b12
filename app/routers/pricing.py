"""
WorkforceOne Pricing - Pricing Router

API endpoints for the plan builder:
- Feature catalog and user tiers
- Quotes (always a full recalculation)
- Feature select/deselect
- Tier upgrade deltas (display only)
- Display currencies
- Feature access checks against a subscription
"""

import logging
from typing import Mapping

from fastapi import APIRouter, Depends, Path, Query

from app.config.catalog_config import BASE_CURRENCY, YEARLY_DISCOUNT_RATE, get_category_name
from app.config.settings import settings
from app.dependencies import get_currency_table, get_feature_access_service, get_pricing_engine
from app.models.currency import CurrencyInfo
from app.models.pricing_enums import BillingPeriod
from app.models.subscription import utc_now
from app.schemas.pricing import (
    CatalogResponse,
    ConvertedTotal,
    CurrencyListResponse,
    CurrencyResponse,
    FeatureAccessRequest,
    FeatureAccessResponse,
    FeatureCategoryResponse,
    FeatureResponse,
    QuoteRequest,
    QuoteResponse,
    ToggleFeatureRequest,
    ToggleFeatureResponse,
    UpgradeDeltaRequest,
    UpgradeDeltaResponse,
    UpgradeOptionResponse,
    UpgradeOptionsResponse,
    UserTierResponse,
)
from app.services.feature_access_service import FeatureAccessService
from app.services.pricing import (
    PricingEngine,
    annual_savings,
    convert_price,
    format_price,
    get_currency,
    get_currency_by_country,
    upgrade_delta,
)

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api/v1/pricing",
    tags=["Pricing"],
)


# ============================================================================
# CATALOG
# ============================================================================

@router.get("/catalog", response_model=CatalogResponse)
async def get_catalog(engine: PricingEngine = Depends(get_pricing_engine)):
    """
    Get the feature catalog grouped by category, plus the user tier table.

    Empty categories are left out.
    """
    categories = [
        FeatureCategoryResponse(
            category=category,
            name=get_category_name(category),
            features=[FeatureResponse.from_feature(f) for f in features],
        )
        for category, features in engine.features_by_category().items()
        if features
    ]
    return CatalogResponse(
        categories=categories,
        tiers=[UserTierResponse.from_tier(t) for t in engine.tiers],
        yearly_discount_rate=YEARLY_DISCOUNT_RATE,
        base_currency=BASE_CURRENCY,
    )


@router.get("/tiers/resolve", response_model=UserTierResponse)
async def resolve_user_tier(
    user_count: int = Query(..., description="Number of users"),
    engine: PricingEngine = Depends(get_pricing_engine),
):
    """Get the user tier a team size falls in."""
    return UserTierResponse.from_tier(engine.resolve_tier(user_count))


# ============================================================================
# QUOTES
# ============================================================================

@router.post("/quote", response_model=QuoteResponse)
async def create_quote(
    data: QuoteRequest,
    engine: PricingEngine = Depends(get_pricing_engine),
    currencies: Mapping[str, CurrencyInfo] = Depends(get_currency_table),
):
    """
    Price a feature selection.

    Free features and dependencies are added automatically. Amounts are in
    USD at full precision; when a currency is given the total is also
    returned converted and formatted.
    """
    selected = engine.validate_feature_ids(data.selected_feature_ids)
    currency = get_currency(data.currency, currencies) if data.currency else None

    breakdown = engine.quote(selected, data.user_count, data.billing_period)

    converted = None
    if currency is not None:
        converted = ConvertedTotal(
            currency=currency.code,
            amount=convert_price(breakdown.total, currency),
            formatted=format_price(breakdown.total, currency),
        )

    logger.debug(
        f"Quote: {data.user_count} users, {len(breakdown.effective_feature_ids)} features, "
        f"{breakdown.billing_period.value} total={breakdown.total}"
    )

    return QuoteResponse(
        tier=UserTierResponse.from_tier(breakdown.tier),
        user_count=breakdown.user_count,
        billing_period=breakdown.billing_period,
        effective_feature_ids=sorted(breakdown.effective_feature_ids),
        base_user_cost=breakdown.base_user_cost,
        per_feature_costs=dict(breakdown.per_feature_costs),
        features_total=breakdown.features_total,
        subtotal_monthly=breakdown.subtotal_monthly,
        yearly_discount_rate=breakdown.yearly_discount_rate,
        total=breakdown.total,
        annual_savings=annual_savings(breakdown.subtotal_monthly),
        converted=converted,
    )


@router.post("/selection/toggle", response_model=ToggleFeatureResponse)
async def toggle_selection(
    data: ToggleFeatureRequest,
    engine: PricingEngine = Depends(get_pricing_engine),
):
    """
    Select or deselect a feature.

    Selecting adds its dependencies; deselecting also removes every
    feature that depends on it. Free features cannot be toggled.
    """
    selected = engine.validate_feature_ids(data.selected_feature_ids)
    updated = engine.toggle(selected, data.feature_id)
    return ToggleFeatureResponse(
        selected_feature_ids=sorted(updated),
        effective_feature_ids=sorted(engine.normalize(updated)),
    )


# ============================================================================
# TIER UPGRADES
# ============================================================================

@router.post("/upgrade-delta", response_model=UpgradeDeltaResponse)
async def get_upgrade_delta(data: UpgradeDeltaRequest):
    """
    Price difference of moving between two tiers.

    Display only; request a new quote for the authoritative total.
    """
    delta = upgrade_delta(
        data.current_tier_price,
        data.target_tier_price,
        data.user_count,
        data.billing_period,
    )
    return UpgradeDeltaResponse(delta=delta, billing_period=data.billing_period)


@router.get("/upgrade-options", response_model=UpgradeOptionsResponse)
async def get_upgrade_options(
    user_count: int = Query(..., description="Number of users"),
    billing_period: BillingPeriod = Query(BillingPeriod.MONTHLY),
    engine: PricingEngine = Depends(get_pricing_engine),
):
    """List every tier above the current one with its display delta."""
    current = engine.resolve_tier(user_count)
    options = engine.upgrade_options(user_count, billing_period)
    return UpgradeOptionsResponse(
        current_tier=UserTierResponse.from_tier(current),
        billing_period=billing_period,
        options=[
            UpgradeOptionResponse(tier=UserTierResponse.from_tier(o.tier), delta=o.delta)
            for o in options
        ],
    )


# ============================================================================
# CURRENCIES
# ============================================================================

@router.get("/currencies", response_model=CurrencyListResponse)
async def list_currencies(currencies: Mapping[str, CurrencyInfo] = Depends(get_currency_table)):
    """Get all supported display currencies."""
    return CurrencyListResponse(
        default_currency=settings.default_currency,
        currencies=[CurrencyResponse.from_currency(c) for c in currencies.values()],
    )


@router.get("/currencies/{country_code}", response_model=CurrencyResponse)
async def get_country_currency(
    country_code: str = Path(..., min_length=2, max_length=2, description="ISO 3166 country code"),
    currencies: Mapping[str, CurrencyInfo] = Depends(get_currency_table),
):
    """Get the display currency for a country (USD when the country is not mapped)."""
    return CurrencyResponse.from_currency(get_currency_by_country(country_code, currencies))


# ============================================================================
# FEATURE ACCESS
# ============================================================================

@router.post("/features/access", response_model=FeatureAccessResponse)
async def check_feature_access(
    data: FeatureAccessRequest,
    engine: PricingEngine = Depends(get_pricing_engine),
    access_service: FeatureAccessService = Depends(get_feature_access_service),
):
    """
    Check which features a subscription grants.

    Free features are always granted; a live trial grants every feature.
    Without a subscription only free features are granted.
    """
    feature_ids = engine.validate_feature_ids(data.feature_ids)
    subscription = data.subscription.to_subscription() if data.subscription else None
    now = utc_now()

    return FeatureAccessResponse(
        access=access_service.has_features(subscription, sorted(feature_ids), now),
        effective_feature_ids=sorted(access_service.effective_features(subscription)),
        subscription_status=access_service.subscription_status(subscription, now).to_dict(),
    )
