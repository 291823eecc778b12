"""
WorkforceOne Pricing - Pricing Engine

Bundles a feature catalog and a user tier table, validated once, behind the
pricing operations. Holds only immutable reference data, so a single
instance can serve concurrent requests.
"""

import logging
from functools import lru_cache
from typing import Dict, FrozenSet, Iterable, List, Optional, Tuple

from app.config.catalog_config import DEFAULT_FEATURES, DEFAULT_USER_TIERS
from app.models.pricing import Feature, PriceBreakdown, SelectionState, UserTier
from app.models.pricing_enums import BillingPeriod, FeatureCategory
from app.services.pricing.feature_selection import (
    dependency_closure,
    index_catalog,
    normalize,
    toggle_feature,
)
from app.services.pricing.price_calculator import (
    UpgradeOption,
    calculate,
    upgrade_options,
)
from app.services.pricing.tier_resolver import resolve_tier, validate_tiers
from app.utils.error_handling import ConfigurationError, UnknownFeatureException

logger = logging.getLogger(__name__)


class PricingEngine:
    """
    Pricing operations over a fixed catalog and tier table.

    Construction checks the reference data up front:
    - feature ids are unique
    - every dependency names a feature in the catalog
    - the catalog has no dependency cycles
    - the tier table partitions the positive integers
    """

    def __init__(self, features: Iterable[Feature], tiers: Iterable[UserTier]):
        self._features: Tuple[Feature, ...] = tuple(features)
        self._tiers: Tuple[UserTier, ...] = tuple(validate_tiers(tiers))
        self._by_id: Dict[str, Feature] = index_catalog(self._features)

        for feature in self._features:
            missing = sorted(d for d in feature.dependencies if d not in self._by_id)
            if missing:
                raise ConfigurationError(
                    f"Feature '{feature.id}' depends on unknown feature(s): {', '.join(missing)}",
                    details={"feature_id": feature.id, "missing_dependencies": missing},
                )

        # Surfaces any cycle in the catalog now rather than on first quote
        dependency_closure(self._features, self._by_id.keys())

        logger.info(
            f"Pricing engine ready: {len(self._features)} features, {len(self._tiers)} user tiers"
        )

    # =========================================================================
    # REFERENCE DATA
    # =========================================================================

    @property
    def features(self) -> Tuple[Feature, ...]:
        return self._features

    @property
    def tiers(self) -> Tuple[UserTier, ...]:
        return self._tiers

    def get_feature(self, feature_id: str) -> Optional[Feature]:
        return self._by_id.get(feature_id)

    def free_feature_ids(self) -> FrozenSet[str]:
        return frozenset(f.id for f in self._features if f.is_free)

    def features_by_category(self) -> Dict[FeatureCategory, List[Feature]]:
        """Catalog grouped by category, free features first within a group."""
        grouped: Dict[FeatureCategory, List[Feature]] = {c: [] for c in FeatureCategory}
        for feature in self._features:
            grouped[feature.category].append(feature)
        for category in grouped:
            grouped[category].sort(key=lambda f: not f.is_free)
        return grouped

    def validate_feature_ids(self, feature_ids: Iterable[str]) -> FrozenSet[str]:
        """Return the ids as a frozenset, rejecting any not in the catalog."""
        ids = frozenset(feature_ids)
        unknown = ids.difference(self._by_id)
        if unknown:
            raise UnknownFeatureException(unknown)
        return ids

    # =========================================================================
    # PRICING OPERATIONS
    # =========================================================================

    def resolve_tier(self, user_count: int) -> UserTier:
        return resolve_tier(self._tiers, user_count)

    def normalize(self, selected: Iterable[str]) -> FrozenSet[str]:
        return normalize(self._features, selected)

    def toggle(self, selected: Iterable[str], feature_id: str) -> FrozenSet[str]:
        return toggle_feature(self._features, selected, feature_id)

    def quote(
        self,
        selected: Iterable[str],
        user_count: int,
        billing_period: BillingPeriod = BillingPeriod.MONTHLY,
    ) -> PriceBreakdown:
        """Price a selection. Always a full recalculation."""
        selection = SelectionState.create(selected, user_count, billing_period)
        return calculate(self._features, self._tiers, selection)

    def upgrade_options(
        self,
        user_count: int,
        billing_period: BillingPeriod = BillingPeriod.MONTHLY,
    ) -> List[UpgradeOption]:
        return upgrade_options(self._tiers, user_count, billing_period)


@lru_cache()
def get_default_engine() -> PricingEngine:
    """Engine over the built-in catalog and tier table (built once)."""
    return PricingEngine(DEFAULT_FEATURES, DEFAULT_USER_TIERS)
