"""
WorkforceOne Pricing - Feature Selection Tests

Tests for selection normalization (free features, dependency closure,
cycle detection) and the select/deselect transition.
"""

import random
from decimal import Decimal

import pytest

from app.config.catalog_config import DEFAULT_FEATURES, get_free_feature_ids
from app.models.pricing import Feature
from app.models.pricing_enums import BillingUnit, FeatureCategory
from app.services.pricing import (
    dependency_closure,
    dependents_of,
    index_catalog,
    normalize,
    toggle_feature,
)
from app.utils.error_handling import (
    ConfigurationError,
    CyclicDependencyError,
    ErrorCode,
    UnknownFeatureException,
)


def paid(fid, deps=()):
    return Feature(
        id=fid,
        name=fid,
        category=FeatureCategory.PRODUCTIVITY,
        unit_price=Decimal("1"),
        billing_unit=BillingUnit.PER_USER,
        dependencies=frozenset(deps),
    )


class TestNormalize:
    """Tests for normalize()."""

    def test_empty_selection_yields_free_features(self):
        assert normalize(DEFAULT_FEATURES, []) == frozenset(get_free_feature_ids())

    def test_route_optimization_pulls_in_gps_tracking(self):
        effective = normalize(DEFAULT_FEATURES, ["route_optimization"])
        assert {"route_optimization", "gps_tracking"} <= effective

    def test_transitive_dependencies(self, chained_catalog):
        assert normalize(chained_catalog, ["c"]) == frozenset({"a", "b", "c"})

    def test_diamond_dependencies_are_not_a_cycle(self):
        catalog = [paid("base"), paid("left", ["base"]), paid("right", ["base"]), paid("top", ["left", "right"])]
        assert normalize(catalog, ["top"]) == frozenset({"base", "left", "right", "top"})

    def test_idempotent(self, chained_catalog):
        once = normalize(chained_catalog, ["c", "d"])
        assert normalize(chained_catalog, once) == once

    def test_monotonic(self):
        selected = {"route_optimization", "api_access"}
        assert selected <= normalize(DEFAULT_FEATURES, selected)

    def test_unknown_ids_are_kept(self, chained_catalog):
        assert "ghost" in normalize(chained_catalog, ["ghost"])

    def test_catalog_order_does_not_matter(self):
        shuffled = list(DEFAULT_FEATURES)
        random.Random(7).shuffle(shuffled)
        selection = ["route_optimization", "custom_reports"]
        assert normalize(shuffled, selection) == normalize(DEFAULT_FEATURES, selection)

    def test_cycle_is_reported(self):
        catalog = [paid("x", ["y"]), paid("y", ["z"]), paid("z", ["x"])]
        with pytest.raises(CyclicDependencyError) as exc_info:
            normalize(catalog, ["x"])
        assert exc_info.value.code == ErrorCode.CYCLIC_DEPENDENCY
        assert exc_info.value.cycle == ["x", "y", "z", "x"]

    def test_self_dependency_is_a_cycle(self):
        with pytest.raises(CyclicDependencyError):
            normalize([paid("loop", ["loop"])], ["loop"])

    def test_unreachable_cycle_does_not_affect_selection(self):
        catalog = [paid("ok"), paid("x", ["y"]), paid("y", ["x"])]
        assert normalize(catalog, ["ok"]) == frozenset({"ok"})


class TestDependencyClosure:
    """Tests for the catalog helpers."""

    def test_duplicate_ids_rejected(self):
        with pytest.raises(ConfigurationError, match="Duplicate"):
            index_catalog([paid("a"), paid("a")])

    def test_closure_of_leaf(self, chained_catalog):
        assert dependency_closure(chained_catalog, ["a"]) == frozenset({"a"})

    def test_dependents_are_transitive(self, chained_catalog):
        assert dependents_of(chained_catalog, "a") == frozenset({"b", "c", "d"})
        assert dependents_of(chained_catalog, "c") == frozenset()


class TestToggleFeature:
    """Tests for select/deselect."""

    def test_select_adds_dependencies(self):
        result = toggle_feature(DEFAULT_FEATURES, [], "route_optimization")
        assert result == frozenset({"route_optimization", "gps_tracking"})

    def test_deselect_cascades_to_dependents(self):
        selected = {"route_optimization", "gps_tracking", "api_access"}
        result = toggle_feature(DEFAULT_FEATURES, selected, "gps_tracking")
        assert result == frozenset({"api_access"})

    def test_deselect_leaf_keeps_dependencies(self, chained_catalog):
        result = toggle_feature(chained_catalog, {"a", "b", "c"}, "c")
        assert result == frozenset({"a", "b"})

    def test_free_feature_cannot_be_toggled(self):
        selected = frozenset({"api_access"})
        assert toggle_feature(DEFAULT_FEATURES, selected, "mobile_app") == selected

    def test_unknown_feature_rejected(self):
        with pytest.raises(UnknownFeatureException) as exc_info:
            toggle_feature(DEFAULT_FEATURES, [], "teleportation")
        assert exc_info.value.details["unknown_feature_ids"] == ["teleportation"]
