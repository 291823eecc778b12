"""
WorkforceOne Pricing - Tier Resolver Tests

Tests for:
- Tier selection at band boundaries
- User count validation
- Tier table validation (gaps, overlaps, unbounded top tier)
"""

from decimal import Decimal

import pytest

from app.config.catalog_config import DEFAULT_USER_TIERS
from app.models.pricing import UserTier
from app.services.pricing import resolve_tier, validate_tiers
from app.utils.error_handling import ConfigurationError, ErrorCode, InvalidUserCountException


def tier(start, end, price="1"):
    return UserTier(range_start=start, range_end=end, per_user_price=Decimal(price))


class TestResolveTier:
    """Tests for mapping a user count onto its tier."""

    @pytest.mark.parametrize("user_count,expected_start", [
        (1, 1), (10, 1), (11, 11), (50, 11), (51, 51), (200, 51), (201, 201), (100000, 201),
    ])
    def test_default_tier_boundaries(self, user_count, expected_start):
        """Both range ends are inclusive."""
        assert resolve_tier(DEFAULT_USER_TIERS, user_count).range_start == expected_start

    def test_every_count_matches_its_tier(self):
        for user_count in range(1, 301):
            assert resolve_tier(DEFAULT_USER_TIERS, user_count).contains(user_count)

    def test_example_tiers(self, example_tiers):
        assert resolve_tier(example_tiers, 25).per_user_price == Decimal("2")
        assert resolve_tier(example_tiers, 10).per_user_price == Decimal("0")

    @pytest.mark.parametrize("user_count", [0, -1, 2.5, "10", True, None])
    def test_rejects_invalid_user_count(self, example_tiers, user_count):
        with pytest.raises(InvalidUserCountException) as exc_info:
            resolve_tier(example_tiers, user_count)
        assert exc_info.value.code == ErrorCode.INVALID_USER_COUNT
        assert exc_info.value.status_code == 422

    def test_overlapping_table_is_configuration_error(self):
        tiers = [tier(1, 10), tier(5, None)]
        with pytest.raises(ConfigurationError) as exc_info:
            resolve_tier(tiers, 7)
        assert exc_info.value.status_code == 500
        assert exc_info.value.details["user_count"] == 7

    def test_uncovered_count_is_configuration_error(self):
        with pytest.raises(ConfigurationError):
            resolve_tier([tier(1, 10)], 11)


class TestValidateTiers:
    """Tests for tier table validation."""

    def test_default_table_is_valid(self):
        ordered = validate_tiers(DEFAULT_USER_TIERS)
        assert [t.range_start for t in ordered] == [1, 11, 51, 201]

    def test_returns_tiers_sorted_by_start(self):
        shuffled = [tier(11, None), tier(1, 10)]
        assert [t.range_start for t in validate_tiers(shuffled)] == [1, 11]

    def test_empty_table(self):
        with pytest.raises(ConfigurationError):
            validate_tiers([])

    def test_must_start_at_one(self):
        with pytest.raises(ConfigurationError, match="gap"):
            validate_tiers([tier(2, None)])

    def test_gap(self):
        with pytest.raises(ConfigurationError, match="gap at 11"):
            validate_tiers([tier(1, 10), tier(12, None)])

    def test_overlap(self):
        with pytest.raises(ConfigurationError, match="overlap"):
            validate_tiers([tier(1, 10), tier(10, None)])

    def test_missing_unbounded_tier(self):
        with pytest.raises(ConfigurationError, match="no unbounded"):
            validate_tiers([tier(1, 10), tier(11, 50)])

    def test_unbounded_tier_must_be_last(self):
        with pytest.raises(ConfigurationError):
            validate_tiers([tier(1, None), tier(11, 50)])

    def test_inverted_range(self):
        with pytest.raises(ConfigurationError, match="ends before it starts"):
            validate_tiers([tier(1, 0), tier(1, None)])

    def test_negative_price(self):
        with pytest.raises(ConfigurationError, match="negative"):
            validate_tiers([tier(1, None, "-1")])


class TestUserTierRecord:
    """Tests for building tiers from user_tier_pricing rows."""

    def test_from_record_with_column_names(self):
        record = {"min_users": 11, "max_users": 50, "price_per_user": 2.0, "name": "Small Team"}
        result = UserTier.from_record(record)
        assert result.range_start == 11
        assert result.range_end == 50
        assert result.per_user_price == Decimal("2.0")

    def test_from_record_unbounded(self):
        result = UserTier.from_record({"min_users": 201, "max_users": None, "price_per_user": "6"})
        assert result.is_unbounded
        assert result.contains(10 ** 6)
