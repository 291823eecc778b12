"""
WorkforceOne Pricing - Tier Resolver

Maps a team size onto its user tier. A tier table must partition the
positive integers starting at 1: no gaps, no overlaps, and exactly one
unbounded top band.
"""

import logging
from typing import Iterable, List

from app.models.pricing import UserTier
from app.utils.error_handling import ConfigurationError, InvalidUserCountException

logger = logging.getLogger(__name__)


def require_positive_user_count(user_count: int) -> None:
    if isinstance(user_count, bool) or not isinstance(user_count, int) or user_count < 1:
        raise InvalidUserCountException(user_count)


def resolve_tier(tiers: Iterable[UserTier], user_count: int) -> UserTier:
    """
    Select the unique tier whose range contains user_count.

    Args:
        tiers: The tier table
        user_count: Number of users (positive integer)

    Returns:
        The matching UserTier

    Raises:
        InvalidUserCountException: user_count is not a positive integer
        ConfigurationError: zero or several tiers match
    """
    require_positive_user_count(user_count)

    matches = [tier for tier in tiers if tier.contains(user_count)]
    if len(matches) != 1:
        logger.error(f"Tier table matched {len(matches)} tiers for {user_count} users")
        raise ConfigurationError(
            f"Expected exactly one user tier for {user_count} users, found {len(matches)}",
            details={
                "user_count": user_count,
                "matching_tiers": [t.name or f"{t.range_start}-{t.range_end}" for t in matches],
            },
        )
    return matches[0]


def validate_tiers(tiers: Iterable[UserTier]) -> List[UserTier]:
    """
    Check that a tier table partitions the positive integers.

    Returns the tiers ordered by range_start.

    Raises:
        ConfigurationError: on an empty table, gaps, overlaps, inverted
            ranges, negative prices, or a missing/misplaced unbounded tier
    """
    ordered = sorted(tiers, key=lambda t: t.range_start)
    if not ordered:
        raise ConfigurationError("User tier table is empty")

    expected_start = 1
    for index, tier in enumerate(ordered):
        label = tier.name or f"{tier.range_start}-{tier.range_end if tier.range_end is not None else '+'}"

        if tier.per_user_price < 0:
            raise ConfigurationError(
                f"Tier '{label}' has a negative per-user price",
                details={"tier": label, "per_user_price": str(tier.per_user_price)},
            )
        if tier.range_end is not None and tier.range_end < tier.range_start:
            raise ConfigurationError(
                f"Tier '{label}' ends before it starts",
                details={"tier": label},
            )
        if tier.range_start != expected_start:
            problem = "gap" if tier.range_start > expected_start else "overlap"
            raise ConfigurationError(
                f"Tier table has a {problem} at {expected_start} users",
                details={"tier": label, "expected_start": expected_start, "actual_start": tier.range_start},
            )
        if tier.range_end is None:
            if index != len(ordered) - 1:
                raise ConfigurationError(
                    f"Unbounded tier '{label}' must be the last tier",
                    details={"tier": label},
                )
            return ordered
        expected_start = tier.range_end + 1

    raise ConfigurationError(
        f"Tier table has no unbounded top tier; {expected_start}+ users are not covered",
        details={"expected_start": expected_start},
    )
