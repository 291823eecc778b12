"""
WorkforceOne Pricing - Feature Access Service

Answers "may this organization use feature X?" from a subscription record
and the feature catalog.

Rules:
- Free features are always available.
- No subscription means no paid features.
- A live trial unlocks every feature.
- Otherwise the feature must be part of the subscription.
"""

import logging
import math
from dataclasses import dataclass
from datetime import datetime
from typing import Dict, FrozenSet, Iterable, Optional

from app.models.pricing import Feature
from app.models.pricing_enums import SubscriptionStatus
from app.models.subscription import SubscriptionInfo, as_utc, utc_now

logger = logging.getLogger(__name__)

SECONDS_PER_DAY = 24 * 60 * 60


@dataclass(frozen=True)
class SubscriptionStatusSummary:
    """Status summary shown on the subscription page."""
    is_active: bool
    is_trial: bool
    days_remaining: int
    status: str

    def to_dict(self) -> Dict[str, object]:
        return {
            "is_active": self.is_active,
            "is_trial": self.is_trial,
            "days_remaining": self.days_remaining,
            "status": self.status,
        }


class FeatureAccessService:
    """Feature access checks over a fixed catalog."""

    def __init__(self, catalog: Iterable[Feature]):
        self._catalog: Dict[str, Feature] = {f.id: f for f in catalog}
        self._free_ids: FrozenSet[str] = frozenset(
            fid for fid, f in self._catalog.items() if f.is_free
        )

    def effective_features(self, subscription: Optional[SubscriptionInfo]) -> FrozenSet[str]:
        """Subscribed feature ids plus every free feature."""
        if subscription is None:
            return self._free_ids
        return frozenset(subscription.feature_ids) | self._free_ids

    def has_feature(
        self,
        subscription: Optional[SubscriptionInfo],
        feature_id: str,
        now: Optional[datetime] = None,
    ) -> bool:
        """Check whether the subscription grants access to a feature."""
        if feature_id in self._free_ids:
            return True

        if subscription is None:
            return False

        now = as_utc(now or utc_now())
        if subscription.is_in_trial(now):
            return True

        return feature_id in subscription.feature_ids

    def has_features(
        self,
        subscription: Optional[SubscriptionInfo],
        feature_ids: Iterable[str],
        now: Optional[datetime] = None,
    ) -> Dict[str, bool]:
        """Check multiple features at once."""
        now = as_utc(now or utc_now())
        return {fid: self.has_feature(subscription, fid, now) for fid in feature_ids}

    def subscription_status(
        self,
        subscription: Optional[SubscriptionInfo],
        now: Optional[datetime] = None,
    ) -> SubscriptionStatusSummary:
        """
        Summarize a subscription.

        days_remaining counts whole days (rounded up) until the trial end
        during a live trial, otherwise until the current period end.
        """
        if subscription is None:
            return SubscriptionStatusSummary(
                is_active=False,
                is_trial=False,
                days_remaining=0,
                status="none",
            )

        now = as_utc(now or utc_now())
        is_trial = subscription.is_in_trial(now)
        is_active = subscription.status == SubscriptionStatus.ACTIVE or is_trial

        end = subscription.trial_ends_at if is_trial else subscription.current_period_end
        days_remaining = 0
        if end is not None:
            days_remaining = max(0, math.ceil((as_utc(end) - now).total_seconds() / SECONDS_PER_DAY))

        return SubscriptionStatusSummary(
            is_active=is_active,
            is_trial=is_trial,
            days_remaining=days_remaining,
            status=subscription.status.value,
        )
