"""
WorkforceOne Pricing - Subscription Record

Read-only view of an organization's subscription as loaded from the
subscription store. Used by feature access checks.

Timestamps are compared as UTC instants; naive datetimes are taken to be UTC.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, FrozenSet, Mapping, Optional, Union

from app.models.pricing_enums import BillingPeriod, SubscriptionStatus


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def as_utc(value: datetime) -> datetime:
    """Aware UTC datetime for value; naive values are treated as UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def parse_timestamp(value: Union[str, datetime, None]) -> Optional[datetime]:
    """Parse a store timestamp (ISO 8601, optionally with a trailing 'Z')."""
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return as_utc(value)
    text = str(value)
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    return as_utc(datetime.fromisoformat(text))


@dataclass(frozen=True)
class SubscriptionInfo:
    """Information about an organization's subscription."""
    organization_id: str
    status: SubscriptionStatus
    billing_period: BillingPeriod
    user_count: int
    feature_ids: FrozenSet[str] = field(default_factory=frozenset)
    trial_ends_at: Optional[datetime] = None
    current_period_end: Optional[datetime] = None

    def is_in_trial(self, now: Optional[datetime] = None) -> bool:
        """Trial status only counts while the trial end date is in the future."""
        if self.status != SubscriptionStatus.TRIAL or self.trial_ends_at is None:
            return False
        return as_utc(self.trial_ends_at) > as_utc(now or utc_now())

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> "SubscriptionInfo":
        """
        Build a subscription from a subscriptions row.

        Timestamps may be ISO strings (as returned by the store) or datetimes.
        Feature ids are read from "feature_ids" or, failing that, "features".
        """
        features = record.get("feature_ids")
        if features is None:
            features = record.get("features") or ()
        return cls(
            organization_id=str(record["organization_id"]),
            status=SubscriptionStatus(record["status"]),
            billing_period=BillingPeriod(record.get("billing_period", BillingPeriod.MONTHLY.value)),
            user_count=int(record.get("user_count", 1)),
            feature_ids=frozenset(features),
            trial_ends_at=parse_timestamp(record.get("trial_ends_at")),
            current_period_end=parse_timestamp(record.get("current_period_end")),
        )
