"""
WorkforceOne Pricing - Feature Access Tests

Tests for feature gating and subscription status summaries.
"""

from datetime import datetime, timedelta, timezone

import pytest

from app.config.catalog_config import DEFAULT_FEATURES
from app.models.pricing_enums import BillingPeriod, SubscriptionStatus
from app.models.subscription import SubscriptionInfo
from app.services.feature_access_service import FeatureAccessService

NOW = datetime(2026, 3, 1, 12, 0, 0)


def subscription(status=SubscriptionStatus.ACTIVE, features=(), trial_ends_at=None, period_end=None):
    return SubscriptionInfo(
        organization_id="org-1",
        status=status,
        billing_period=BillingPeriod.MONTHLY,
        user_count=12,
        feature_ids=frozenset(features),
        trial_ends_at=trial_ends_at,
        current_period_end=period_end,
    )


@pytest.fixture
def service():
    return FeatureAccessService(DEFAULT_FEATURES)


class TestHasFeature:
    """Tests for has_feature()."""

    def test_free_feature_without_subscription(self, service):
        assert service.has_feature(None, "mobile_app", NOW) is True

    def test_paid_feature_without_subscription(self, service):
        assert service.has_feature(None, "gps_tracking", NOW) is False

    def test_subscribed_feature(self, service):
        sub = subscription(features=["gps_tracking"])
        assert service.has_feature(sub, "gps_tracking", NOW) is True
        assert service.has_feature(sub, "api_access", NOW) is False

    def test_live_trial_unlocks_everything(self, service):
        sub = subscription(SubscriptionStatus.TRIAL, trial_ends_at=NOW + timedelta(days=3))
        assert service.has_feature(sub, "dedicated_manager", NOW) is True

    def test_expired_trial_falls_back_to_subscribed_features(self, service):
        sub = subscription(SubscriptionStatus.TRIAL, features=["time_tracking"], trial_ends_at=NOW - timedelta(seconds=1))
        assert service.has_feature(sub, "dedicated_manager", NOW) is False
        assert service.has_feature(sub, "time_tracking", NOW) is True

    def test_has_features_batch(self, service):
        sub = subscription(features=["api_access"])
        result = service.has_features(sub, ["api_access", "sso_integration", "basic_tasks"], NOW)
        assert result == {"api_access": True, "sso_integration": False, "basic_tasks": True}

    def test_effective_features_include_free(self, service):
        sub = subscription(features=["api_access"])
        effective = service.effective_features(sub)
        assert "api_access" in effective
        assert "team_management" in effective
        assert "gps_tracking" not in service.effective_features(None)


class TestSubscriptionStatus:
    """Tests for subscription_status()."""

    def test_no_subscription(self, service):
        summary = service.subscription_status(None, NOW)
        assert summary.is_active is False
        assert summary.days_remaining == 0
        assert summary.status == "none"

    def test_trial_days_round_up(self, service):
        sub = subscription(SubscriptionStatus.TRIAL, trial_ends_at=NOW + timedelta(days=2, hours=1))
        summary = service.subscription_status(sub, NOW)
        assert summary.is_trial is True
        assert summary.is_active is True
        assert summary.days_remaining == 3
        assert summary.status == "trial"

    def test_active_counts_to_period_end(self, service):
        sub = subscription(period_end=NOW + timedelta(days=10))
        summary = service.subscription_status(sub, NOW)
        assert summary.is_active is True
        assert summary.is_trial is False
        assert summary.days_remaining == 10

    def test_past_period_end_floors_at_zero(self, service):
        sub = subscription(SubscriptionStatus.PAST_DUE, period_end=NOW - timedelta(days=4))
        summary = service.subscription_status(sub, NOW)
        assert summary.is_active is False
        assert summary.days_remaining == 0
        assert summary.to_dict()["status"] == "past_due"


class TestTimezoneHandling:
    """Store timestamps are timezone-aware; checks compare instants."""

    def test_aware_trial_end_with_default_now(self, service):
        sub = subscription(SubscriptionStatus.TRIAL, trial_ends_at=datetime.now(timezone.utc) + timedelta(days=3))
        assert service.has_feature(sub, "api_access") is True
        assert service.has_features(sub, ["api_access"]) == {"api_access": True}

        summary = service.subscription_status(sub)
        assert summary.is_trial is True
        assert summary.days_remaining == 3

    def test_aware_period_end_against_naive_now(self, service):
        end = datetime(2026, 3, 5, 12, 0, 0, tzinfo=timezone(timedelta(hours=2)))
        summary = service.subscription_status(subscription(period_end=end), NOW)
        # 10:00 UTC on the 5th is 3 days 22 hours after NOW
        assert summary.days_remaining == 4

    def test_expired_aware_trial(self, service):
        sub = subscription(SubscriptionStatus.TRIAL, trial_ends_at=datetime.now(timezone.utc) - timedelta(minutes=1))
        assert service.has_feature(sub, "api_access") is False


class TestSubscriptionRecord:
    """Tests for SubscriptionInfo.from_record()."""

    def test_parses_store_timestamps(self, service):
        record = {
            "organization_id": "org-9",
            "status": "trial",
            "billing_period": "yearly",
            "user_count": "40",
            "features": ["gps_tracking"],
            "trial_ends_at": "2026-03-04T12:00:00Z",
            "current_period_end": "2026-04-01T00:00:00+00:00",
        }
        sub = SubscriptionInfo.from_record(record)
        assert sub.status == SubscriptionStatus.TRIAL
        assert sub.billing_period == BillingPeriod.YEARLY
        assert sub.user_count == 40
        assert sub.feature_ids == frozenset({"gps_tracking"})
        assert sub.trial_ends_at == datetime(2026, 3, 4, 12, 0, 0, tzinfo=timezone.utc)
        assert service.subscription_status(sub, NOW).days_remaining == 3

    def test_missing_timestamps(self):
        sub = SubscriptionInfo.from_record({"organization_id": 7, "status": "active"})
        assert sub.organization_id == "7"
        assert sub.trial_ends_at is None
        assert sub.current_period_end is None
        assert sub.feature_ids == frozenset()
