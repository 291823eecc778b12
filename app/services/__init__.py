"""
WorkforceOne Pricing - Services Package

Business logic services.
"""

from app.services.exchange_rate_service import ExchangeRateService
from app.services.feature_access_service import FeatureAccessService, SubscriptionStatusSummary
