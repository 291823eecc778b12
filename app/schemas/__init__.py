"""
WorkforceOne Pricing - Schemas Package

Pydantic schemas for request/response validation.
"""

from app.schemas.pricing import (
    # Catalog
    FeatureResponse,
    UserTierResponse,
    FeatureCategoryResponse,
    CatalogResponse,
    # Quote
    QuoteRequest,
    ConvertedTotal,
    QuoteResponse,
    # Selection
    ToggleFeatureRequest,
    ToggleFeatureResponse,
    # Upgrades
    UpgradeDeltaRequest,
    UpgradeDeltaResponse,
    UpgradeOptionResponse,
    UpgradeOptionsResponse,
    # Currency
    CurrencyResponse,
    CurrencyListResponse,
    # Feature access
    SubscriptionPayload,
    FeatureAccessRequest,
    SubscriptionStatusResponse,
    FeatureAccessResponse,
)
