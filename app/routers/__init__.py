"""
WorkforceOne Pricing - Routers Package

FastAPI route handlers.

Routers:
- pricing: Catalog, quotes, feature selection, tier upgrades, currencies
"""

from app.routers import pricing

__all__ = ["pricing"]
