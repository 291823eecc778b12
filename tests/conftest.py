"""
WorkforceOne Pricing - Test Configuration

Pytest fixtures and configuration.
"""

from decimal import Decimal
from typing import AsyncGenerator, List

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport

from app.dependencies import get_pricing_engine
from app.models.pricing import Feature, UserTier
from app.models.pricing_enums import BillingUnit, FeatureCategory
from app.services.pricing import PricingEngine
from main import app


# ===========================================
# CATALOG FIXTURES
# ===========================================

@pytest.fixture
def example_tiers() -> List[UserTier]:
    """Two-band tier table: 1-10 free, 11+ at $2/user."""
    return [
        UserTier(range_start=1, range_end=10, per_user_price=Decimal("0"), name="Starter"),
        UserTier(range_start=11, range_end=None, per_user_price=Decimal("2"), name="Team"),
    ]


@pytest.fixture
def example_catalog() -> List[Feature]:
    """Small catalog: one free feature, a per-user feature and a per-organization feature."""
    return [
        Feature(
            id="core",
            name="Core",
            category=FeatureCategory.CORE,
            unit_price=Decimal("0"),
            billing_unit=BillingUnit.PER_ORGANIZATION,
            is_free=True,
        ),
        Feature(
            id="featureA",
            name="Feature A",
            category=FeatureCategory.PRODUCTIVITY,
            unit_price=Decimal("3"),
            billing_unit=BillingUnit.PER_USER,
        ),
        Feature(
            id="featureB",
            name="Feature B",
            category=FeatureCategory.ANALYTICS,
            unit_price=Decimal("50"),
            billing_unit=BillingUnit.PER_ORGANIZATION,
        ),
    ]


@pytest.fixture
def chained_catalog() -> List[Feature]:
    """c depends on b, b depends on a; d depends on a."""
    def feature(fid, deps=()):
        return Feature(
            id=fid,
            name=fid.upper(),
            category=FeatureCategory.PRODUCTIVITY,
            unit_price=Decimal("1"),
            billing_unit=BillingUnit.PER_USER,
            dependencies=frozenset(deps),
        )

    return [feature("a"), feature("b", ["a"]), feature("c", ["b"]), feature("d", ["a"])]


@pytest.fixture
def example_engine(example_catalog, example_tiers) -> PricingEngine:
    return PricingEngine(example_catalog, example_tiers)


# ===========================================
# CLIENT FIXTURES
# ===========================================

@pytest_asyncio.fixture(scope="function")
async def client() -> AsyncGenerator[AsyncClient, None]:
    """Test client over the app with the built-in catalog."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest_asyncio.fixture(scope="function")
async def example_client(example_engine: PricingEngine) -> AsyncGenerator[AsyncClient, None]:
    """Test client with the pricing engine swapped for the example catalog."""
    app.dependency_overrides[get_pricing_engine] = lambda: example_engine

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()
