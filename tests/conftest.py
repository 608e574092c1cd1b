"""Test fixtures for storefront tests."""

from decimal import Decimal

import pytest
from fastapi.testclient import TestClient

# Reset global stores before importing app
import storefront.catalog.store as store_module
from storefront.domain.value_objects import (
    Price,
    ProductRecord,
    ProductVariant,
    SelectedOption,
)


@pytest.fixture(autouse=True)
def reset_stores():
    """Reset global stores before each test."""
    store_module._catalog_store = None
    yield
    store_module._catalog_store = None


@pytest.fixture
def client():
    """Create test client."""
    from storefront.main import app
    with TestClient(app) as client:
        yield client


@pytest.fixture
def catalog_store():
    """Create catalog store for testing."""
    from storefront.catalog.store import GolfCatalogStore
    return GolfCatalogStore(seed=42, products_per_category=3)


@pytest.fixture
def make_product():
    """Factory for product records with sensible defaults."""

    def _make(
        title: str = "Titleist TSR2 Driver - Right Handed",
        price: str | None = "100.0",
        tags: tuple[str, ...] = (),
        handle: str | None = None,
        product_id: str | None = None,
        options: tuple[tuple[str, str], ...] = (("Hand", "Right"),),
    ) -> ProductRecord:
        handle = handle or title.lower().replace(" ", "-")
        product_id = product_id or f"gid://shopify/Product/{handle}"
        return ProductRecord(
            id=product_id,
            title=title,
            handle=handle,
            tags=frozenset(tags),
            min_variant_price=Price(amount=price),
            variants=(
                ProductVariant(
                    id=f"{product_id}/variant",
                    selected_options=tuple(
                        SelectedOption(name=n, value=v) for n, v in options
                    ),
                ),
            ),
        )

    return _make


@pytest.fixture
def scenario_products(make_product):
    """Three-product catalog used by the filter scenarios.

    P1 Titleist Driver 250 (drivers, good), P2 Ping Putter 120 (putters,
    like-new), P3 Titleist Irons 900 (irons, fair).
    """
    return [
        make_product(
            title="Titleist Driver", price="250", tags=("drivers", "good"),
            handle="p1",
        ),
        make_product(
            title="Ping Putter", price="120", tags=("putters", "like-new"),
            handle="p2",
        ),
        make_product(
            title="Titleist Irons", price="900", tags=("irons", "fair"),
            handle="p3",
        ),
    ]


@pytest.fixture
def domain():
    from storefront.domain.value_objects import PriceDomain
    return PriceDomain(lower=Decimal("0"), upper=Decimal("2000"))
