"""Tests for address synchronization."""

from decimal import Decimal

import httpx
import pytest

from storefront.application.url_sync import (
    InMemoryAddress,
    UrlSynchronizer,
    format_amount,
    hydrate_query,
    publish_query,
)
from storefront.domain.filters import Facet, FilterState
from storefront.domain.value_objects import PriceDomain, PriceRange


def _pairs(query: str) -> set[tuple[str, str]]:
    return set(httpx.QueryParams(query).multi_items())


class TestHydrateQuery:
    """Tests for hydrate_query()."""

    def test_brand_and_min_price(self):
        """Test reading a brand with a lower price bound."""
        filters, price_range = hydrate_query("?brand=titleist&minPrice=100")

        assert filters == FilterState(brand={"titleist"})
        assert price_range.min_price == Decimal("100")
        assert price_range.max_price == Decimal("2000")

    def test_empty_query(self):
        """Test a fresh visit hydrates to the initial state."""
        filters, price_range = hydrate_query("")

        assert filters.is_empty()
        assert price_range.is_default()

    def test_repeated_keys_become_a_set(self):
        """Test every occurrence of a facet key is selected."""
        filters, _ = hydrate_query(
            "category=drivers&category=putters&category=drivers&level=pro"
        )

        assert filters.selected(Facet.CATEGORY) == frozenset({"drivers", "putters"})
        assert filters.selected(Facet.LEVEL) == frozenset({"pro"})

    def test_unknown_keys_ignored(self):
        """Test non-filter keys are left alone."""
        filters, price_range = hydrate_query("utm_source=mail&cursor=abc&sort=x")

        assert filters.is_empty()
        assert price_range.is_default()

    @pytest.mark.parametrize(
        "query",
        [
            "minPrice=abc&maxPrice=",
            "minPrice=NaN&maxPrice=Infinity",
            "minPrice=-50&maxPrice=99999",
        ],
    )
    def test_malformed_prices_fall_back_to_domain(self, query):
        """Test unusable price bounds never raise."""
        _, price_range = hydrate_query(query)

        assert price_range.is_default()

    def test_inverted_prices_snap(self):
        """Test an inverted pair yields a valid range."""
        _, price_range = hydrate_query("minPrice=800&maxPrice=300")

        assert price_range.min_price == Decimal("800")
        assert price_range.max_price == Decimal("800")

    def test_blank_tokens_dropped(self):
        """Test empty facet values are not selected."""
        filters, _ = hydrate_query("brand=&hand=left")

        assert filters.selected(Facet.BRAND) == frozenset()
        assert filters.selected(Facet.HAND) == frozenset({"left"})

    def test_custom_domain(self):
        """Test bounds are clamped to the given domain."""
        domain = PriceDomain(lower=Decimal("0"), upper=Decimal("500"))

        _, price_range = hydrate_query("maxPrice=900", domain)

        assert price_range.is_default()
        assert price_range.domain == domain


class TestPublishQuery:
    """Tests for publish_query()."""

    def test_no_active_filters_is_empty(self):
        """Test the unfiltered state publishes no parameters at all."""
        assert publish_query(FilterState.empty(), PriceRange.full()) == ""

    def test_repeated_facet_entries(self):
        """Test every selected token becomes its own entry."""
        filters = FilterState(brand={"titleist", "ping"}, hand={"left"})

        query = publish_query(filters, PriceRange.full())

        assert _pairs(query) == {
            ("hand", "left"),
            ("brand", "ping"),
            ("brand", "titleist"),
        }
        assert "minPrice" not in query

    def test_price_written_only_when_narrowed(self):
        """Test both bounds are written once the range is narrowed."""
        price_range = PriceRange.full().with_min("150")

        query = publish_query(FilterState.empty(), price_range)

        assert _pairs(query) == {("minPrice", "150"), ("maxPrice", "2000")}

    def test_decimal_bounds_are_plain(self):
        """Test bounds are written without exponent notation."""
        price_range = PriceRange.full().with_bounds("100.50", "1E+3")

        query = publish_query(FilterState.empty(), price_range)

        assert _pairs(query) == {("minPrice", "100.5"), ("maxPrice", "1000")}

    def test_high_precision_bound_is_exact(self):
        """Test bounds keep every significant digit."""
        price_range = PriceRange.full().with_min("100.00000000000000000000000000001")

        query = publish_query(FilterState.empty(), price_range)

        assert ("minPrice", "100.00000000000000000000000000001") in _pairs(query)

    @pytest.mark.parametrize(
        "value,expected",
        [
            (Decimal("150.00"), "150"),
            (Decimal("1E+3"), "1000"),
            (Decimal("0.000"), "0"),
            (Decimal("49.90"), "49.9"),
        ],
    )
    def test_format_amount(self, value, expected):
        """Test trailing zeros and exponents are dropped."""
        assert format_amount(value) == expected

    def test_idempotent(self):
        """Test republishing the same state yields the same string."""
        filters = FilterState(category={"irons", "wedges"}, condition={"good"})
        price_range = PriceRange.full().with_max("700")

        assert publish_query(filters, price_range) == publish_query(
            filters, price_range
        )

    def test_tokens_are_encoded(self):
        """Test special characters survive a round trip."""
        filters = FilterState(brand={"ping & co"})

        query = publish_query(filters, PriceRange.full())

        assert " " not in query
        assert hydrate_query(query)[0] == filters


class TestRoundTrip:
    """Tests for hydrate(publish(state)) == state."""

    @pytest.mark.parametrize(
        "filters,price_range",
        [
            (FilterState.empty(), PriceRange.full()),
            (FilterState(brand={"titleist"}), PriceRange.full().with_min("100")),
            (
                FilterState(
                    hand={"left"},
                    category={"drivers", "putters"},
                    condition={"like-new"},
                    level={"beginner", "pro"},
                ),
                PriceRange.full().with_bounds("49.99", "1250"),
            ),
            (FilterState.empty(), PriceRange.full().with_max("0")),
            (
                FilterState.empty(),
                PriceRange.full().with_min("100.00000000000000000000000000001"),
            ),
        ],
    )
    def test_round_trip(self, filters, price_range):
        """Test reading back a published state gives the same state."""
        assert hydrate_query(publish_query(filters, price_range)) == (
            filters,
            price_range,
        )


class TestUrlSynchronizer:
    """Tests for UrlSynchronizer class."""

    def test_hydrate_reads_address(self):
        """Test hydration from the current address."""
        sync = UrlSynchronizer(InMemoryAddress("?level=advanced"))

        filters, _ = sync.hydrate()

        assert filters.selected(Facet.LEVEL) == frozenset({"advanced"})

    def test_publish_replaces_without_history(self):
        """Test publishing never adds a history entry."""
        address = InMemoryAddress()
        sync = UrlSynchronizer(address)

        sync.publish(FilterState(brand={"ping"}), PriceRange.full())
        sync.publish(FilterState(brand={"ping", "cobra"}), PriceRange.full())

        assert len(address.history) == 1
        assert len(address.replacements) == 2

    def test_last_publish_wins(self):
        """Test rapid publishes converge on the latest state."""
        address = InMemoryAddress("brand=ping")
        sync = UrlSynchronizer(address)

        sync.publish(FilterState(brand={"cobra"}), PriceRange.full())
        sync.publish(FilterState.empty(), PriceRange.full())

        assert address.query == ""

    def test_push_keeps_previous_entry(self):
        """Test navigation pushes are separate from publishes."""
        address = InMemoryAddress("brand=ping")

        address.push("brand=cobra")
        UrlSynchronizer(address).publish(FilterState.empty(), PriceRange.full())

        assert address.history == ["brand=ping", ""]
