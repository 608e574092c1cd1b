"""Tests for the predicate engine."""

from decimal import Decimal

from storefront.catalog.predicates import (
    filter_products,
    include,
    matches_facet,
    visible_products,
)
from storefront.domain.filters import Facet, FilterState
from storefront.domain.value_objects import PriceRange
from storefront.domain.view_state import SortKey, ViewState


def _titles(products):
    return [p.title for p in products]


class TestMatchesFacet:
    """Tests for per-facet matching rules."""

    def test_empty_tokens_never_exclude(self, make_product):
        """Test an unconstrained facet matches everything."""
        product = make_product(tags=())

        for facet in Facet:
            assert matches_facet(product, facet, [])

    def test_category_matches_tag(self, make_product):
        """Test category matches by tag."""
        product = make_product(title="Mystery Club", tags=("drivers",))

        assert matches_facet(product, Facet.CATEGORY, ["drivers"])

    def test_category_falls_back_to_title(self, make_product):
        """Test category matches by title substring when untagged."""
        product = make_product(title="Cobra King Putter", tags=())

        assert matches_facet(product, Facet.CATEGORY, ["putter"])

    def test_condition_requires_tag(self, make_product):
        """Test condition never matches by title."""
        product = make_product(title="Like New Driver", tags=("good",))

        assert matches_facet(product, Facet.CONDITION, ["good"])
        assert not matches_facet(product, Facet.CONDITION, ["like-new"])

    def test_tags_compared_case_insensitively(self, make_product):
        """Test tag comparison ignores case on both sides."""
        product = make_product(tags=("Advanced",))

        assert matches_facet(product, Facet.LEVEL, ["advanced"])
        assert matches_facet(product, Facet.LEVEL, ["ADVANCED"])

    def test_brand_matches_title_substring(self, make_product):
        """Test brand matches by case-insensitive title substring."""
        product = make_product(title="TaylorMade Stealth 2 Driver")

        assert matches_facet(product, Facet.BRAND, ["taylormade"])
        assert not matches_facet(product, Facet.BRAND, ["callaway"])

    def test_hand_matches_title(self, make_product):
        """Test hand matches the handedness wording in the title."""
        product = make_product(title="PING G430 Driver - Left Handed")

        assert matches_facet(product, Facet.HAND, ["left"])
        assert not matches_facet(product, Facet.HAND, ["right"])

    def test_title_matching_is_loose(self, make_product):
        """Test substring matching can hit unrelated words."""
        product = make_product(title="Free Shipping Wedge")

        assert matches_facet(product, Facet.BRAND, ["ping"])

    def test_tokens_within_facet_are_or(self, make_product):
        """Test any selected token may match."""
        product = make_product(title="Callaway Paradym Driver")

        assert matches_facet(product, Facet.BRAND, ["titleist", "callaway"])


class TestInclude:
    """Tests for include()."""

    def test_no_filters_include_everything(self, scenario_products):
        """Test the no-op filter keeps every priced product."""
        for product in scenario_products:
            assert include(product, FilterState.empty(), PriceRange.full())

    def test_facets_are_and(self, scenario_products):
        """Test all active facets must match."""
        filters = (
            FilterState.empty()
            .toggle(Facet.BRAND, "titleist")
            .toggle(Facet.CONDITION, "fair")
        )

        result = filter_products(scenario_products, filters, PriceRange.full())

        assert _titles(result) == ["Titleist Irons"]

    def test_price_bounds_inclusive(self, make_product):
        """Test products priced at either bound are included."""
        price_range = PriceRange.full().with_bounds(100, 200)

        assert include(make_product(price="100"), FilterState.empty(), price_range)
        assert include(make_product(price="200"), FilterState.empty(), price_range)
        assert not include(
            make_product(price="200.01"), FilterState.empty(), price_range
        )

    def test_unparsable_price_excluded(self, make_product):
        """Test missing or malformed prices fail the price predicate."""
        for price in (None, "", "free"):
            product = make_product(price=price)
            assert not include(product, FilterState.empty(), PriceRange.full())

    def test_untagged_product(self, make_product):
        """Test a product without tags never matches tag facets."""
        product = make_product(title="Titleist Driver", tags=())
        filters = FilterState.empty().toggle(Facet.LEVEL, "pro")

        assert not include(product, filters, PriceRange.full())

    def test_include_is_pure(self, scenario_products):
        """Test repeated evaluation gives identical results."""
        filters = FilterState.empty().toggle(Facet.BRAND, "titleist")
        price_range = PriceRange.full().with_min("200")

        first = filter_products(scenario_products, filters, price_range)
        second = filter_products(scenario_products, filters, price_range)

        assert first == second
        assert len(scenario_products) == 3


class TestScenarios:
    """End-to-end filter scenarios over a two-product page."""

    def _page(self, make_product):
        return [
            make_product(title="Titleist Driver", tags=("drivers",), price="199"),
            make_product(
                title="Callaway Putter", tags=("putters", "new"), price="149"
            ),
        ]

    def test_category_filter(self, make_product):
        """Test filtering by category."""
        state = ViewState(filters=FilterState(category={"drivers"}))

        result = visible_products(self._page(make_product), state)

        assert _titles(result) == ["Titleist Driver"]

    def test_price_filter(self, make_product):
        """Test filtering by minimum price."""
        state = ViewState(
            price_range=PriceRange(min_price=Decimal("150"), max_price=Decimal("2000"))
        )

        result = visible_products(self._page(make_product), state)

        assert _titles(result) == ["Titleist Driver"]

    def test_sort_high_to_low(self, make_product):
        """Test sorting with no filters."""
        state = ViewState(sort_key=SortKey.PRICE_HIGH_TO_LOW)

        result = visible_products(self._page(make_product), state)

        assert _titles(result) == ["Titleist Driver", "Callaway Putter"]

    def test_visible_set_sorted_after_filter(self, scenario_products):
        """Test the visible set is filtered then sorted."""
        state = ViewState(
            filters=FilterState(brand={"titleist"}),
            sort_key=SortKey.PRICE_HIGH_TO_LOW,
        )

        result = visible_products(scenario_products, state)

        assert _titles(result) == ["Titleist Irons", "Titleist Driver"]

    def test_no_matches(self, scenario_products):
        """Test an empty visible set is a valid result."""
        state = ViewState(filters=FilterState(brand={"mizuno"}))

        assert visible_products(scenario_products, state) == []
