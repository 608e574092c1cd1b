"""Tests for domain value objects."""

from decimal import Decimal

import pytest

from storefront.domain.value_objects import (
    CursorPage,
    PageDirection,
    PageInfo,
    Price,
    PriceDomain,
    PriceRange,
    parse_amount,
)


class TestParseAmount:
    """Tests for parse_amount helper."""

    @pytest.mark.parametrize(
        "value,expected",
        [
            ("199.0", Decimal("199.0")),
            (" 150 ", Decimal("150")),
            (42, Decimal("42")),
            (Decimal("7.5"), Decimal("7.5")),
        ],
    )
    def test_parses_numeric_values(self, value, expected):
        """Test numeric input is parsed."""
        assert parse_amount(value) == expected

    @pytest.mark.parametrize(
        "value", [None, "", "abc", "NaN", "Infinity", True, [], float("nan")]
    )
    def test_rejects_unusable_values(self, value):
        """Test unusable input parses to None."""
        assert parse_amount(value) is None


class TestPrice:
    """Tests for Price value object."""

    def test_currency_uppercased(self):
        """Test currency codes are normalized."""
        assert Price(amount="10", currency_code="usd").currency_code == "USD"

    def test_to_decimal(self):
        """Test amount parsing."""
        assert Price(amount="199.0").to_decimal() == Decimal("199")
        assert Price(amount=None).to_decimal() is None
        assert Price(amount="call us").to_decimal() is None

    def test_format(self):
        """Test display formatting."""
        assert Price(amount="1234.5").format() == "$1,234.50"
        assert Price(amount="99", currency_code="EUR").format() == "€99.00"
        assert Price(amount="10", currency_code="JPY").format() == "10.00 JPY"
        assert Price(amount="n/a").format() == ""


class TestProductRecord:
    """Tests for ProductRecord value object."""

    def test_price_property(self, make_product):
        """Test the parsed minimum variant price."""
        assert make_product(price="249.99").price == Decimal("249.99")
        assert make_product(price=None).price is None

    def test_tags_coerced_to_frozenset(self, make_product):
        """Test tags are stored as a frozenset."""
        product = make_product(tags=("drivers", "good"))

        assert product.tags == frozenset({"drivers", "good"})

    def test_first_variant(self, make_product):
        """Test first variant lookup."""
        product = make_product(options=(("Hand", "Left"), ("Flex", "Stiff")))

        assert product.first_variant is not None
        assert [o.value for o in product.first_variant.selected_options] == [
            "Left",
            "Stiff",
        ]


class TestCursorPage:
    """Tests for CursorPage value object."""

    def test_empty_page_disables_paging(self):
        """Test the empty page has both flags false."""
        page = CursorPage.empty()

        assert len(page) == 0
        assert page.page_info.has_next_page is False
        assert page.page_info.has_previous_page is False

    def test_products_coerced_to_tuple(self, make_product):
        """Test products are stored as a tuple."""
        page = CursorPage(products=[make_product()], page_info=PageInfo())

        assert isinstance(page.products, tuple)
        assert len(page) == 1

    def test_direction_values(self):
        """Test direction tokens used in the address."""
        assert PageDirection("next") is PageDirection.NEXT
        assert PageDirection("previous") is PageDirection.PREVIOUS


class TestPriceDomain:
    """Tests for PriceDomain value object."""

    def test_default_domain(self):
        """Test default domain bounds."""
        domain = PriceDomain()

        assert domain.lower == Decimal("0")
        assert domain.upper == Decimal("2000")

    def test_invalid_domain_raises(self):
        """Test inverted or negative domains are rejected."""
        with pytest.raises(ValueError):
            PriceDomain(lower=Decimal("10"), upper=Decimal("5"))
        with pytest.raises(ValueError):
            PriceDomain(lower=Decimal("-1"), upper=Decimal("5"))

    def test_clamp(self):
        """Test clamping into the domain."""
        domain = PriceDomain()

        assert domain.clamp(Decimal("-5")) == Decimal("0")
        assert domain.clamp(Decimal("2500")) == Decimal("2000")
        assert domain.clamp(Decimal("300")) == Decimal("300")


class TestPriceRange:
    """Tests for PriceRange value object."""

    def test_full_range_is_default(self):
        """Test the full range equals the domain."""
        price_range = PriceRange.full()

        assert price_range.min_price == Decimal("0")
        assert price_range.max_price == Decimal("2000")
        assert price_range.is_default()

    def test_inverted_range_raises(self):
        """Test min above max is rejected."""
        with pytest.raises(ValueError):
            PriceRange(min_price=Decimal("500"), max_price=Decimal("100"))

    def test_out_of_domain_raises(self):
        """Test bounds outside the domain are rejected."""
        with pytest.raises(ValueError):
            PriceRange(min_price=Decimal("0"), max_price=Decimal("2500"))

    def test_with_min_above_max_pulls_max_up(self):
        """Test moving min past max drags max along."""
        price_range = PriceRange.full().with_max("300").with_min("500")

        assert price_range.min_price == Decimal("500")
        assert price_range.max_price == Decimal("500")

    def test_with_max_below_min_pulls_min_down(self):
        """Test moving max below min drags min along."""
        price_range = PriceRange.full().with_min("400").with_max("250")

        assert price_range.min_price == Decimal("250")
        assert price_range.max_price == Decimal("250")

    def test_edits_are_clamped(self):
        """Test edits outside the domain are clamped."""
        price_range = PriceRange.full().with_min("-50").with_max("9999")

        assert price_range.is_default()

    def test_non_numeric_edit_is_ignored(self):
        """Test non-numeric input leaves the range unchanged."""
        price_range = PriceRange.full().with_min("100")

        assert price_range.with_min("abc") == price_range
        assert price_range.with_max("") == price_range

    def test_with_bounds_orders_thumbs(self):
        """Test slider thumbs may cross."""
        price_range = PriceRange.full().with_bounds(800, 200)

        assert price_range.min_price == Decimal("200")
        assert price_range.max_price == Decimal("800")

    def test_from_bounds_defaults_and_snaps(self):
        """Test untrusted bounds fall back, clamp and snap."""
        assert PriceRange.from_bounds(None, "abc").is_default()

        snapped = PriceRange.from_bounds("700", "300")
        assert snapped.min_price == Decimal("700")
        assert snapped.max_price == Decimal("700")

        clamped = PriceRange.from_bounds("-10", "5000")
        assert clamped.is_default()

    def test_contains_is_inclusive(self):
        """Test both bounds are inclusive."""
        price_range = PriceRange.full().with_bounds(100, 200)

        assert price_range.contains(Decimal("100"))
        assert price_range.contains(Decimal("200"))
        assert not price_range.contains(Decimal("99.99"))
        assert not price_range.contains(Decimal("200.01"))

    def test_contains_rejects_missing_price(self):
        """Test missing price never matches."""
        assert not PriceRange.full().contains(None)
