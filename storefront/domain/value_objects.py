"""Value Objects for the domain layer.

Value objects are immutable objects that are defined by their attributes
rather than identity. Product records and cursor pages are owned by the
catalog source; the listing core only ever reads them.
"""

from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Self

from storefront.domain.base import ValueObject


def parse_amount(value: object) -> Decimal | None:
    """Parse a monetary or numeric value into a finite Decimal.

    Args:
        value: String, int, float or Decimal. Anything else is rejected.

    Returns:
        Decimal value, or None if the value is missing, non-numeric,
        NaN or infinite.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, Decimal):
        parsed = value
    elif isinstance(value, (int, float, str)):
        try:
            parsed = Decimal(str(value).strip())
        except InvalidOperation:
            return None
    else:
        return None
    if not parsed.is_finite():
        return None
    return parsed


# ============================================================================
# Product Records
# ============================================================================


@dataclass(frozen=True)
class Price(ValueObject):
    """A price as delivered by the catalog.

    The amount is kept as the raw decimal string from the catalog so that
    malformed data can be detected at comparison time instead of at load.

    Attributes:
        amount: Decimal amount string (e.g. "199.0"), or None if missing.
        currency_code: ISO 4217 currency code.
    """

    amount: str | None
    currency_code: str = "USD"

    def __post_init__(self) -> None:
        """Normalize currency to uppercase."""
        object.__setattr__(self, "currency_code", self.currency_code.upper())

    def to_decimal(self) -> Decimal | None:
        """Parse the amount.

        Returns:
            Decimal amount, or None when missing or non-numeric.
        """
        return parse_amount(self.amount)

    def format(self) -> str:
        """Format for display (e.g. "$199.00").

        Returns:
            Formatted price, or an empty string if the amount is unusable.
        """
        amount = self.to_decimal()
        if amount is None:
            return ""
        symbol = {"USD": "$", "EUR": "€", "GBP": "£"}.get(self.currency_code)
        if symbol:
            return f"{symbol}{amount:,.2f}"
        return f"{amount:,.2f} {self.currency_code}"


@dataclass(frozen=True)
class SelectedOption(ValueObject):
    """A named option value on a variant (e.g. Hand: Right)."""

    name: str
    value: str


@dataclass(frozen=True)
class ProductVariant(ValueObject):
    """A purchasable variant of a product."""

    id: str
    selected_options: tuple[SelectedOption, ...] = ()


@dataclass(frozen=True)
class ProductImage(ValueObject):
    """Featured image of a product."""

    url: str
    alt_text: str | None = None
    width: int | None = None
    height: int | None = None


@dataclass(frozen=True)
class ProductRecord(ValueObject):
    """A product as listed by the catalog.

    Attributes:
        id: Catalog product identifier.
        title: Product title.
        handle: URL handle of the product page.
        tags: Merchandising tags (category, condition, level, ...).
        min_variant_price: Lowest price across the product's variants.
        variants: Variants with their selected option values.
        featured_image: Optional featured image.
    """

    id: str
    title: str
    handle: str
    tags: frozenset[str] = frozenset()
    min_variant_price: Price = field(default_factory=lambda: Price(amount=None))
    variants: tuple[ProductVariant, ...] = ()
    featured_image: ProductImage | None = None

    def __post_init__(self) -> None:
        """Coerce tag collections to a frozenset."""
        if not isinstance(self.tags, frozenset):
            object.__setattr__(self, "tags", frozenset(self.tags or ()))
        if not isinstance(self.variants, tuple):
            object.__setattr__(self, "variants", tuple(self.variants))

    @property
    def price(self) -> Decimal | None:
        """Parsed minimum variant price, or None if unusable."""
        return self.min_variant_price.to_decimal()

    @property
    def first_variant(self) -> ProductVariant | None:
        """First variant, used for the listing link."""
        return self.variants[0] if self.variants else None


# ============================================================================
# Cursor Pages
# ============================================================================


class PageDirection(str, Enum):
    """Direction of a cursor page request."""

    NEXT = "next"
    PREVIOUS = "previous"


@dataclass(frozen=True)
class PageInfo(ValueObject):
    """Cursor position of a fetched page."""

    has_next_page: bool = False
    has_previous_page: bool = False
    start_cursor: str | None = None
    end_cursor: str | None = None


@dataclass(frozen=True)
class CursorPage(ValueObject):
    """A page of products plus its cursor information."""

    products: tuple[ProductRecord, ...] = ()
    page_info: PageInfo = field(default_factory=PageInfo)

    def __post_init__(self) -> None:
        """Freeze the product sequence."""
        if not isinstance(self.products, tuple):
            object.__setattr__(self, "products", tuple(self.products))

    @classmethod
    def empty(cls) -> Self:
        """Create an empty page with no neighbours.

        Returns:
            CursorPage with no products and both flags false.
        """
        return cls()

    def __len__(self) -> int:
        return len(self.products)


# ============================================================================
# Price Range
# ============================================================================


@dataclass(frozen=True)
class PriceDomain(ValueObject):
    """The fixed interval every price range is clamped to."""

    lower: Decimal = Decimal("0")
    upper: Decimal = Decimal("2000")

    def __post_init__(self) -> None:
        """Validate domain bounds."""
        lower = parse_amount(self.lower)
        upper = parse_amount(self.upper)
        if lower is None or upper is None:
            raise ValueError("Price domain bounds must be numeric")
        if lower < 0 or lower > upper:
            raise ValueError(f"Invalid price domain [{lower}, {upper}]")
        object.__setattr__(self, "lower", lower)
        object.__setattr__(self, "upper", upper)

    def clamp(self, value: Decimal) -> Decimal:
        """Clamp a value into the domain.

        Args:
            value: Value to clamp.

        Returns:
            The value limited to [lower, upper].
        """
        return max(self.lower, min(value, self.upper))


@dataclass(frozen=True)
class PriceRange(ValueObject):
    """Inclusive price interval selected by the shopper.

    The range is always ordered and always inside its domain. Editing one
    bound past the other drags the other bound along with it.

    Attributes:
        min_price: Lower bound (inclusive).
        max_price: Upper bound (inclusive).
        domain: Interval both bounds are clamped to.
    """

    min_price: Decimal
    max_price: Decimal
    domain: PriceDomain = field(default_factory=PriceDomain)

    def __post_init__(self) -> None:
        """Validate range constraints."""
        lo = parse_amount(self.min_price)
        hi = parse_amount(self.max_price)
        if lo is None or hi is None:
            raise ValueError("Price range bounds must be numeric")
        if lo > hi:
            raise ValueError(f"Price range min {lo} exceeds max {hi}")
        if lo < self.domain.lower or hi > self.domain.upper:
            raise ValueError(
                f"Price range [{lo}, {hi}] outside domain "
                f"[{self.domain.lower}, {self.domain.upper}]"
            )
        object.__setattr__(self, "min_price", lo)
        object.__setattr__(self, "max_price", hi)

    @classmethod
    def full(cls, domain: PriceDomain | None = None) -> Self:
        """Create the default range covering the whole domain.

        Args:
            domain: Price domain; defaults to [0, 2000].

        Returns:
            PriceRange equal to the domain.
        """
        domain = domain or PriceDomain()
        return cls(min_price=domain.lower, max_price=domain.upper, domain=domain)

    @classmethod
    def from_bounds(
        cls,
        min_price: object,
        max_price: object,
        domain: PriceDomain | None = None,
    ) -> Self:
        """Build a range from untrusted bounds.

        Missing or non-numeric bounds fall back to the domain edges, values
        are clamped, and an inverted pair snaps max up to min.

        Args:
            min_price: Candidate lower bound.
            max_price: Candidate upper bound.
            domain: Price domain; defaults to [0, 2000].

        Returns:
            A valid PriceRange.
        """
        domain = domain or PriceDomain()
        lo = parse_amount(min_price)
        hi = parse_amount(max_price)
        lo = domain.lower if lo is None else domain.clamp(lo)
        hi = domain.upper if hi is None else domain.clamp(hi)
        return cls(min_price=lo, max_price=max(lo, hi), domain=domain)

    def with_min(self, value: object) -> Self:
        """Edit the lower bound.

        Args:
            value: New lower bound; non-numeric input is ignored.

        Returns:
            New range. Moving min above max pulls max up to min.
        """
        parsed = parse_amount(value)
        if parsed is None:
            return self
        lo = self.domain.clamp(parsed)
        return type(self)(
            min_price=lo, max_price=max(lo, self.max_price), domain=self.domain
        )

    def with_max(self, value: object) -> Self:
        """Edit the upper bound.

        Args:
            value: New upper bound; non-numeric input is ignored.

        Returns:
            New range. Moving max below min pulls min down to max.
        """
        parsed = parse_amount(value)
        if parsed is None:
            return self
        hi = self.domain.clamp(parsed)
        return type(self)(
            min_price=min(self.min_price, hi), max_price=hi, domain=self.domain
        )

    def with_bounds(self, lower: object, upper: object) -> Self:
        """Set both bounds at once, as a two-thumb slider does.

        Args:
            lower: First thumb value.
            upper: Second thumb value.

        Returns:
            New ordered, clamped range; unchanged if either value is
            non-numeric.
        """
        lo = parse_amount(lower)
        hi = parse_amount(upper)
        if lo is None or hi is None:
            return self
        lo, hi = sorted((self.domain.clamp(lo), self.domain.clamp(hi)))
        return type(self)(min_price=lo, max_price=hi, domain=self.domain)

    def is_default(self) -> bool:
        """Check whether the range spans the whole domain.

        Returns:
            True if no price restriction is in effect.
        """
        return (
            self.min_price == self.domain.lower
            and self.max_price == self.domain.upper
        )

    def contains(self, amount: Decimal | None) -> bool:
        """Check an amount against the inclusive bounds.

        Args:
            amount: Parsed price, or None for unusable price data.

        Returns:
            True if the amount lies in [min_price, max_price].
        """
        if amount is None:
            return False
        return self.min_price <= amount <= self.max_price
