"""Address synchronization for the filter selection.

The filter state and price range are mirrored in the page's query string:
repeated ``hand``/``category``/``brand``/``condition``/``level`` keys for
selected tokens, and ``minPrice``/``maxPrice`` when the range is narrower
than the domain. With no active filters the query string is empty, so the
address is indistinguishable from a fresh visit.

Reading back what was written yields the same state:
``hydrate_query(publish_query(f, p)) == (f, p)``.
"""

from decimal import Decimal
from typing import Protocol

import httpx
import structlog

from storefront.domain.filters import Facet, FilterState
from storefront.domain.value_objects import PriceDomain, PriceRange

logger = structlog.get_logger()

MIN_PRICE_KEY = "minPrice"
MAX_PRICE_KEY = "maxPrice"


def format_amount(value: Decimal) -> str:
    """Render a price bound without exponent or trailing zeros (e.g. "150").

    The exact value is kept; no digits are rounded away.
    """
    text = format(value, "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


def _query_params(query: str | httpx.QueryParams) -> httpx.QueryParams:
    if isinstance(query, httpx.QueryParams):
        return query
    return httpx.QueryParams(query.lstrip("?"))


def hydrate_query(
    query: str | httpx.QueryParams,
    domain: PriceDomain | None = None,
) -> tuple[FilterState, PriceRange]:
    """Read the filter selection from a query string.

    Unknown keys are ignored. Missing or malformed price bounds fall back to
    the domain edges; they never raise.

    Args:
        query: Query string (with or without a leading "?") or parsed params.
        domain: Price domain; defaults to [0, 2000].

    Returns:
        Tuple of (filter state, price range).
    """
    params = _query_params(query)
    filters = FilterState.from_selections(
        {facet: params.get_list(facet.value) for facet in Facet}
    )
    price_range = PriceRange.from_bounds(
        params.get(MIN_PRICE_KEY),
        params.get(MAX_PRICE_KEY),
        domain,
    )
    return filters, price_range


def publish_query(filters: FilterState, price_range: PriceRange) -> str:
    """Write the filter selection as a query string.

    Args:
        filters: Current facet selections.
        price_range: Current price range.

    Returns:
        Encoded query string without a leading "?"; empty when no facet is
        selected and the range is the full domain.
    """
    items: list[tuple[str, str]] = []
    for facet, tokens in filters.to_selections().items():
        items.extend((facet.value, token) for token in sorted(tokens))

    if not price_range.is_default():
        items.append((MIN_PRICE_KEY, format_amount(price_range.min_price)))
        items.append((MAX_PRICE_KEY, format_amount(price_range.max_price)))

    return str(httpx.QueryParams(items))


# ============================================================================
# Address Surface
# ============================================================================


class AddressSurface(Protocol):
    """The page address as seen by the listing."""

    @property
    def query(self) -> str:
        """Current query string, without a leading "?"."""
        ...

    def replace(self, query: str) -> None:
        """Replace the query string without adding a history entry."""
        ...


class InMemoryAddress:
    """Address held in memory, with a navigation history.

    `replace` rewrites the current history entry; `push` appends one.
    """

    def __init__(self, query: str = "") -> None:
        self.history: list[str] = [query.lstrip("?")]
        self.replacements: list[str] = []

    @property
    def query(self) -> str:
        return self.history[-1]

    def replace(self, query: str) -> None:
        self.history[-1] = query
        self.replacements.append(query)

    def push(self, query: str) -> None:
        self.history.append(query)


class UrlSynchronizer:
    """Keeps the filter selection and the address consistent.

    Example usage:
        sync = UrlSynchronizer(InMemoryAddress("brand=titleist&minPrice=100"))
        filters, price_range = sync.hydrate()
        sync.publish(filters.toggle("brand", "ping"), price_range)
    """

    def __init__(
        self,
        address: AddressSurface,
        domain: PriceDomain | None = None,
    ) -> None:
        """Initialize synchronizer.

        Args:
            address: Address surface to read from and write to.
            domain: Price domain for hydration.
        """
        self.address = address
        self.domain = domain or PriceDomain()

    def hydrate(self) -> tuple[FilterState, PriceRange]:
        """Read the initial selection from the current address."""
        return hydrate_query(self.address.query, self.domain)

    def publish(self, filters: FilterState, price_range: PriceRange) -> str:
        """Replace the address with the given selection.

        Each call writes the complete query string, so the latest call
        always wins.

        Args:
            filters: Current facet selections.
            price_range: Current price range.

        Returns:
            The query string written.
        """
        query = publish_query(filters, price_range)
        self.address.replace(query)
        logger.debug("Published filter state to address", query=query)
        return query
