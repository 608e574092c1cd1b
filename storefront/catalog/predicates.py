"""Predicate engine.

Decides whether a product belongs to the visible set for a given filter
state and price range. Facets combine with AND; tokens within a facet
combine with OR; an empty facet never excludes anything. The price
constraint is always applied.

Matching is deliberately loose and mirrors the storefront's merchandising
conventions: tag lookups for category, condition and level, and title
substring lookups for brand, hand and (as a fallback) category. Title
matching can produce false positives (e.g. "ping" inside "Shipping").
"""

from collections.abc import Callable, Iterable

from storefront.catalog.sorting import sort_products
from storefront.domain.filters import Facet, FilterState
from storefront.domain.value_objects import PriceRange, ProductRecord
from storefront.domain.view_state import ViewState


def _has_tag(product: ProductRecord, token: str) -> bool:
    needle = token.lower()
    return any(tag.lower() == needle for tag in product.tags)


def _in_title(product: ProductRecord, token: str) -> bool:
    return token.lower() in product.title.lower()


def _has_tag_or_in_title(product: ProductRecord, token: str) -> bool:
    return _has_tag(product, token) or _in_title(product, token)


# Token matcher per facet
_FACET_MATCHERS: dict[Facet, Callable[[ProductRecord, str], bool]] = {
    Facet.CATEGORY: _has_tag_or_in_title,
    Facet.CONDITION: _has_tag,
    Facet.LEVEL: _has_tag,
    Facet.BRAND: _in_title,
    Facet.HAND: _in_title,
}


def matches_facet(
    product: ProductRecord,
    facet: Facet,
    tokens: Iterable[str],
) -> bool:
    """Check a product against the selected tokens of one facet.

    Args:
        product: Product to check.
        facet: Facet being evaluated.
        tokens: Selected tokens; empty means unconstrained.

    Returns:
        True if no token is selected or any selected token matches.
    """
    tokens = list(tokens)
    if not tokens:
        return True
    matcher = _FACET_MATCHERS[facet]
    return any(matcher(product, token) for token in tokens)


def matches_price(product: ProductRecord, price_range: PriceRange) -> bool:
    """Check the product's minimum variant price against the range.

    Missing or non-numeric price data never matches.
    """
    return price_range.contains(product.price)


def include(
    product: ProductRecord,
    filters: FilterState,
    price_range: PriceRange,
) -> bool:
    """Decide whether a product is part of the visible set.

    Args:
        product: Product to check.
        filters: Current facet selections.
        price_range: Current price range.

    Returns:
        True if every facet matches and the price is within range.
    """
    if not matches_price(product, price_range):
        return False
    return all(
        matches_facet(product, facet, tokens)
        for facet, tokens in filters.to_selections().items()
    )


def filter_products(
    products: Iterable[ProductRecord],
    filters: FilterState,
    price_range: PriceRange,
) -> list[ProductRecord]:
    """Keep the products that pass `include`, preserving arrival order."""
    return [p for p in products if include(p, filters, price_range)]


def visible_products(
    products: Iterable[ProductRecord],
    state: ViewState,
) -> list[ProductRecord]:
    """Derive the visible set from loaded products and the view state.

    The result is never cached; call again after any change to the page or
    the view state.

    Args:
        products: Products of the currently loaded page.
        state: Current view state.

    Returns:
        Filtered products in the order given by the state's sort key.
    """
    return sort_products(
        filter_products(products, state.filters, state.price_range),
        state.sort_key,
    )
