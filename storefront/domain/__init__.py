"""Domain layer - Value objects, filter state, view-state reducer, exceptions.

This module exports the core building blocks of the listing:

- **Value Objects**: Immutable product records, prices, cursor pages, price ranges
- **Filter State**: Selected tokens per facet, changed only by toggling
- **View State**: Filters + price range + sort key, advanced by a pure reducer
- **Exceptions**: Domain-specific errors

Example usage:
    from storefront.domain import Facet, FacetToggled, ViewState, reduce

    state = ViewState.initial()
    state = reduce(state, FacetToggled(Facet.BRAND, "titleist"))
    state.filters.selected(Facet.BRAND)  # frozenset({'titleist'})
"""

# Base classes
from storefront.domain.base import ValueObject, ViewEvent

# Exceptions
from storefront.domain.exceptions import (
    CatalogError,
    CollectionNotFoundError,
    DomainError,
    FetchError,
    FilterError,
    InvalidFilterTokenError,
    PageRequestInFlightError,
    PageUnavailableError,
    PaginationError,
    UnknownFacetError,
)

# Filter State
from storefront.domain.filters import (
    Condition,
    Facet,
    FilterState,
    Hand,
    PlayerLevel,
)

# Value Objects
from storefront.domain.value_objects import (
    CursorPage,
    PageDirection,
    PageInfo,
    Price,
    PriceDomain,
    PriceRange,
    ProductImage,
    ProductRecord,
    ProductVariant,
    SelectedOption,
    parse_amount,
)

# View State
from storefront.domain.view_state import (
    FacetToggled,
    MaxPriceEdited,
    MinPriceEdited,
    PriceRangeSlid,
    SortChanged,
    SortKey,
    ViewState,
    reduce,
)

__all__ = [
    # Base classes
    "ValueObject",
    "ViewEvent",
    # Value Objects
    "CursorPage",
    "PageDirection",
    "PageInfo",
    "Price",
    "PriceDomain",
    "PriceRange",
    "ProductImage",
    "ProductRecord",
    "ProductVariant",
    "SelectedOption",
    "parse_amount",
    # Filter State
    "Condition",
    "Facet",
    "FilterState",
    "Hand",
    "PlayerLevel",
    # View State
    "FacetToggled",
    "MaxPriceEdited",
    "MinPriceEdited",
    "PriceRangeSlid",
    "SortChanged",
    "SortKey",
    "ViewState",
    "reduce",
    # Exceptions
    "DomainError",
    "FilterError",
    "UnknownFacetError",
    "InvalidFilterTokenError",
    "PaginationError",
    "PageUnavailableError",
    "PageRequestInFlightError",
    "CatalogError",
    "FetchError",
    "CollectionNotFoundError",
]
