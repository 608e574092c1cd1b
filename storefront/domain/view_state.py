"""View state snapshot and reducer.

The complete view state is the filter selection, the price range and the
sort key. The listing never mutates it in place: every shopper action is a
ViewEvent folded in by `reduce`, which returns a new snapshot.
"""

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Callable, Self

from storefront.domain.base import ValueObject, ViewEvent
from storefront.domain.filters import Facet, FilterState
from storefront.domain.value_objects import PriceDomain, PriceRange


class SortKey(str, Enum):
    """Result orderings offered to the shopper.

    BEST_MATCH keeps catalog arrival order.
    """

    BEST_MATCH = "bestMatch"
    PRICE_LOW_TO_HIGH = "priceLowToHigh"
    PRICE_HIGH_TO_LOW = "priceHighToLow"

    @property
    def label(self) -> str:
        return _SORT_LABELS[self]

    @classmethod
    def parse(cls, value: str | None) -> "SortKey":
        """Resolve a sort key, falling back to best match.

        Args:
            value: Sort key name or None.

        Returns:
            Matching SortKey, or BEST_MATCH for unknown values.
        """
        try:
            return cls(value) if value else cls.BEST_MATCH
        except ValueError:
            return cls.BEST_MATCH


_SORT_LABELS: dict[SortKey, str] = {
    SortKey.BEST_MATCH: "Best Match",
    SortKey.PRICE_LOW_TO_HIGH: "Price: Low to High",
    SortKey.PRICE_HIGH_TO_LOW: "Price: High to Low",
}


@dataclass(frozen=True)
class ViewState(ValueObject):
    """Immutable snapshot of everything that shapes the visible set."""

    filters: FilterState = field(default_factory=FilterState)
    price_range: PriceRange = field(default_factory=PriceRange.full)
    sort_key: SortKey = SortKey.BEST_MATCH

    @classmethod
    def initial(cls, domain: PriceDomain | None = None) -> Self:
        """Create the state of a fresh visit.

        Args:
            domain: Price domain for the default range.

        Returns:
            ViewState with no filters, full price range and best match.
        """
        return cls(price_range=PriceRange.full(domain))

    def has_active_filters(self) -> bool:
        """Check whether any facet or price restriction is in effect."""
        return not self.filters.is_empty() or not self.price_range.is_default()


# ============================================================================
# Events
# ============================================================================


@dataclass(frozen=True)
class FacetToggled(ViewEvent):
    """A facet checkbox was flipped."""

    facet: Facet | str
    token: str


@dataclass(frozen=True)
class MinPriceEdited(ViewEvent):
    """The minimum price input changed (raw input text or number)."""

    value: object


@dataclass(frozen=True)
class MaxPriceEdited(ViewEvent):
    """The maximum price input changed (raw input text or number)."""

    value: object


@dataclass(frozen=True)
class PriceRangeSlid(ViewEvent):
    """Both slider thumbs reported new values."""

    lower: object
    upper: object


@dataclass(frozen=True)
class SortChanged(ViewEvent):
    """A different sort order was picked."""

    sort_key: SortKey


# ============================================================================
# Reducer
# ============================================================================


def _toggle_facet(state: ViewState, event: FacetToggled) -> ViewState:
    return replace(state, filters=state.filters.toggle(event.facet, event.token))


def _edit_min_price(state: ViewState, event: MinPriceEdited) -> ViewState:
    return replace(state, price_range=state.price_range.with_min(event.value))


def _edit_max_price(state: ViewState, event: MaxPriceEdited) -> ViewState:
    return replace(state, price_range=state.price_range.with_max(event.value))


def _slide_price(state: ViewState, event: PriceRangeSlid) -> ViewState:
    return replace(
        state, price_range=state.price_range.with_bounds(event.lower, event.upper)
    )


def _change_sort(state: ViewState, event: SortChanged) -> ViewState:
    return replace(state, sort_key=SortKey(event.sort_key))


# Event handlers (defined outside the events to keep them plain data)
_HANDLERS: dict[type[ViewEvent], Callable[[ViewState, Any], ViewState]] = {
    FacetToggled: _toggle_facet,
    MinPriceEdited: _edit_min_price,
    MaxPriceEdited: _edit_max_price,
    PriceRangeSlid: _slide_price,
    SortChanged: _change_sort,
}


def reduce(state: ViewState, event: ViewEvent) -> ViewState:
    """Fold an event into a view state.

    Args:
        state: Current snapshot.
        event: Shopper action.

    Returns:
        New snapshot; the input is never modified.

    Raises:
        TypeError: For unsupported event types.
        FilterError: If a toggle names an unknown facet or a blank token.
    """
    handler = _HANDLERS.get(type(event))
    if handler is None:
        raise TypeError(f"Unsupported view event: {type(event).__name__}")
    return handler(state, event)
