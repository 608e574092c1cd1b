"""Listing session.

Ties one listing visit together: the view state snapshot, the paginator
for the loaded page and the address synchronizer. Every shopper action is
reduced into a new snapshot; filter and price changes are published to
the address, sort changes are not.
"""

import structlog

from storefront.application.url_sync import UrlSynchronizer
from storefront.catalog.pagination import CursorPaginator
from storefront.catalog.predicates import visible_products
from storefront.domain.base import ViewEvent
from storefront.domain.filters import Facet
from storefront.domain.value_objects import CursorPage, PageDirection, ProductRecord
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

logger = structlog.get_logger()


class ListingSession:
    """One shopper's view of a product listing.

    Example usage:
        session = ListingSession(CursorPaginator(store), UrlSynchronizer(address))
        await session.start()
        session.toggle(Facet.BRAND, "titleist")
        session.change_sort(SortKey.PRICE_LOW_TO_HIGH)
        session.visible  # filtered, sorted products of the loaded page
    """

    def __init__(
        self,
        paginator: CursorPaginator,
        synchronizer: UrlSynchronizer,
    ) -> None:
        self.paginator = paginator
        self.synchronizer = synchronizer
        self.state = ViewState.initial(synchronizer.domain)

    async def start(
        self,
        cursor: str | None = None,
        direction: PageDirection = PageDirection.NEXT,
    ) -> CursorPage | None:
        """Hydrate state from the address and load the initial page.

        The hydrated selection is published back immediately, so a
        malformed or non-canonical address is rewritten in canonical form.

        Args:
            cursor: Cursor to start from; None loads the first page.
            direction: Paging direction relative to the cursor.

        Returns:
            The loaded page, or None if the result was discarded.
        """
        filters, price_range = self.synchronizer.hydrate()
        self.state = ViewState(filters=filters, price_range=price_range)
        self.synchronizer.publish(filters, price_range)
        logger.info(
            "Listing session started",
            active_filters=self.state.has_active_filters(),
            cursor=cursor,
        )
        return await self.paginator.load_from(cursor, direction)

    def dispatch(self, event: ViewEvent) -> ViewState:
        """Apply a shopper action to the current snapshot.

        Args:
            event: Shopper action.

        Returns:
            The new snapshot.
        """
        previous = self.state
        self.state = reduce(previous, event)
        if (
            self.state.filters != previous.filters
            or self.state.price_range != previous.price_range
        ):
            self.synchronizer.publish(self.state.filters, self.state.price_range)
        return self.state

    # =========================================================================
    # Shopper actions
    # =========================================================================

    def toggle(self, facet: Facet | str, token: str) -> ViewState:
        return self.dispatch(FacetToggled(facet=facet, token=token))

    def edit_min_price(self, value: object) -> ViewState:
        return self.dispatch(MinPriceEdited(value=value))

    def edit_max_price(self, value: object) -> ViewState:
        return self.dispatch(MaxPriceEdited(value=value))

    def slide_price(self, lower: object, upper: object) -> ViewState:
        return self.dispatch(PriceRangeSlid(lower=lower, upper=upper))

    def change_sort(self, sort_key: SortKey | str) -> ViewState:
        return self.dispatch(SortChanged(sort_key=SortKey.parse(sort_key)))

    async def next_page(self) -> CursorPage | None:
        return await self.paginator.load_next()

    async def previous_page(self) -> CursorPage | None:
        return await self.paginator.load_previous()

    # =========================================================================
    # Derived view
    # =========================================================================

    @property
    def page(self) -> CursorPage:
        return self.paginator.page

    @property
    def visible(self) -> list[ProductRecord]:
        """Products of the loaded page that pass the filters, in sort order."""
        return visible_products(self.paginator.page.products, self.state)

    def close(self) -> None:
        """End the session; pending page loads are discarded."""
        self.paginator.close()
