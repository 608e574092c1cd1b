"""Cursor pagination over a catalog source.

The paginator holds the currently loaded page and hands out the cursors
for its neighbours. It refuses locally to page past either end, never
prefetches, and keeps at most one request in flight per direction.

Fetch failures degrade to an empty page with both directions disabled.
Responses that arrive after the paginator was closed, or after a newer
request was issued, are discarded.
"""

import structlog

from storefront.catalog.source import CatalogSource
from storefront.domain.exceptions import (
    CatalogError,
    PageRequestInFlightError,
    PageUnavailableError,
)
from storefront.domain.value_objects import CursorPage, PageDirection

logger = structlog.get_logger()

DEFAULT_PAGE_SIZE = 12


class CursorPaginator:
    """Stateful wrapper around a cursor-paginated catalog source.

    Example usage:
        paginator = CursorPaginator(store, page_size=12)
        await paginator.load_first()
        if paginator.can_load_next:
            await paginator.load_next()
        paginator.page.products
    """

    def __init__(
        self,
        source: CatalogSource,
        page_size: int = DEFAULT_PAGE_SIZE,
        collection: str | None = None,
    ) -> None:
        """Initialize paginator.

        Args:
            source: Catalog source to fetch from.
            page_size: Products per page.
            collection: Optional collection handle to scope pages to.

        Raises:
            ValueError: If page_size is not positive.
        """
        if page_size < 1:
            raise ValueError("page_size must be >= 1")
        self.source = source
        self.page_size = page_size
        self.collection = collection
        self.page = CursorPage.empty()
        self.last_error: CatalogError | None = None
        self._in_flight: set[PageDirection] = set()
        self._generation = 0
        self._closed = False

    # =========================================================================
    # Cursors
    # =========================================================================

    @property
    def can_load_next(self) -> bool:
        """Whether a next page exists and no next request is pending."""
        return (
            self.page.page_info.has_next_page
            and PageDirection.NEXT not in self._in_flight
        )

    @property
    def can_load_previous(self) -> bool:
        """Whether a previous page exists and no previous request is pending."""
        return (
            self.page.page_info.has_previous_page
            and PageDirection.PREVIOUS not in self._in_flight
        )

    @property
    def next_cursor(self) -> str | None:
        """End cursor of the loaded page when a next page exists."""
        info = self.page.page_info
        return info.end_cursor if info.has_next_page else None

    @property
    def previous_cursor(self) -> str | None:
        """Start cursor of the loaded page when a previous page exists."""
        info = self.page.page_info
        return info.start_cursor if info.has_previous_page else None

    @property
    def closed(self) -> bool:
        return self._closed

    # =========================================================================
    # Loading
    # =========================================================================

    async def load_first(self) -> CursorPage | None:
        """Load the first page.

        Returns:
            The loaded page, or None if the result was discarded.
        """
        return await self._load(None, PageDirection.NEXT)

    async def load_from(
        self, cursor: str | None, direction: PageDirection
    ) -> CursorPage | None:
        """Load the page adjacent to an externally supplied cursor.

        Used when the cursor comes from the address rather than from a
        previously loaded page.

        Args:
            cursor: Cursor to page from; None loads the first page.
            direction: Paging direction relative to the cursor.

        Returns:
            The loaded page, or None if the result was discarded.
        """
        return await self._load(cursor, PageDirection(direction))

    async def load_next(self) -> CursorPage | None:
        """Load the page after the current one.

        Returns:
            The loaded page, or None if the result was discarded.

        Raises:
            PageUnavailableError: If the current page has no next page.
            PageRequestInFlightError: If a next request is still pending.
        """
        if not self.page.page_info.has_next_page:
            logger.info("Refused next page request", reason="no_next_page")
            raise PageUnavailableError(PageDirection.NEXT.value)
        return await self._load(self.page.page_info.end_cursor, PageDirection.NEXT)

    async def load_previous(self) -> CursorPage | None:
        """Load the page before the current one.

        Returns:
            The loaded page, or None if the result was discarded.

        Raises:
            PageUnavailableError: If the current page has no previous page.
            PageRequestInFlightError: If a previous request is still pending.
        """
        if not self.page.page_info.has_previous_page:
            logger.info("Refused previous page request", reason="no_previous_page")
            raise PageUnavailableError(PageDirection.PREVIOUS.value)
        return await self._load(
            self.page.page_info.start_cursor, PageDirection.PREVIOUS
        )

    async def _load(
        self, cursor: str | None, direction: PageDirection
    ) -> CursorPage | None:
        """Fetch a page and make it current if it is still wanted."""
        if self._closed:
            logger.debug("Ignored page request on closed paginator")
            return None
        if direction in self._in_flight:
            raise PageRequestInFlightError(direction.value)

        self._generation += 1
        generation = self._generation
        self._in_flight.add(direction)
        error: CatalogError | None = None

        try:
            logger.debug(
                "Fetching catalog page",
                direction=direction.value,
                cursor=cursor,
                page_size=self.page_size,
                collection=self.collection,
            )
            page = await self.source.fetch_page(
                cursor, direction, self.page_size, collection=self.collection
            )
        except CatalogError as e:
            logger.warning(
                "Catalog page fetch failed",
                direction=direction.value,
                cursor=cursor,
                error=e.message,
                error_details=e.details,
            )
            error = e
            page = CursorPage.empty()
        finally:
            self._in_flight.discard(direction)

        if self._closed:
            logger.debug("Discarded page fetched after close", direction=direction.value)
            return None
        if generation != self._generation:
            logger.debug("Discarded stale page", direction=direction.value)
            return None

        self.page = page
        self.last_error = error
        logger.info(
            "Loaded catalog page",
            direction=direction.value,
            product_count=len(page),
            has_next_page=page.page_info.has_next_page,
            has_previous_page=page.page_info.has_previous_page,
        )
        return page

    def close(self) -> None:
        """Stop accepting responses; any pending result will be dropped."""
        self._closed = True
