"""Catalog source contract.

The listing core consumes a catalog through this protocol only. Two
implementations ship: the Storefront GraphQL client and the seeded
in-memory golf catalog.
"""

from dataclasses import dataclass
from typing import Protocol

from storefront.domain.value_objects import CursorPage, PageDirection


ALL_COLLECTION = "all"


@dataclass(frozen=True)
class CollectionSummary:
    """A merchandising collection shown in the collection navigation."""

    id: str
    handle: str
    title: str
    image_url: str | None = None


class CatalogSource(Protocol):
    """Anything that can serve cursor pages of products."""

    async def fetch_page(
        self,
        cursor: str | None,
        direction: PageDirection,
        page_size: int,
        collection: str | None = None,
    ) -> CursorPage:
        """Fetch one page of products.

        Args:
            cursor: Cursor to page from; None for the first page.
            direction: NEXT pages after the cursor, PREVIOUS before it.
            page_size: Maximum number of products.
            collection: Optional collection handle to scope the page to.

        Returns:
            The requested page.

        Raises:
            FetchError: On network or payload failures.
            CollectionNotFoundError: If the collection does not exist.
        """
        ...

    async def fetch_collection(self, handle: str) -> CollectionSummary | None:
        """Look up a collection by handle."""
        ...

    async def list_collections(self, limit: int = 6) -> list[CollectionSummary]:
        """List collections for navigation."""
        ...
