"""Application layer - address synchronization, listing sessions, views.

Example usage:
    from storefront.application import InMemoryAddress, ListingSession, UrlSynchronizer

    session = ListingSession(paginator, UrlSynchronizer(InMemoryAddress("brand=ping")))
    await session.start()
    session.visible
"""

from storefront.application.listing_session import ListingSession
from storefront.application.url_sync import (
    AddressSurface,
    InMemoryAddress,
    UrlSynchronizer,
    hydrate_query,
    publish_query,
)
from storefront.application.view import (
    EMPTY_RESULTS_MESSAGE,
    ListingView,
    PanelVisibility,
    compose_listing_view,
    grid_columns,
    listing_header,
    variant_url,
)

__all__ = [
    # Address
    "AddressSurface",
    "InMemoryAddress",
    "UrlSynchronizer",
    "hydrate_query",
    "publish_query",
    # Session
    "ListingSession",
    # View
    "EMPTY_RESULTS_MESSAGE",
    "ListingView",
    "PanelVisibility",
    "compose_listing_view",
    "grid_columns",
    "listing_header",
    "variant_url",
]
