"""Listing API endpoints.

Provides the facet vocabulary and filtered collection listings. Filter
selections are read from the request query string exactly as the page
address carries them (repeated facet keys, ``minPrice``/``maxPrice``).
"""

from typing import Annotated

import structlog
from fastapi import APIRouter, Depends, Request

from storefront.api.schemas import (
    CollectionLinkSchema,
    ErrorResponse,
    FacetSectionSchema,
    FacetsResponse,
    FacetVocabularySchema,
    FilterPanelSchema,
    HeaderSchema,
    ListingResponse,
    OptionSchema,
    PaginationSchema,
    PriceDomainSchema,
    PriceSectionSchema,
    ProductCardSchema,
)
from storefront.application.listing_session import ListingSession
from storefront.application.url_sync import (
    InMemoryAddress,
    UrlSynchronizer,
    format_amount,
)
from storefront.application.view import ListingView, compose_listing_view
from storefront.catalog.pagination import CursorPaginator
from storefront.catalog.source import ALL_COLLECTION, CatalogSource
from storefront.catalog.store import get_catalog_store
from storefront.domain.exceptions import CatalogError, CollectionNotFoundError
from storefront.domain.filters import Facet
from storefront.domain.value_objects import PageDirection
from storefront.domain.view_state import SortKey
from storefront.infrastructure.config import settings

logger = structlog.get_logger()

router = APIRouter(tags=["Listings"])


# ============================================================================
# Dependencies
# ============================================================================


def get_catalog_source(request: Request) -> CatalogSource:
    """Get the catalog source configured at startup.

    Falls back to the in-memory catalog when the app was not started
    through its lifespan.
    """
    source = getattr(request.app.state, "catalog_source", None)
    if source is None:
        source = get_catalog_store(
            seed=settings.catalog_seed,
            products_per_category=settings.products_per_category,
        )
    return source


# ============================================================================
# Converters
# ============================================================================


def view_to_response(view: ListingView, sort_key: SortKey) -> ListingResponse:
    """Convert a composed listing view to the response schema."""
    panel = view.panel
    return ListingResponse(
        handle=view.handle,
        header=HeaderSchema(
            title=view.header.title, description=view.header.description
        ),
        count_label=view.count_label,
        products=[
            ProductCardSchema(
                id=card.id,
                title=card.title,
                handle=card.handle,
                url=card.url,
                price=card.price,
                image_url=card.image_url,
                image_alt=card.image_alt,
                loading=card.loading,
            )
            for card in view.products
        ],
        empty_message=view.empty_message,
        panel=FilterPanelSchema(
            sections=[
                FacetSectionSchema(
                    facet=section.facet.value,
                    title=section.title,
                    options=[
                        OptionSchema(
                            value=o.value, label=o.label, checked=o.checked
                        )
                        for o in section.options
                    ],
                )
                for section in panel.sections
            ],
            price=PriceSectionSchema(
                domain_min=panel.price.domain_min,
                domain_max=panel.price.domain_max,
                step=panel.price.step,
                min_price=panel.price.min_price,
                max_price=panel.price.max_price,
            ),
            sort_options=[
                OptionSchema(value=o.value, label=o.label, checked=o.checked)
                for o in panel.sort_options
            ],
        ),
        grid_columns=view.grid_columns,
        collections=[
            CollectionLinkSchema(
                handle=link.handle,
                title=link.title,
                url=link.url,
                image_url=link.image_url,
                current=link.current,
            )
            for link in view.collections
        ],
        pagination=PaginationSchema(
            next=view.pagination.next, previous=view.pagination.previous
        ),
        address=view.address,
        sort=sort_key.value,
    )


# ============================================================================
# Endpoints
# ============================================================================


@router.get(
    "/facets",
    response_model=FacetsResponse,
    summary="Get facet vocabularies",
    description="Selectable options for every facet, the price domain and sort keys.",
)
async def get_facets() -> FacetsResponse:
    """Get the facet vocabularies.

    Returns:
        Facet options in display order.
    """
    vocabulary = settings.vocabulary
    domain = settings.price_domain
    return FacetsResponse(
        facets=[
            FacetVocabularySchema(
                facet=facet.value,
                options=[
                    OptionSchema(value=o.value, label=o.label)
                    for o in vocabulary.options(facet)
                ],
            )
            for facet in Facet
        ],
        price=PriceDomainSchema(
            min=format_amount(domain.lower),
            max=format_amount(domain.upper),
            step=format_amount(settings.price_step),
        ),
        sort_options=[
            OptionSchema(value=key.value, label=key.label) for key in SortKey
        ],
    )


@router.get(
    "/collections/{handle}",
    response_model=ListingResponse,
    responses={
        404: {"model": ErrorResponse},
        502: {"model": ErrorResponse},
    },
    summary="Get a filtered collection listing",
    description=(
        "Loads one page of the collection and applies the facet, price and "
        "sort selection. Use handle 'all' for the complete catalog."
    ),
)
async def get_collection_listing(
    handle: str,
    request: Request,
    source: Annotated[CatalogSource, Depends(get_catalog_source)],
    sort: str | None = None,
    cursor: str | None = None,
    direction: PageDirection = PageDirection.NEXT,
) -> ListingResponse:
    """Get a listing page.

    Args:
        handle: Collection handle, or 'all'.
        request: Incoming request (its query string is the page address).
        source: Catalog source.
        sort: Sort key; unknown values fall back to best match.
        cursor: Cursor of the page to start from.
        direction: Paging direction relative to the cursor.

    Returns:
        Composed listing view.

    Raises:
        CollectionNotFoundError: If the collection does not exist.
        FetchError: If the collection lookup fails.
    """
    collection = await source.fetch_collection(handle)
    if collection is None:
        raise CollectionNotFoundError(handle)

    session = ListingSession(
        CursorPaginator(
            source,
            page_size=settings.page_size,
            collection=None if handle == ALL_COLLECTION else handle,
        ),
        UrlSynchronizer(InMemoryAddress(request.url.query), settings.price_domain),
    )
    try:
        await session.start(cursor, direction)
        session.change_sort(SortKey.parse(sort))
        visible = session.visible
        try:
            collections = await source.list_collections()
        except CatalogError as e:
            logger.warning("Collection navigation unavailable", error=e.message)
            collections = []
    finally:
        session.close()

    view = compose_listing_view(
        handle,
        session.state,
        visible,
        session.page.page_info,
        settings.vocabulary,
        collection=collection,
        collections=collections,
        price_step=settings.price_step,
    )
    logger.info(
        "Listing served",
        handle=handle,
        loaded=len(session.page),
        visible=len(visible),
        sort=session.state.sort_key.value,
        address=view.address,
    )

    response = view_to_response(view, session.state.sort_key)
    last_error = session.paginator.last_error
    if last_error is not None:
        response.catalog_error = getattr(last_error, "code", "COLLECTION_NOT_FOUND")
    return response
