"""Listing view composition.

Turns a listing session into the presentation model of a collection page:
heading, result count, product cards, facet panel, collection navigation
and pagination links. Nothing here touches the network or the address.
"""

from dataclasses import dataclass, field, replace
from decimal import Decimal

import httpx

from storefront.application.url_sync import format_amount, publish_query
from storefront.catalog.source import ALL_COLLECTION, CollectionSummary
from storefront.catalog.vocabulary import FacetVocabulary
from storefront.domain.filters import Facet
from storefront.domain.value_objects import PageInfo, ProductRecord
from storefront.domain.view_state import SortKey, ViewState

ALL_PRODUCTS_TITLE = "Golf Clubs"
ALL_PRODUCTS_DESCRIPTION = (
    "Browse our complete collection of premium second hand golf clubs"
)
FALLBACK_TITLE = "Products"
EMPTY_RESULTS_MESSAGE = "No products match the selected filters"

DESKTOP_BREAKPOINT = 1024
EAGER_IMAGE_COUNT = 12
MAX_NAV_COLLECTIONS = 6
DEFAULT_PRICE_STEP = Decimal("50")

# Section order in the facet panel
_PANEL_FACETS: tuple[tuple[Facet, str], ...] = (
    (Facet.HAND, "Hand"),
    (Facet.CATEGORY, "Club Type"),
    (Facet.BRAND, "Brand"),
    (Facet.CONDITION, "Condition"),
    (Facet.LEVEL, "Player Level"),
)


# ============================================================================
# Heading
# ============================================================================


@dataclass(frozen=True)
class ListingHeader:
    title: str
    description: str


def listing_header(handle: str, title: str | None = None) -> ListingHeader:
    """Heading and description for a collection page.

    Args:
        handle: Collection handle.
        title: Collection title, if known.

    Returns:
        ListingHeader for the page.
    """
    if handle == ALL_COLLECTION:
        return ListingHeader(ALL_PRODUCTS_TITLE, ALL_PRODUCTS_DESCRIPTION)
    title = title or FALLBACK_TITLE
    return ListingHeader(title, f"Explore our selection of {title}")


def result_count_label(count: int) -> str:
    return f"{count} Products"


# ============================================================================
# Layout
# ============================================================================


@dataclass(frozen=True)
class PanelVisibility:
    """Open/closed state of the desktop and mobile filter panels."""

    desktop_open: bool = True
    mobile_open: bool = False

    def toggle(self, viewport_width: int) -> "PanelVisibility":
        """Flip the panel that is shown at the given viewport width."""
        if viewport_width >= DESKTOP_BREAKPOINT:
            return replace(self, desktop_open=not self.desktop_open)
        return replace(self, mobile_open=not self.mobile_open)


def grid_columns(desktop_panel_open: bool) -> dict[str, int]:
    """Product grid columns per breakpoint."""
    wide = 5 if desktop_panel_open else 6
    return {"base": 2, "sm": 3, "md": 4, "lg": wide, "xl": wide}


# ============================================================================
# Product Cards
# ============================================================================


@dataclass(frozen=True)
class ProductCard:
    id: str
    title: str
    handle: str
    url: str
    price: str
    image_url: str | None
    image_alt: str | None
    loading: str


def variant_url(product: ProductRecord) -> str:
    """Product page link preselecting the first variant's options."""
    path = f"/products/{product.handle}"
    variant = product.first_variant
    if variant is None or not variant.selected_options:
        return path
    query = httpx.QueryParams(
        [(option.name, option.value) for option in variant.selected_options]
    )
    return f"{path}?{query}"


def product_cards(
    products: list[ProductRecord], eager_count: int = EAGER_IMAGE_COUNT
) -> list[ProductCard]:
    """Build cards for the visible products, in display order."""
    cards = []
    for index, product in enumerate(products):
        image = product.featured_image
        cards.append(
            ProductCard(
                id=product.id,
                title=product.title,
                handle=product.handle,
                url=variant_url(product),
                price=product.min_variant_price.format(),
                image_url=image.url if image else None,
                image_alt=(image.alt_text or product.title) if image else None,
                loading="eager" if index < eager_count else "lazy",
            )
        )
    return cards


# ============================================================================
# Facet Panel
# ============================================================================


@dataclass(frozen=True)
class FacetOptionView:
    value: str
    label: str
    checked: bool


@dataclass(frozen=True)
class FacetSection:
    facet: Facet
    title: str
    options: tuple[FacetOptionView, ...]


@dataclass(frozen=True)
class PriceSection:
    """Price slider and inputs."""

    domain_min: str
    domain_max: str
    step: str
    min_price: str
    max_price: str


@dataclass(frozen=True)
class FilterPanel:
    sections: tuple[FacetSection, ...]
    price: PriceSection
    sort_options: tuple[FacetOptionView, ...] = ()

    def section(self, facet: Facet | str) -> FacetSection | None:
        facet = Facet.parse(facet)
        return next((s for s in self.sections if s.facet is facet), None)


def build_filter_panel(
    vocabulary: FacetVocabulary,
    state: ViewState,
    hide_club_categories: bool = False,
    price_step: Decimal = DEFAULT_PRICE_STEP,
) -> FilterPanel:
    """Compose the facet panel for the current state.

    Args:
        vocabulary: Selectable options per facet.
        state: Current view state (drives `checked` and price bounds).
        hide_club_categories: Omit the club type section (collection pages).
        price_step: Slider step.

    Returns:
        FilterPanel with sections in display order.
    """
    sections = []
    for facet, title in _PANEL_FACETS:
        if facet is Facet.CATEGORY and hide_club_categories:
            continue
        options = tuple(
            FacetOptionView(
                value=option.value,
                label=option.label,
                checked=state.filters.is_selected(facet, option.value),
            )
            for option in vocabulary.options(facet)
        )
        sections.append(FacetSection(facet=facet, title=title, options=options))

    price_range = state.price_range
    price = PriceSection(
        domain_min=format_amount(price_range.domain.lower),
        domain_max=format_amount(price_range.domain.upper),
        step=format_amount(price_step),
        min_price=format_amount(price_range.min_price),
        max_price=format_amount(price_range.max_price),
    )
    sort_options = tuple(
        FacetOptionView(
            value=key.value, label=key.label, checked=key is state.sort_key
        )
        for key in SortKey
    )
    return FilterPanel(
        sections=tuple(sections), price=price, sort_options=sort_options
    )


# ============================================================================
# Navigation
# ============================================================================


@dataclass(frozen=True)
class CollectionLink:
    handle: str
    title: str
    url: str
    image_url: str | None
    current: bool


def collection_links(
    collections: list[CollectionSummary],
    current_handle: str,
    limit: int = MAX_NAV_COLLECTIONS,
) -> list[CollectionLink]:
    return [
        CollectionLink(
            handle=c.handle,
            title=c.title,
            url=f"/collections/{c.handle}",
            image_url=c.image_url,
            current=c.handle == current_handle,
        )
        for c in collections[:limit]
    ]


@dataclass(frozen=True)
class PaginationLinks:
    """Query strings for the neighbouring pages (None when unavailable)."""

    next: str | None = None
    previous: str | None = None


def pagination_links(page_info: PageInfo, address_query: str = "") -> PaginationLinks:
    """Build next/previous links that keep the current filter selection.

    Args:
        page_info: Page info of the loaded page.
        address_query: Published filter query to carry along.

    Returns:
        PaginationLinks with `cursor` and `direction` parameters.
    """

    def link(cursor: str | None, direction: str) -> str | None:
        if cursor is None:
            return None
        params = httpx.QueryParams(address_query)
        return str(params.merge({"cursor": cursor, "direction": direction}))

    return PaginationLinks(
        next=link(page_info.end_cursor, "next") if page_info.has_next_page else None,
        previous=(
            link(page_info.start_cursor, "previous")
            if page_info.has_previous_page
            else None
        ),
    )


# ============================================================================
# Listing View
# ============================================================================


@dataclass(frozen=True)
class ListingView:
    """Everything a collection page renders."""

    handle: str
    header: ListingHeader
    count_label: str
    products: list[ProductCard]
    empty_message: str | None
    panel: FilterPanel
    grid_columns: dict[str, int]
    collections: list[CollectionLink] = field(default_factory=list)
    pagination: PaginationLinks = field(default_factory=PaginationLinks)
    address: str = ""


def compose_listing_view(
    handle: str,
    state: ViewState,
    visible: list[ProductRecord],
    page_info: PageInfo,
    vocabulary: FacetVocabulary,
    collection: CollectionSummary | None = None,
    collections: list[CollectionSummary] | None = None,
    panels: PanelVisibility | None = None,
    price_step: Decimal = DEFAULT_PRICE_STEP,
) -> ListingView:
    """Compose the full page model for a listing.

    Args:
        handle: Collection handle being shown.
        state: Current view state.
        visible: Filtered and sorted products of the loaded page.
        page_info: Page info of the loaded page.
        vocabulary: Facet vocabulary.
        collection: Collection summary, if known.
        collections: Collections for the navigation strip.
        panels: Filter panel visibility.
        price_step: Price slider step.

    Returns:
        ListingView for rendering.
    """
    panels = panels or PanelVisibility()
    address = publish_query(state.filters, state.price_range)
    return ListingView(
        handle=handle,
        header=listing_header(handle, collection.title if collection else None),
        count_label=result_count_label(len(visible)),
        products=product_cards(visible),
        empty_message=None if visible else EMPTY_RESULTS_MESSAGE,
        panel=build_filter_panel(
            vocabulary,
            state,
            hide_club_categories=handle != ALL_COLLECTION,
            price_step=price_step,
        ),
        grid_columns=grid_columns(panels.desktop_open),
        collections=collection_links(collections or [], handle),
        pagination=pagination_links(page_info, address),
        address=address,
    )
