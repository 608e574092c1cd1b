"""API schemas for the storefront listing service.

Pydantic models for response serialization.
"""

from typing import Any

from pydantic import BaseModel, Field


# ============================================================================
# Common Schemas
# ============================================================================


class ErrorResponse(BaseModel):
    """Standard error response.

    All API errors follow this format for consistency.
    """

    error_code: str = Field(..., description="Machine-readable error code")
    message: str = Field(..., description="Human-readable error message")
    details: dict[str, Any] = Field(
        default_factory=dict, description="Additional error details"
    )
    request_id: str | None = Field(
        default=None, description="Request ID for correlation"
    )


# ============================================================================
# Probe Schemas
# ============================================================================


class HealthResponse(BaseModel):
    """Liveness probe response."""

    status: str
    service: str
    version: str


class ReadinessResponse(BaseModel):
    """Readiness probe response."""

    status: str
    catalog: str | None = None
    page_size: int | None = None


class OptionSchema(BaseModel):
    """A selectable facet or sort option."""

    value: str
    label: str
    checked: bool = False


# ============================================================================
# Facet Schemas
# ============================================================================


class PriceDomainSchema(BaseModel):
    """Price slider bounds."""

    min: str = Field(..., description="Lowest selectable price")
    max: str = Field(..., description="Highest selectable price")
    step: str = Field(..., description="Slider granularity")


class FacetVocabularySchema(BaseModel):
    """Facet name with its selectable options."""

    facet: str
    options: list[OptionSchema]


class FacetsResponse(BaseModel):
    """Response for GET /facets."""

    facets: list[FacetVocabularySchema]
    price: PriceDomainSchema
    sort_options: list[OptionSchema]


# ============================================================================
# Listing Schemas
# ============================================================================


class HeaderSchema(BaseModel):
    title: str
    description: str


class ProductCardSchema(BaseModel):
    """Product card in the listing grid."""

    id: str
    title: str
    handle: str
    url: str = Field(..., description="Product page link with variant options")
    price: str = Field(..., description="Formatted minimum variant price")
    image_url: str | None = None
    image_alt: str | None = None
    loading: str = Field(..., description="Image loading hint (eager/lazy)")


class FacetSectionSchema(BaseModel):
    facet: str
    title: str
    options: list[OptionSchema]


class PriceSectionSchema(BaseModel):
    """Price range section of the filter panel."""

    domain_min: str
    domain_max: str
    step: str
    min_price: str
    max_price: str


class FilterPanelSchema(BaseModel):
    sections: list[FacetSectionSchema]
    price: PriceSectionSchema
    sort_options: list[OptionSchema]


class CollectionLinkSchema(BaseModel):
    handle: str
    title: str
    url: str
    image_url: str | None = None
    current: bool = False


class PaginationSchema(BaseModel):
    """Query strings for the neighbouring pages."""

    next: str | None = Field(default=None, description="Next page query string")
    previous: str | None = Field(
        default=None, description="Previous page query string"
    )


class ListingResponse(BaseModel):
    """Response for GET /collections/{handle}."""

    handle: str
    header: HeaderSchema
    count_label: str
    products: list[ProductCardSchema]
    empty_message: str | None = None
    panel: FilterPanelSchema
    grid_columns: dict[str, int]
    collections: list[CollectionLinkSchema]
    pagination: PaginationSchema
    address: str = Field(
        ..., description="Canonical filter query string (empty when unfiltered)"
    )
    sort: str = Field(..., description="Active sort key (never in address)")
    catalog_error: str | None = Field(
        default=None, description="Failure code when the page could not be fetched"
    )
