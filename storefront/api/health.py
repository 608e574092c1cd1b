"""Liveness and readiness probes."""

from fastapi import APIRouter, Request, Response, status

from storefront.api.schemas import HealthResponse, ReadinessResponse
from storefront.infrastructure.config import settings
from storefront.infrastructure.storefront_client import StorefrontCatalogClient

router = APIRouter()


@router.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Report that the process is up, with its name and version."""
    return HealthResponse(
        status="healthy",
        service=settings.service_name,
        version=settings.api_version,
    )


@router.get(
    "/ready",
    response_model=ReadinessResponse,
    responses={503: {"model": ReadinessResponse}},
)
async def readiness_check(request: Request, response: Response) -> ReadinessResponse:
    """Report whether a catalog source is attached to the application.

    The ``catalog`` field names the backing source: ``storefront`` for the
    remote Storefront API, ``in-memory`` for the seeded golf catalog.
    """
    source = getattr(request.app.state, "catalog_source", None)
    if source is None:
        response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE
        return ReadinessResponse(status="starting", catalog=None)

    catalog = (
        "storefront" if isinstance(source, StorefrontCatalogClient) else "in-memory"
    )
    return ReadinessResponse(
        status="ready",
        catalog=catalog,
        page_size=settings.page_size,
    )
