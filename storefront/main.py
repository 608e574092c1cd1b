"""Storefront listing service main application module.

This module initializes the FastAPI application and configures
core middleware, routers, and startup/shutdown events.
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

import structlog
from fastapi import FastAPI, HTTPException, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from storefront.api.health import router as health_router
from storefront.api.listings import router as listings_router
from storefront.api.middleware import setup_middleware
from storefront.api.schemas import ErrorResponse
from storefront.catalog.source import CatalogSource
from storefront.catalog.store import get_catalog_store
from storefront.domain.exceptions import (
    CollectionNotFoundError,
    DomainError,
    FetchError,
    FilterError,
    PaginationError,
)
from storefront.infrastructure.config import settings
from storefront.infrastructure.logging_config import configure_logging
from storefront.infrastructure.storefront_client import StorefrontCatalogClient

logger = structlog.get_logger()


def create_catalog_source() -> CatalogSource:
    """Create the catalog source selected by configuration.

    Returns:
        Storefront API client when a URL is configured, else the
        in-memory golf catalog.
    """
    if settings.storefront_api_url:
        return StorefrontCatalogClient(
            base_url=settings.storefront_api_url,
            access_token=settings.storefront_access_token,
            api_version=settings.storefront_api_version,
            timeout=settings.storefront_timeout,
        )
    return get_catalog_store(
        seed=settings.catalog_seed,
        products_per_category=settings.products_per_category,
    )


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Handle application startup and shutdown events.

    Args:
        app: The FastAPI application instance.

    Yields:
        None after startup, cleanup happens after yield.
    """
    configure_logging(level=settings.log_level, json=settings.log_json)
    logger.info(
        "Starting storefront listing service",
        version=settings.api_version,
        debug=settings.debug,
    )

    source = create_catalog_source()
    app.state.catalog_source = source
    logger.info(
        "Catalog source ready",
        source=type(source).__name__,
        page_size=settings.page_size,
    )

    yield

    logger.info("Shutting down storefront listing service")
    if isinstance(source, StorefrontCatalogClient):
        await source.close()
    app.state.catalog_source = None


app = FastAPI(
    title="Golf Storefront",
    description="Faceted product listing for second hand golf clubs",
    version=settings.api_version,
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
)

# CORS middleware (must be added before custom middleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Setup custom middleware (request ID, error handling)
setup_middleware(app)

# Include routers
app.include_router(health_router, tags=["Health"])
app.include_router(listings_router)


# ============================================================================
# Error Envelopes
# ============================================================================


# Most specific first
_DOMAIN_ERROR_STATUS: list[tuple[type[DomainError], int, str]] = [
    (CollectionNotFoundError, status.HTTP_404_NOT_FOUND, "COLLECTION_NOT_FOUND"),
    (FetchError, status.HTTP_502_BAD_GATEWAY, "CATALOG_UNAVAILABLE"),
    (FilterError, status.HTTP_400_BAD_REQUEST, "INVALID_FILTER"),
    (PaginationError, status.HTTP_409_CONFLICT, "PAGE_UNAVAILABLE"),
]


def _error_envelope(
    request: Request,
    status_code: int,
    error_code: str,
    message: str,
    details: dict | None = None,
) -> JSONResponse:
    body = ErrorResponse(
        error_code=error_code,
        message=message,
        details=details or {},
        request_id=getattr(request.state, "request_id", None),
    )
    return JSONResponse(status_code=status_code, content=body.model_dump())


@app.exception_handler(DomainError)
async def domain_exception_handler(request: Request, exc: DomainError):
    """Map listing and catalog errors onto HTTP statuses."""
    status_code, error_code = status.HTTP_500_INTERNAL_SERVER_ERROR, "INTERNAL_ERROR"
    for error_type, mapped_status, mapped_code in _DOMAIN_ERROR_STATUS:
        if isinstance(exc, error_type):
            status_code, error_code = mapped_status, mapped_code
            break

    logger.warning(
        "Listing request failed",
        path=request.url.path,
        error_code=error_code,
        error=exc.message,
    )
    return _error_envelope(request, status_code, error_code, exc.message, exc.details)


@app.exception_handler(HTTPException)
async def http_exception_handler(request: Request, exc: HTTPException):
    """Wrap framework HTTP errors (unknown routes, bad methods) in the envelope."""
    if isinstance(exc.detail, dict):
        return _error_envelope(
            request,
            exc.status_code,
            exc.detail.get("error_code", "ERROR"),
            exc.detail.get("message", str(exc.detail)),
            exc.detail.get("details"),
        )
    return _error_envelope(request, exc.status_code, "ERROR", str(exc.detail))


def run() -> None:
    """Serve the application with uvicorn."""
    import uvicorn

    uvicorn.run(
        "storefront.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
    )


if __name__ == "__main__":
    run()
