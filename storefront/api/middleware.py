"""HTTP middleware for the listing service.

Every response carries an ``X-Request-ID`` and a ``Server-Timing`` entry, and
listing requests log the collection handle and the filter keys they carried.
"""

import time
from typing import Callable
from uuid import uuid4

import structlog
from fastapi import FastAPI, Request, Response, status
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from storefront.api.schemas import ErrorResponse

logger = structlog.get_logger()

REQUEST_ID_HEADER = "X-Request-ID"
COLLECTIONS_PREFIX = "/collections/"


def _collection_handle(path: str) -> str | None:
    if not path.startswith(COLLECTIONS_PREFIX):
        return None
    return path[len(COLLECTIONS_PREFIX):].split("/", 1)[0] or None


# ============================================================================
# Request Context
# ============================================================================


class RequestContextMiddleware(BaseHTTPMiddleware):
    """Bind request id and listing context to the structlog context vars."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request_id = request.headers.get(REQUEST_ID_HEADER) or uuid4().hex
        request.state.request_id = request_id

        context = {"request_id": request_id}
        handle = _collection_handle(request.url.path)
        if handle is not None:
            context["collection"] = handle
        structlog.contextvars.bind_contextvars(**context)

        started = time.perf_counter()
        response: Response | None = None
        try:
            response = await call_next(request)
        finally:
            elapsed_ms = round((time.perf_counter() - started) * 1000, 2)
            logger.info(
                "Request served",
                method=request.method,
                path=request.url.path,
                filter_keys=sorted(set(request.query_params.keys())),
                status_code=response.status_code if response else 500,
                duration_ms=elapsed_ms,
            )
            structlog.contextvars.unbind_contextvars(*context)

        response.headers[REQUEST_ID_HEADER] = request_id
        response.headers["Server-Timing"] = f"app;dur={elapsed_ms}"
        return response


# ============================================================================
# Unhandled Errors
# ============================================================================


class UnhandledErrorMiddleware(BaseHTTPMiddleware):
    """Turn any exception that escapes the routers into a 500 envelope."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        try:
            return await call_next(request)
        except Exception:
            logger.exception("Unhandled listing failure", path=request.url.path)
            body = ErrorResponse(
                error_code="INTERNAL_ERROR",
                message="An internal error occurred",
                request_id=getattr(request.state, "request_id", None),
            )
            return JSONResponse(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                content=body.model_dump(),
            )


def setup_middleware(app: FastAPI) -> None:
    """Install middleware; the last one added runs first.

    Args:
        app: FastAPI application instance.
    """
    app.add_middleware(UnhandledErrorMiddleware)
    app.add_middleware(RequestContextMiddleware)
