"""API layer module.

Contains FastAPI routers, response schemas and middleware.
"""

from storefront.api.health import router as health_router
from storefront.api.listings import router as listings_router

__all__ = [
    "health_router",
    "listings_router",
]
