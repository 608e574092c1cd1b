"""Domain exceptions.

All domain-level errors raised by the filter model, the paginator and the
catalog sources. Recoverable failures (fetch errors, malformed address
values) are handled close to where they occur; these classes exist so that
callers and the HTTP layer can catch domain errors uniformly.
"""

from typing import Any


class DomainError(Exception):
    """Base class for all domain exceptions.

    All domain errors should inherit from this class to allow
    catching domain-specific errors at the application layer.
    """

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        """Initialize domain error.

        Args:
            message: Human-readable error message.
            details: Optional dictionary with additional error context.
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}


# ============================================================================
# Filter Errors
# ============================================================================


class FilterError(DomainError):
    """Base class for filter-state errors."""

    pass


class UnknownFacetError(FilterError):
    """Raised when a facet name is not one of the known facets."""

    def __init__(self, facet: str) -> None:
        """Initialize unknown facet error.

        Args:
            facet: The unrecognized facet name.
        """
        super().__init__(
            f"Unknown facet '{facet}'",
            details={"facet": facet},
        )


class InvalidFilterTokenError(FilterError):
    """Raised when a blank token is toggled."""

    def __init__(self, facet: str, token: str) -> None:
        """Initialize invalid token error.

        Args:
            facet: Facet the token was toggled in.
            token: The rejected token.
        """
        super().__init__(
            f"Invalid token {token!r} for facet '{facet}'",
            details={"facet": facet, "token": token},
        )


# ============================================================================
# Pagination Errors
# ============================================================================


class PaginationError(DomainError):
    """Base class for pagination errors."""

    pass


class PageUnavailableError(PaginationError):
    """Raised when a page is requested in a direction with no more pages."""

    def __init__(self, direction: str) -> None:
        """Initialize page unavailable error.

        Args:
            direction: Requested direction ("next" or "previous").
        """
        super().__init__(
            f"No {direction} page is available",
            details={"direction": direction},
        )


class PageRequestInFlightError(PaginationError):
    """Raised when a page request in the same direction is still pending."""

    def __init__(self, direction: str) -> None:
        """Initialize in-flight error.

        Args:
            direction: Requested direction ("next" or "previous").
        """
        super().__init__(
            f"A {direction} page request is already in flight",
            details={"direction": direction},
        )


# ============================================================================
# Catalog Errors
# ============================================================================


class CatalogError(DomainError):
    """Base class for catalog source errors."""

    pass


class FetchError(CatalogError):
    """Raised when a catalog page cannot be fetched or parsed."""

    def __init__(
        self,
        message: str,
        code: str = "FETCH_ERROR",
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize fetch error.

        Args:
            message: Human-readable error message.
            code: Short machine-readable failure code.
            details: Optional dictionary with additional error context.
        """
        super().__init__(message, details={"code": code, **(details or {})})
        self.code = code


class CollectionNotFoundError(CatalogError):
    """Raised when a collection handle does not exist."""

    def __init__(self, handle: str) -> None:
        """Initialize collection not found error.

        Args:
            handle: The requested collection handle.
        """
        super().__init__(
            f"Collection {handle} not found",
            details={"handle": handle},
        )
