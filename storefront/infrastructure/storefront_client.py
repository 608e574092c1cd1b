"""Storefront API client.

Thin GraphQL-over-HTTP client for the Shopify Storefront API. Fetches
cursor pages of products (optionally scoped to a collection) and the
collection list used for navigation. All transport and payload failures
surface as FetchError.
"""

from typing import Any

import httpx
import structlog
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from storefront.catalog.source import ALL_COLLECTION, CollectionSummary
from storefront.domain.exceptions import CollectionNotFoundError, FetchError
from storefront.domain.value_objects import (
    CursorPage,
    PageDirection,
    PageInfo,
    Price,
    ProductImage,
    ProductRecord,
    ProductVariant,
    SelectedOption,
)

logger = structlog.get_logger()


# ============================================================================
# GraphQL Documents
# ============================================================================

PRODUCT_ITEM_FRAGMENT = """
  fragment MoneyProductItem on MoneyV2 {
    amount
    currencyCode
  }
  fragment ProductItem on Product {
    id
    handle
    title
    tags
    featuredImage {
      id
      altText
      url
      width
      height
    }
    priceRange {
      minVariantPrice {
        ...MoneyProductItem
      }
    }
    variants(first: 1) {
      nodes {
        id
        selectedOptions {
          name
          value
        }
      }
    }
  }
"""

PAGE_INFO_FIELDS = """
      pageInfo {
        hasPreviousPage
        hasNextPage
        startCursor
        endCursor
      }
"""

CATALOG_QUERY = (
    PRODUCT_ITEM_FRAGMENT
    + """
  query Catalog($first: Int, $last: Int, $startCursor: String, $endCursor: String) {
    products(first: $first, last: $last, before: $startCursor, after: $endCursor) {
      nodes {
        ...ProductItem
      }
"""
    + PAGE_INFO_FIELDS
    + """
    }
  }
"""
)

COLLECTION_QUERY = (
    PRODUCT_ITEM_FRAGMENT
    + """
  query Collection(
    $handle: String!
    $first: Int
    $last: Int
    $startCursor: String
    $endCursor: String
  ) {
    collection(handle: $handle) {
      id
      handle
      title
      products(first: $first, last: $last, before: $startCursor, after: $endCursor) {
        nodes {
          ...ProductItem
        }
"""
    + PAGE_INFO_FIELDS
    + """
      }
    }
  }
"""
)

COLLECTION_LOOKUP_QUERY = """
  query CollectionLookup($handle: String!) {
    collection(handle: $handle) {
      id
      handle
      title
      image {
        url
      }
    }
  }
"""

COLLECTIONS_QUERY = """
  query StoreCollections($first: Int!) {
    collections(first: $first, sortKey: UPDATED_AT, reverse: false) {
      nodes {
        id
        handle
        title
        image {
          url
        }
      }
    }
  }
"""


# ============================================================================
# Response Models
# ============================================================================


class _Node(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class MoneyNode(_Node):
    amount: str | int | float | None = None
    currency_code: str = Field(default="USD", alias="currencyCode")


class PriceRangeNode(_Node):
    min_variant_price: MoneyNode | None = Field(default=None, alias="minVariantPrice")


class SelectedOptionNode(_Node):
    name: str
    value: str


class VariantNode(_Node):
    id: str = ""
    selected_options: list[SelectedOptionNode] = Field(
        default_factory=list, alias="selectedOptions"
    )


class VariantConnection(_Node):
    nodes: list[VariantNode] = Field(default_factory=list)


class ImageNode(_Node):
    url: str
    alt_text: str | None = Field(default=None, alias="altText")
    width: int | None = None
    height: int | None = None


class ProductNode(_Node):
    id: str
    handle: str
    title: str
    tags: list[str] | None = None
    featured_image: ImageNode | None = Field(default=None, alias="featuredImage")
    price_range: PriceRangeNode | None = Field(default=None, alias="priceRange")
    variants: VariantConnection = Field(default_factory=VariantConnection)

    def to_record(self) -> ProductRecord:
        """Convert to the domain product record."""
        money = self.price_range.min_variant_price if self.price_range else None
        amount = money.amount if money else None
        return ProductRecord(
            id=self.id,
            title=self.title,
            handle=self.handle,
            tags=frozenset(self.tags or ()),
            min_variant_price=Price(
                amount=None if amount is None else str(amount),
                currency_code=money.currency_code if money else "USD",
            ),
            variants=tuple(
                ProductVariant(
                    id=v.id,
                    selected_options=tuple(
                        SelectedOption(name=o.name, value=o.value)
                        for o in v.selected_options
                    ),
                )
                for v in self.variants.nodes
            ),
            featured_image=(
                ProductImage(
                    url=self.featured_image.url,
                    alt_text=self.featured_image.alt_text,
                    width=self.featured_image.width,
                    height=self.featured_image.height,
                )
                if self.featured_image
                else None
            ),
        )


class PageInfoNode(_Node):
    has_next_page: bool = Field(default=False, alias="hasNextPage")
    has_previous_page: bool = Field(default=False, alias="hasPreviousPage")
    start_cursor: str | None = Field(default=None, alias="startCursor")
    end_cursor: str | None = Field(default=None, alias="endCursor")


class ProductConnection(_Node):
    nodes: list[ProductNode] = Field(default_factory=list)
    page_info: PageInfoNode = Field(default_factory=PageInfoNode, alias="pageInfo")

    def to_page(self) -> CursorPage:
        """Convert to a domain cursor page."""
        return CursorPage(
            products=tuple(node.to_record() for node in self.nodes),
            page_info=PageInfo(
                has_next_page=self.page_info.has_next_page,
                has_previous_page=self.page_info.has_previous_page,
                start_cursor=self.page_info.start_cursor,
                end_cursor=self.page_info.end_cursor,
            ),
        )


class CollectionImageNode(_Node):
    url: str


class CollectionNode(_Node):
    id: str
    handle: str
    title: str
    image: CollectionImageNode | None = None
    products: ProductConnection | None = None

    def to_summary(self) -> CollectionSummary:
        return CollectionSummary(
            id=self.id,
            handle=self.handle,
            title=self.title,
            image_url=self.image.url if self.image else None,
        )


# ============================================================================
# Client
# ============================================================================


def pagination_variables(
    cursor: str | None,
    direction: PageDirection,
    page_size: int,
) -> dict[str, Any]:
    """Build connection arguments for a page request.

    Args:
        cursor: Cursor to page from; None for the first page.
        direction: NEXT pages forward after the cursor, PREVIOUS backward.
        page_size: Page size.

    Returns:
        GraphQL variables (first/endCursor or last/startCursor).
    """
    if cursor is None:
        return {"first": page_size}
    if PageDirection(direction) is PageDirection.PREVIOUS:
        return {"last": page_size, "startCursor": cursor}
    return {"first": page_size, "endCursor": cursor}


class StorefrontCatalogClient:
    """HTTP client for the Storefront GraphQL API.

    Example usage:
        client = StorefrontCatalogClient(
            base_url="https://golf-store.myshopify.com",
            access_token="public-token",
        )
        page = await client.fetch_page(None, PageDirection.NEXT, 12)
        await client.close()
    """

    def __init__(
        self,
        base_url: str,
        access_token: str,
        api_version: str = "2024-10",
        timeout: float = 10.0,
    ) -> None:
        """Initialize the client.

        Args:
            base_url: Shop base URL.
            access_token: Storefront API public access token.
            api_version: Storefront API version.
            timeout: Request timeout in seconds.
        """
        self.base_url = base_url.rstrip("/")
        self.access_token = access_token
        self.api_version = api_version
        self.timeout = timeout
        self._client: httpx.AsyncClient | None = None

    @property
    def endpoint(self) -> str:
        """GraphQL endpoint path."""
        return f"/api/{self.api_version}/graphql.json"

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create the HTTP client."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                timeout=self.timeout,
                headers={
                    "X-Shopify-Storefront-Access-Token": self.access_token,
                    "Content-Type": "application/json",
                    "Accept": "application/json",
                },
            )
        return self._client

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def _query(self, query: str, variables: dict[str, Any]) -> dict[str, Any]:
        """Execute a GraphQL query.

        Args:
            query: GraphQL document.
            variables: Query variables.

        Returns:
            The `data` object of the response.

        Raises:
            FetchError: On timeout, transport error, HTTP error status,
                non-JSON body or GraphQL errors.
        """
        client = await self._get_client()

        try:
            logger.debug("Making Storefront request", variables=variables)
            response = await client.post(
                self.endpoint,
                json={"query": query, "variables": variables},
            )
        except httpx.TimeoutException as e:
            logger.error("Storefront request timeout", error=str(e))
            raise FetchError(
                f"Storefront request timed out: {e}", code="TIMEOUT"
            ) from e
        except httpx.RequestError as e:
            logger.error("Storefront request failed", error=str(e))
            raise FetchError(
                f"Storefront request failed: {e}", code="REQUEST_ERROR"
            ) from e

        if response.status_code >= 400:
            raise FetchError(
                f"Storefront responded with HTTP {response.status_code}",
                code="HTTP_ERROR",
                details={"status_code": response.status_code},
            )

        try:
            payload = response.json()
        except ValueError as e:
            raise FetchError(
                "Storefront response is not valid JSON", code="MALFORMED_RESPONSE"
            ) from e

        if not isinstance(payload, dict):
            raise FetchError(
                "Storefront response is not an object", code="MALFORMED_RESPONSE"
            )
        if payload.get("errors"):
            messages = [
                err.get("message", "Unknown error") if isinstance(err, dict) else str(err)
                for err in payload["errors"]
            ]
            raise FetchError(
                f"Storefront query failed: {'; '.join(messages)}",
                code="GRAPHQL_ERROR",
                details={"errors": messages},
            )

        data = payload.get("data")
        if not isinstance(data, dict):
            raise FetchError(
                "Storefront response has no data", code="MALFORMED_RESPONSE"
            )
        return data

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
            direction: Paging direction relative to the cursor.
            page_size: Maximum number of products.
            collection: Optional collection handle; "all" means no scope.

        Returns:
            The requested page.

        Raises:
            FetchError: On network or payload failures.
            CollectionNotFoundError: If the collection does not exist.
        """
        variables = pagination_variables(cursor, direction, page_size)

        if collection is None or collection == ALL_COLLECTION:
            data = await self._query(CATALOG_QUERY, variables)
            connection = data.get("products")
        else:
            data = await self._query(COLLECTION_QUERY, {"handle": collection, **variables})
            node = data.get("collection")
            if node is None:
                raise CollectionNotFoundError(collection)
            connection = node.get("products") if isinstance(node, dict) else None

        try:
            return ProductConnection.model_validate(connection).to_page()
        except ValidationError as e:
            raise FetchError(
                "Storefront product page is malformed",
                code="MALFORMED_RESPONSE",
                details={"errors": e.error_count()},
            ) from e

    async def fetch_collection(self, handle: str) -> CollectionSummary | None:
        """Look up a collection by handle.

        Args:
            handle: Collection handle.

        Returns:
            Collection summary, or None if the shop has no such collection.

        Raises:
            FetchError: On network or payload failures.
        """
        if handle == ALL_COLLECTION:
            return CollectionSummary(id="all", handle=ALL_COLLECTION, title="Golf Clubs")

        data = await self._query(COLLECTION_LOOKUP_QUERY, {"handle": handle})
        node = data.get("collection")
        if node is None:
            return None
        try:
            return CollectionNode.model_validate(node).to_summary()
        except ValidationError as e:
            raise FetchError(
                "Storefront collection is malformed", code="MALFORMED_RESPONSE"
            ) from e

    async def list_collections(self, limit: int = 6) -> list[CollectionSummary]:
        """List collections for navigation.

        Args:
            limit: Maximum number of collections.

        Returns:
            Collection summaries.

        Raises:
            FetchError: On network or payload failures.
        """
        data = await self._query(COLLECTIONS_QUERY, {"first": limit})
        connection = data.get("collections")
        nodes = connection.get("nodes") if isinstance(connection, dict) else None
        if not isinstance(nodes, list):
            raise FetchError(
                "Storefront collections are malformed", code="MALFORMED_RESPONSE"
            )
        try:
            return [CollectionNode.model_validate(n).to_summary() for n in nodes]
        except ValidationError as e:
            raise FetchError(
                "Storefront collections are malformed", code="MALFORMED_RESPONSE"
            ) from e
