"""In-memory golf club catalog.

Generates and stores second-hand golf clubs with deterministic seeding and
serves them through the cursor-page contract. Used for local development
when no Storefront API is configured, and as the catalog in tests.
"""

import base64
import binascii
import hashlib
import random
from dataclasses import dataclass

import structlog

from storefront.catalog.source import ALL_COLLECTION, CollectionSummary
from storefront.domain.exceptions import CollectionNotFoundError, FetchError
from storefront.domain.filters import Condition, Hand, PlayerLevel
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
# Constants
# ============================================================================

MODELS = {
    "Titleist": ["TSR2", "TSR3", "T100", "Vokey SM9", "Scotty Cameron Newport"],
    "TaylorMade": ["Stealth 2", "Qi10", "P790", "Spider Tour", "Milled Grind 4"],
    "Callaway": ["Paradym", "Rogue ST", "Apex Pro", "Odyssey White Hot", "Jaws Raw"],
    "PING": ["G430", "G425", "i230", "Anser", "Glide 4.0"],
    "Mizuno": ["ST-Z 230", "JPX 923", "Pro 225", "T24", "M.Craft"],
    "Cobra": ["Aerojet", "LTDx", "King Tec", "King Cobra", "Snakebite"],
}

FLEXES = ["Regular", "Stiff", "Senior", "X-Stiff"]

# Club categories with price ranges (whole dollars) and title wording
CATEGORIES = [
    {"handle": "drivers", "title": "Drivers", "club": "Driver", "price_range": (149, 599)},
    {"handle": "irons", "title": "Iron Sets", "club": "Iron Set", "price_range": (299, 1499)},
    {"handle": "wedges", "title": "Wedges", "club": "Wedge", "price_range": (59, 189)},
    {"handle": "putters", "title": "Putters", "club": "Putter", "price_range": (79, 449)},
    {"handle": "woods", "title": "Fairway Woods", "club": "Fairway Wood", "price_range": (99, 399)},
    {"handle": "hybrids", "title": "Hybrids", "club": "Hybrid", "price_range": (89, 299)},
]


def encode_cursor(position: int) -> str:
    """Encode a list position as an opaque cursor."""
    return base64.urlsafe_b64encode(f"cursor:{position}".encode()).decode()


def decode_cursor(cursor: str) -> int:
    """Decode an opaque cursor back into a list position.

    Raises:
        FetchError: If the cursor was not produced by `encode_cursor`.
    """
    try:
        raw = base64.urlsafe_b64decode(cursor.encode()).decode()
        prefix, _, position = raw.partition(":")
        if prefix != "cursor" or int(position) < 0:
            raise ValueError(raw)
        return int(position)
    except (binascii.Error, UnicodeDecodeError, ValueError):
        raise FetchError(
            f"Invalid cursor: {cursor}", code="INVALID_CURSOR"
        ) from None


# ============================================================================
# Catalog Store
# ============================================================================


@dataclass
class _StoredCollection:
    summary: CollectionSummary
    product_ids: list[str]


class GolfCatalogStore:
    """In-memory golf club catalog with deterministic generation.

    Products are listed in generation order, which is the catalog arrival
    order used by best match.
    """

    def __init__(
        self,
        seed: int = 42,
        products_per_category: int = 5,
    ) -> None:
        """Initialize the catalog.

        Args:
            seed: Random seed for reproducibility.
            products_per_category: Products generated per club category.
        """
        self.seed = seed
        self.products_per_category = products_per_category
        self._products: dict[str, ProductRecord] = {}
        self._collections: dict[str, _StoredCollection] = {}
        self._generate_products()

    def _deterministic_seed(self, *args: str | int) -> int:
        """Create deterministic seed from arguments."""
        data = "|".join(str(a) for a in args)
        hash_bytes = hashlib.md5(data.encode()).digest()
        return int.from_bytes(hash_bytes[:4], "big")

    def _generate_product_id(self, handle: str, index: int) -> str:
        """Generate deterministic product GID."""
        digest = self._deterministic_seed(handle, index, self.seed)
        return f"gid://shopify/Product/{digest}"

    def _generate_products(self) -> None:
        """Generate all products and their category collections."""
        for category in CATEGORIES:
            product_ids = []
            for i in range(self.products_per_category):
                rng = random.Random(
                    self._deterministic_seed(self.seed, category["handle"], i)
                )
                product = self._generate_product(category, i, rng)
                self._products[product.id] = product
                product_ids.append(product.id)

            summary = CollectionSummary(
                id=f"gid://shopify/Collection/{self._deterministic_seed(category['handle'])}",
                handle=category["handle"],
                title=category["title"],
                image_url=f"https://picsum.photos/seed/{category['handle']}/600/400",
            )
            self._collections[category["handle"]] = _StoredCollection(
                summary=summary, product_ids=product_ids
            )

    def _generate_product(
        self, category: dict, index: int, rng: random.Random
    ) -> ProductRecord:
        """Generate one club."""
        brand = rng.choice(sorted(MODELS))
        model = rng.choice(MODELS[brand])
        hand = Hand.RIGHT if rng.random() < 0.8 else Hand.LEFT
        condition = rng.choice(list(Condition))
        level = rng.choice(list(PlayerLevel))

        title = f"{brand} {model} {category['club']} - {hand.label}"
        handle = "-".join(
            part.lower().replace(".", "")
            for part in f"{brand} {model} {category['club']} {hand.value} {index}".split()
        )

        low, high = category["price_range"]
        price = rng.randint(low, high)

        product_id = self._generate_product_id(category["handle"], index)
        flexes = rng.sample(FLEXES, rng.randint(1, 3))
        variants = tuple(
            ProductVariant(
                id=f"{product_id.replace('Product', 'ProductVariant')}{n}",
                selected_options=(
                    SelectedOption(name="Hand", value=hand.value.title()),
                    SelectedOption(name="Flex", value=flex),
                ),
            )
            for n, flex in enumerate(flexes)
        )

        return ProductRecord(
            id=product_id,
            title=title,
            handle=handle,
            tags=frozenset({category["handle"], condition.value, level.value}),
            min_variant_price=Price(amount=f"{price}.0", currency_code="USD"),
            variants=variants,
            featured_image=ProductImage(
                url=f"https://picsum.photos/seed/{handle}/400/400",
                alt_text=title,
                width=400,
                height=400,
            ),
        )

    def _scoped_products(self, collection: str | None) -> list[ProductRecord]:
        """Get products in arrival order, optionally limited to a collection."""
        if collection is None or collection == ALL_COLLECTION:
            return list(self._products.values())
        stored = self._collections.get(collection)
        if stored is None:
            raise CollectionNotFoundError(collection)
        return [self._products[pid] for pid in stored.product_ids]

    @property
    def products(self) -> list[ProductRecord]:
        """All products in arrival order."""
        return list(self._products.values())

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
            direction: NEXT pages after the cursor, PREVIOUS before it.
            page_size: Maximum number of products.
            collection: Optional collection handle.

        Returns:
            The requested page.

        Raises:
            FetchError: If the cursor is invalid.
            CollectionNotFoundError: If the collection does not exist.
        """
        direction = PageDirection(direction)
        products = self._scoped_products(collection)
        total = len(products)

        if cursor is None:
            start, end = 0, min(total, page_size)
        elif direction is PageDirection.PREVIOUS:
            # Page ends just before the cursor position
            end = min(total, decode_cursor(cursor))
            start = max(0, end - page_size)
        else:
            start = decode_cursor(cursor) + 1
            end = min(total, start + page_size)
        window = products[start:end]

        page_info = PageInfo(
            has_next_page=end < total,
            has_previous_page=start > 0,
            start_cursor=encode_cursor(start) if window else None,
            end_cursor=encode_cursor(end - 1) if window else None,
        )
        logger.debug(
            "Served catalog page",
            collection=collection or ALL_COLLECTION,
            direction=direction.value,
            start=start,
            count=len(window),
        )
        return CursorPage(products=tuple(window), page_info=page_info)

    async def fetch_collection(self, handle: str) -> CollectionSummary | None:
        """Look up a collection by handle.

        Args:
            handle: Collection handle.

        Returns:
            Collection summary or None if not found.
        """
        if handle == ALL_COLLECTION:
            return CollectionSummary(id="all", handle=ALL_COLLECTION, title="Golf Clubs")
        stored = self._collections.get(handle)
        return stored.summary if stored else None

    async def list_collections(self, limit: int = 6) -> list[CollectionSummary]:
        """List collections for navigation."""
        return [stored.summary for stored in self._collections.values()][:limit]


# Global catalog store instance
_catalog_store: GolfCatalogStore | None = None


def get_catalog_store(
    seed: int = 42,
    products_per_category: int = 5,
) -> GolfCatalogStore:
    """Get or create the catalog store instance.

    Args:
        seed: Random seed.
        products_per_category: Products per category.

    Returns:
        GolfCatalogStore instance.
    """
    global _catalog_store
    if _catalog_store is None:
        _catalog_store = GolfCatalogStore(seed, products_per_category)
    return _catalog_store
