"""Sort engine.

Orders a product sequence by a SortKey. Sorting is stable, never mutates
its input, and leaves catalog arrival order untouched for best match.
Products whose price cannot be parsed sort after all priced products in
either direction.
"""

from collections.abc import Iterable

from storefront.domain.value_objects import ProductRecord
from storefront.domain.view_state import SortKey


def sort_products(
    products: Iterable[ProductRecord],
    key: SortKey,
) -> list[ProductRecord]:
    """Return a new list ordered by the sort key.

    Args:
        products: Products in arrival order.
        key: Requested ordering.

    Returns:
        New list; ties keep their relative order.
    """
    key = SortKey(key)
    items = list(products)
    if key is SortKey.BEST_MATCH:
        return items

    priced = [p for p in items if p.price is not None]
    unpriced = [p for p in items if p.price is None]
    # list.sort stays stable with reverse=True
    priced.sort(key=lambda p: p.price, reverse=key is SortKey.PRICE_HIGH_TO_LOW)
    return priced + unpriced
