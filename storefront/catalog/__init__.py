"""Product catalog: filtering, sorting, vocabularies and pagination.

Provides the predicate and sort engines that derive the visible product
set, the facet vocabularies, the seeded in-memory golf catalog and the
cursor paginator that wraps any catalog source.
"""

from storefront.catalog.pagination import DEFAULT_PAGE_SIZE, CursorPaginator
from storefront.catalog.predicates import (
    filter_products,
    include,
    matches_facet,
    matches_price,
    visible_products,
)
from storefront.catalog.sorting import sort_products
from storefront.catalog.source import ALL_COLLECTION, CatalogSource, CollectionSummary
from storefront.catalog.store import GolfCatalogStore, get_catalog_store
from storefront.catalog.vocabulary import FacetOption, FacetVocabulary

__all__ = [
    # Predicate engine
    "include",
    "filter_products",
    "matches_facet",
    "matches_price",
    "visible_products",
    # Sort engine
    "sort_products",
    # Vocabulary
    "FacetOption",
    "FacetVocabulary",
    # Sources
    "ALL_COLLECTION",
    "CatalogSource",
    "CollectionSummary",
    "GolfCatalogStore",
    "get_catalog_store",
    # Pagination
    "CursorPaginator",
    "DEFAULT_PAGE_SIZE",
]
