"""Golf storefront listing service.

Faceted filtering, sorting and cursor pagination over a Storefront product
catalog, with the filter selection mirrored in the page address.
"""

__version__ = "0.1.0"
