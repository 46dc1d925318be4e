"""Business logic services."""

from seller_scout.services.catalog import (
    ProductAddRequest,
    ProductCatalog,
    ProductNotFoundError,
    ProductSearchResult,
    SearchError,
    SearchErrorKind,
)
from seller_scout.services.filter_state import FilterStateStore

__all__ = [
    # Catalog
    "ProductAddRequest",
    "ProductCatalog",
    "ProductNotFoundError",
    "ProductSearchResult",
    "SearchError",
    "SearchErrorKind",
    # Filter state
    "FilterStateStore",
]
