"""External service integrations."""

from seller_scout.integrations.catalog_backend import (
    CatalogBackendClient,
    CatalogBackendConfig,
)

__all__ = [
    "CatalogBackendClient",
    "CatalogBackendConfig",
]
