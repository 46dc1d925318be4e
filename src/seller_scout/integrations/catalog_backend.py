"""HTTP client for a remote catalog backend.

Delegates product reads and searches to an external service. Searches send
the filter specification in its textual form (see normalizer.serialize) so
the backend applies the same predicates and large integers survive the trip.

Errors are classified for the dashboard:
- network failures and timeouts -> connectivity
- 401/403 -> authorization
- 5xx or unreadable responses -> server
- other 4xx -> invalid_request

The client never retries; retry policy belongs to the caller.
"""

import logging
from dataclasses import dataclass
from typing import Any

import httpx
from pydantic import ValidationError

from seller_scout.config import get_settings
from seller_scout.scoring.filters import FilterSpecification
from seller_scout.scoring.models import Product
from seller_scout.scoring.normalizer import serialize
from seller_scout.services.catalog import (
    ProductNotFoundError,
    ProductSearchResult,
    SearchError,
    SearchErrorKind,
)

logger = logging.getLogger(__name__)


@dataclass
class CatalogBackendConfig:
    """Configuration for remote catalog access."""

    base_url: str
    api_token: str = ""
    timeout: int = 30

    def __post_init__(self):
        """Validate configuration."""
        if not self.base_url:
            raise ValueError("base_url is required")
        self.base_url = self.base_url.rstrip("/")

    @classmethod
    def from_settings(cls) -> "CatalogBackendConfig | None":
        """Build config from app settings, or None when no backend is configured."""
        settings = get_settings()
        if not settings.catalog_backend_url:
            return None
        return cls(
            base_url=settings.catalog_backend_url,
            api_token=settings.catalog_backend_token,
            timeout=settings.catalog_backend_timeout,
        )


class CatalogBackendClient:
    """Client for remote catalog operations.

    Usage:
        config = CatalogBackendConfig(base_url="https://catalog.example.com/api")
        with CatalogBackendClient(config) as client:
            result = client.search(spec)
    """

    def __init__(self, config: CatalogBackendConfig, transport: httpx.BaseTransport | None = None):
        """Initialize client with configuration."""
        self.config = config
        headers = {"Accept": "application/json"}
        if config.api_token:
            headers["Authorization"] = f"Bearer {config.api_token}"
        self._client = httpx.Client(
            base_url=config.base_url,
            timeout=config.timeout,
            headers=headers,
            transport=transport,
        )

    def __enter__(self):
        return self

    def __exit__(self, *args):
        self._client.close()

    def close(self):
        """Close the HTTP client."""
        self._client.close()

    def _request(self, method: str, path: str, json: dict | None = None) -> Any:
        """Make API request and classify failures."""
        try:
            response = self._client.request(method, path, json=json)
        except httpx.TimeoutException as e:
            raise SearchError(f"Catalog backend timed out: {e}", SearchErrorKind.CONNECTIVITY)
        except httpx.TransportError as e:
            raise SearchError(f"Cannot reach catalog backend: {e}", SearchErrorKind.CONNECTIVITY)

        status = response.status_code
        if status in (401, 403):
            raise SearchError(
                f"Not authorized: {status} - {response.text}",
                SearchErrorKind.AUTHORIZATION,
                status_code=status,
            )
        if status >= 500:
            raise SearchError(
                f"Catalog backend error: {status} - {response.text}",
                SearchErrorKind.SERVER,
                status_code=status,
            )
        if status >= 400:
            raise SearchError(
                f"Request rejected: {status} - {response.text}",
                SearchErrorKind.INVALID_REQUEST,
                status_code=status,
            )

        try:
            return response.json()
        except ValueError:
            raise SearchError(
                f"Invalid JSON from catalog backend: {response.text[:200]}",
                SearchErrorKind.SERVER,
                status_code=status,
            )

    def _parse_products(self, items: Any) -> list[Product]:
        if not isinstance(items, list):
            raise SearchError("Expected a list of products", SearchErrorKind.SERVER)
        try:
            return [Product.model_validate(item) for item in items]
        except ValidationError as e:
            raise SearchError(f"Malformed product data: {e}", SearchErrorKind.SERVER)

    def fetch_all(self) -> list[Product]:
        """Get all products.

        Raises:
            SearchError: If the backend call fails.
        """
        return self._parse_products(self._request("GET", "/products"))

    def fetch_by_id(self, product_id: str) -> Product:
        """Get a product by id.

        Raises:
            ProductNotFoundError: If the backend returns 404.
            SearchError: If the backend call fails otherwise.
        """
        try:
            data = self._request("GET", f"/products/{product_id}")
        except SearchError as e:
            if e.status_code == 404:
                raise ProductNotFoundError(product_id) from e
            raise
        return self._parse_products([data])[0]

    def search(self, spec: FilterSpecification) -> ProductSearchResult:
        """Search the remote catalog.

        The backend replies with a tagged result: {"__kind__": "success",
        "success": [...]} or {"__kind__": "error", "error": "..."}.
        Failures are returned as an error result, never raised.
        """
        try:
            data = self._request("POST", "/products/search", json=serialize(spec).model_dump())
            if not isinstance(data, dict):
                raise SearchError("Unexpected search response", SearchErrorKind.SERVER)

            kind = data.get("__kind__")
            if kind == "error":
                raise SearchError(
                    f"Search failed: {data.get('error', 'Unknown error')}",
                    SearchErrorKind.SERVER,
                )
            if kind != "success":
                raise SearchError(f"Unknown search result kind: {kind!r}", SearchErrorKind.SERVER)

            products = self._parse_products(data.get("success"))
        except SearchError as e:
            logger.warning(f"Remote search failed ({e.kind.value}): {e}")
            return ProductSearchResult.failure(e)

        return ProductSearchResult.success(products)
