"""HTTP client for the Shopify Admin API (product listing and inventory levels)."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

import httpx

from stocksync.adapters.http_resilience import ResilientClient
from stocksync.domain.errors import CatalogPageError, InventoryUpdateError

from .schema import ProductsQueryResponse
from .translator import rest_id, translate_products_page

if TYPE_CHECKING:
    from collections.abc import Callable
    from types import TracebackType

    from stocksync.config.http_resilience import ResilienceConfig
    from stocksync.config.shopify import ShopifyConfig
    from stocksync.domain.types import CatalogPage

log = getLogger(__name__)

DEFAULT_VARIANTS_PER_PRODUCT = 100

ACTIVE_PRODUCTS_QUERY = """
query ($cursor: String, $pageSize: Int!, $variantsPerProduct: Int!) {
  products(first: $pageSize, after: $cursor, query: "status:active") {
    edges {
      node {
        id
        title
        variants(first: $variantsPerProduct) {
          edges {
            node {
              id
              sku
              inventoryItem {
                id
              }
            }
          }
        }
      }
    }
    pageInfo {
      hasNextPage
      endCursor
    }
  }
}
"""


class ShopifyCatalogClient:
    """Reads active products and sets inventory levels through one shared HTTP client.

    Use as an async context manager so the rate limiter and connection pool
    are shared by every request of a run.
    """

    def __init__(
        self,
        *,
        config: ShopifyConfig,
        variants_per_product: int = DEFAULT_VARIANTS_PER_PRODUCT,
        client_factory: Callable[[ResilienceConfig], ResilientClient] | None = None,
    ) -> None:
        self._config = config
        self._variants_per_product = variants_per_product
        self._client_factory = client_factory or ResilientClient
        self._client: ResilientClient | None = None

    async def __aenter__(self) -> ShopifyCatalogClient:
        self._client = self._client_factory(self._config.resilience)
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    @property
    def http(self) -> ResilientClient:
        if self._client is None:
            raise RuntimeError("ShopifyCatalogClient must be used as an async context manager")
        return self._client

    async def fetch_page(self, *, cursor: str | None, page_size: int) -> CatalogPage:
        body = {
            "query": ACTIVE_PRODUCTS_QUERY,
            "variables": {
                "cursor": cursor,
                "pageSize": page_size,
                "variantsPerProduct": self._variants_per_product,
            },
        }
        try:
            response = await self.http.post(self._config.graphql_path, json=body)
            response.raise_for_status()
            payload = ProductsQueryResponse.model_validate(response.json())
        except httpx.HTTPError as exc:
            raise CatalogPageError(f"Product page request failed: {exc}") from exc
        # JSONDecodeError, UnicodeDecodeError and ValidationError are all ValueErrors.
        except ValueError as exc:
            raise CatalogPageError(f"Malformed product page: {exc}") from exc

        if payload.errors:
            messages = "; ".join(error.message for error in payload.errors)
            log.warning("Shopify GraphQL errors on product page: %s", messages)

        products = payload.products
        if products is None:
            raise CatalogPageError("Product page response has no product listing")
        return translate_products_page(products)

    async def set_available(
        self,
        *,
        location_id: str,
        inventory_item_id: str,
        available: int,
    ) -> None:
        body = {
            "location_id": rest_id(location_id),
            "inventory_item_id": rest_id(inventory_item_id),
            "available": available,
        }
        try:
            response = await self.http.post(self._config.inventory_set_path, json=body)
        except httpx.HTTPError as exc:
            raise InventoryUpdateError(f"Inventory update request failed: {exc}") from exc

        if not response.is_success:
            raise InventoryUpdateError(
                f"Shopify rejected inventory update with status {response.status_code}",
                status_code=response.status_code,
                detail=_response_detail(response),
            )


def _response_detail(response: httpx.Response) -> object:
    try:
        return response.json()
    except ValueError:
        return response.text

