"""Public interface for the Shopify catalog adapter."""

from __future__ import annotations

from .client import ACTIVE_PRODUCTS_QUERY, ShopifyCatalogClient
from .schema import ProductConnection, ProductsQueryResponse
from .translator import legacy_resource_id, rest_id, translate_products_page

__all__ = [
    "ACTIVE_PRODUCTS_QUERY",
    "ProductConnection",
    "ProductsQueryResponse",
    "ShopifyCatalogClient",
    "legacy_resource_id",
    "rest_id",
    "translate_products_page",
]
