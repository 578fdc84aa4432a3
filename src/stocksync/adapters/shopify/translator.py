"""Translate Shopify payloads into catalog pages."""

from __future__ import annotations

from typing import TYPE_CHECKING

from stocksync.domain.types import CatalogPage, RawCatalogUnit

if TYPE_CHECKING:
    from .schema import ProductConnection, ProductNode


def legacy_resource_id(gid: str) -> str:
    """Return the trailing segment of a global id (``gid://shopify/Location/42`` -> ``42``)."""

    segment = gid.rstrip("/").rsplit("/", 1)[-1]
    if not segment:
        raise ValueError(f"Invalid Shopify global id: {gid!r}")
    return segment


def rest_id(gid: str) -> int | str:
    segment = legacy_resource_id(gid)
    return int(segment) if segment.isdigit() else segment


def translate_product(product: ProductNode) -> list[RawCatalogUnit]:
    return [
        RawCatalogUnit(
            product_id=product.id,
            product_title=product.title,
            variant_id=edge.node.id,
            sku=edge.node.sku,
            inventory_item_id=edge.node.inventory_item.id if edge.node.inventory_item else None,
        )
        for edge in product.variants.edges
    ]


def translate_products_page(connection: ProductConnection) -> CatalogPage:
    units: list[RawCatalogUnit] = []
    for edge in connection.edges:
        units.extend(translate_product(edge.node))
    return CatalogPage(
        units=tuple(units),
        has_next_page=connection.page_info.has_next_page,
        end_cursor=connection.page_info.end_cursor,
    )
