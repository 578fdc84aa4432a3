"""Ports for reading and mutating the merchant catalog."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from stocksync.domain.types import CatalogPage


@runtime_checkable
class CatalogPageFetcher(Protocol):
    """Fetches one page of active products, flattened to variants.

    Implementations raise ``CatalogPageError`` for transport failures and for
    pages without a product listing.
    """

    async def fetch_page(self, *, cursor: str | None, page_size: int) -> CatalogPage: ...


@runtime_checkable
class InventoryLevelSetter(Protocol):
    """Sets the absolute available quantity of an inventory item at a location.

    Implementations raise ``InventoryUpdateError`` when the catalog rejects the update.
    """

    async def set_available(
        self,
        *,
        location_id: str,
        inventory_item_id: str,
        available: int,
    ) -> None: ...


__all__ = ["CatalogPageFetcher", "InventoryLevelSetter"]
