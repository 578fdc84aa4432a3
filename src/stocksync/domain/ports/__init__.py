"""Domain port definitions for adapters."""

from __future__ import annotations

from .catalog import CatalogPageFetcher, InventoryLevelSetter
from .stock import StockQuantitySource

__all__ = [
    "CatalogPageFetcher",
    "InventoryLevelSetter",
    "StockQuantitySource",
]
