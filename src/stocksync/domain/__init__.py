"""Inventory reconciliation domain: extraction, stock lookup and reconciliation."""

from __future__ import annotations

from .deadline import RunDeadline
from .errors import CatalogPageError, CollaboratorError, InventoryUpdateError, StockOracleError
from .extraction import CatalogExtractor
from .inventory_sync import InventorySyncReport, run_inventory_sync
from .reconciliation import Reconciler, plan_updates
from .stock_lookup import StockOracleGateway
from .types import (
    AvailabilityUpdate,
    CatalogPage,
    RawCatalogUnit,
    ReconcilerState,
    ReconciliationUnit,
    StockLookup,
    StockLookupStatus,
    UnavailableStockPolicy,
    UpdateOutcome,
)

__all__ = [
    "AvailabilityUpdate",
    "CatalogExtractor",
    "CatalogPage",
    "CatalogPageError",
    "CollaboratorError",
    "InventorySyncReport",
    "InventoryUpdateError",
    "RawCatalogUnit",
    "ReconcilerState",
    "Reconciler",
    "ReconciliationUnit",
    "RunDeadline",
    "StockLookup",
    "StockLookupStatus",
    "StockOracleError",
    "StockOracleGateway",
    "UnavailableStockPolicy",
    "UpdateOutcome",
    "plan_updates",
    "run_inventory_sync",
]
