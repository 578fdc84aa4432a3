"""Value objects passed between the reconciliation stages."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from types import MappingProxyType
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Mapping


@dataclass(frozen=True, slots=True)
class RawCatalogUnit:
    """One variant as listed by the catalog, before SKU filtering."""

    product_id: str
    product_title: str
    variant_id: str
    sku: str | None
    inventory_item_id: str | None


@dataclass(frozen=True, slots=True)
class ReconciliationUnit:
    """One sellable variant eligible for stock reconciliation.

    ``sku`` is always trimmed and non-empty. A unit without an
    ``inventory_item_id`` is kept for reporting but can never be updated.
    """

    product_id: str
    product_title: str
    variant_id: str
    sku: str
    inventory_item_id: str | None = None

    @property
    def updatable(self) -> bool:
        return self.inventory_item_id is not None


@dataclass(frozen=True, slots=True)
class CatalogPage:
    """A single page of the active product listing."""

    units: tuple[RawCatalogUnit, ...]
    has_next_page: bool
    end_cursor: str | None = None


class StockLookupStatus(StrEnum):
    OK = "ok"
    UNAVAILABLE = "unavailable"


@dataclass(frozen=True, slots=True)
class StockLookup:
    """Snapshot of oracle quantities for one run.

    ``UNAVAILABLE`` means the oracle did not answer; it is deliberately distinct
    from an ``OK`` lookup that happens to know nothing about a code.
    """

    status: StockLookupStatus
    quantities: Mapping[str, int] = field(default_factory=lambda: MappingProxyType({}))
    reason: str | None = None

    @classmethod
    def ok(cls, quantities: Mapping[str, int]) -> StockLookup:
        return cls(status=StockLookupStatus.OK, quantities=MappingProxyType(dict(quantities)))

    @classmethod
    def unavailable(cls, reason: str) -> StockLookup:
        return cls(status=StockLookupStatus.UNAVAILABLE, reason=reason)

    @property
    def available(self) -> bool:
        return self.status is StockLookupStatus.OK

    def quantity_for(self, sku: str) -> int | None:
        return self.quantities.get(sku)


class UnavailableStockPolicy(StrEnum):
    """What the reconciler does when the oracle could not be reached."""

    ZERO = "zero"
    SKIP = "skip"


@dataclass(frozen=True, slots=True)
class AvailabilityUpdate:
    inventory_item_id: str
    target_quantity: int
    sku: str | None = None

    def __post_init__(self) -> None:
        if self.target_quantity < 0:
            raise ValueError(f"Target quantity must be non-negative, got {self.target_quantity}")


@dataclass(frozen=True, slots=True)
class UpdateOutcome:
    index: int
    update: AvailabilityUpdate
    succeeded: bool
    error: str | None = None
    detail: object | None = None


class ReconcilerState(StrEnum):
    IDLE = "idle"
    JOINING = "joining"
    APPLYING = "applying"
    DONE = "done"
