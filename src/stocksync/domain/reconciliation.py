"""Join catalog units with oracle stock and apply the resulting availability."""

from __future__ import annotations

import asyncio
from logging import getLogger
from typing import TYPE_CHECKING

from .deadline import DEADLINE_EXCEEDED, is_expired, remaining_seconds
from .errors import InventoryUpdateError
from .types import (
    AvailabilityUpdate,
    ReconcilerState,
    UnavailableStockPolicy,
    UpdateOutcome,
)

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator, Sequence

    from .deadline import RunDeadline
    from .ports.catalog import InventoryLevelSetter
    from .types import ReconciliationUnit, StockLookup

log = getLogger(__name__)


def plan_updates(
    units: Iterable[ReconciliationUnit],
    lookup: StockLookup,
) -> list[AvailabilityUpdate]:
    """Target quantity per updatable unit; SKUs the oracle does not know target 0."""

    updates: list[AvailabilityUpdate] = []
    for unit in units:
        if unit.inventory_item_id is None:
            log.debug("Variant %s (%s) has no inventory item; skipping", unit.variant_id, unit.sku)
            continue
        quantity = lookup.quantity_for(unit.sku)
        updates.append(
            AvailabilityUpdate(
                inventory_item_id=unit.inventory_item_id,
                target_quantity=quantity if quantity is not None else 0,
                sku=unit.sku,
            )
        )
    return updates


class Reconciler:
    """Computes availability updates and applies them with per-unit isolation.

    ``concurrency`` bounds the number of update requests in flight. With the
    default of 1 updates are sent strictly one at a time in list order. A failed
    update is recorded on its outcome and never stops the others; nothing is
    retried or rolled back here.
    """

    def __init__(
        self,
        *,
        setter: InventoryLevelSetter,
        location_id: str,
        concurrency: int = 1,
        unavailable_policy: UnavailableStockPolicy = UnavailableStockPolicy.ZERO,
        deadline: RunDeadline | None = None,
    ) -> None:
        if concurrency < 1:
            raise ValueError("concurrency must be at least 1")
        self._setter = setter
        self._location_id = location_id
        self._concurrency = concurrency
        self._unavailable_policy = unavailable_policy
        self._deadline = deadline
        self._state = ReconcilerState.IDLE

    @property
    def state(self) -> ReconcilerState:
        return self._state

    def reconcile(
        self,
        units: Sequence[ReconciliationUnit],
        lookup: StockLookup,
    ) -> list[AvailabilityUpdate]:
        self._state = ReconcilerState.JOINING
        if not lookup.available:
            if self._unavailable_policy is UnavailableStockPolicy.SKIP:
                log.warning(
                    "Stock oracle unavailable (%s); leaving %s units untouched",
                    lookup.reason,
                    len(units),
                )
                return []
            log.warning(
                "Stock oracle unavailable (%s); every target quantity falls back to 0",
                lookup.reason,
            )
        return plan_updates(units, lookup)

    async def apply(self, updates: Sequence[AvailabilityUpdate]) -> list[UpdateOutcome]:
        self._state = ReconcilerState.APPLYING
        if not updates:
            log.info("No inventory updates to apply")
            self._state = ReconcilerState.DONE
            return []

        outcomes: dict[int, UpdateOutcome] = {}
        pending = enumerate(updates)
        workers = min(self._concurrency, len(updates))
        async with asyncio.TaskGroup() as group:
            for _ in range(workers):
                group.create_task(self._drain(pending, outcomes))

        self._state = ReconcilerState.DONE
        return [outcomes[index] for index in range(len(updates))]

    async def _drain(
        self,
        pending: Iterator[tuple[int, AvailabilityUpdate]],
        outcomes: dict[int, UpdateOutcome],
    ) -> None:
        # Workers share one iterator, so each update is claimed exactly once.
        for index, update in pending:
            outcomes[index] = await self._apply_one(index, update)

    async def _apply_one(self, index: int, update: AvailabilityUpdate) -> UpdateOutcome:
        if is_expired(self._deadline):
            return UpdateOutcome(
                index=index, update=update, succeeded=False, error=DEADLINE_EXCEEDED
            )
        try:
            async with asyncio.timeout(remaining_seconds(self._deadline)):
                await self._setter.set_available(
                    location_id=self._location_id,
                    inventory_item_id=update.inventory_item_id,
                    available=update.target_quantity,
                )
        except InventoryUpdateError as exc:
            log.error("Error updating inventory for item %s: %s", update.inventory_item_id, exc)
            return UpdateOutcome(
                index=index,
                update=update,
                succeeded=False,
                error=str(exc),
                detail=exc.detail,
            )
        except TimeoutError as exc:
            error = DEADLINE_EXCEEDED if is_expired(self._deadline) else repr(exc)
            log.error("Timed out updating inventory for item %s", update.inventory_item_id)
            return UpdateOutcome(index=index, update=update, succeeded=False, error=error)
        except Exception as exc:
            log.exception("Error in inventory update request for item %s", update.inventory_item_id)
            return UpdateOutcome(
                index=index,
                update=update,
                succeeded=False,
                error=f"{type(exc).__name__}: {exc}",
            )

        log.info(
            "Updated inventory for item %s to %s", update.inventory_item_id, update.target_quantity
        )
        return UpdateOutcome(index=index, update=update, succeeded=True)
