"""Application service running one full inventory reconciliation pass."""

from __future__ import annotations

from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING

from .deadline import DEADLINE_EXCEEDED
from .types import StockLookupStatus

if TYPE_CHECKING:
    from .extraction import CatalogExtractor
    from .reconciliation import Reconciler
    from .stock_lookup import StockOracleGateway
    from .types import AvailabilityUpdate, UpdateOutcome

log = getLogger(__name__)


@dataclass(slots=True)
class InventorySyncReport:
    """Outcome of an inventory sync run."""

    extracted: int
    oracle_status: StockLookupStatus
    planned: list[AvailabilityUpdate] = field(default_factory=list)
    outcomes: list[UpdateOutcome] = field(default_factory=list)
    dry_run: bool = False
    stages_cut_short: list[str] = field(default_factory=list)

    @property
    def succeeded(self) -> int:
        return sum(1 for outcome in self.outcomes if outcome.succeeded)

    @property
    def failed(self) -> list[UpdateOutcome]:
        return [outcome for outcome in self.outcomes if not outcome.succeeded]

    @property
    def failed_item_ids(self) -> list[str]:
        return [outcome.update.inventory_item_id for outcome in self.failed]

    @property
    def deadline_exceeded(self) -> bool:
        """True when the run deadline truncated extraction, the lookup or the apply phase."""
        if self.stages_cut_short:
            return True
        return any(outcome.error == DEADLINE_EXCEEDED for outcome in self.failed)


async def run_inventory_sync(
    *,
    extractor: CatalogExtractor,
    gateway: StockOracleGateway,
    reconciler: Reconciler,
    dry_run: bool = False,
) -> InventorySyncReport:
    """Extract, look up, reconcile and apply; partial failures never abort the run."""

    log.info("Fetching all active products and SKUs")
    units = await extractor.extract_all()

    lookup = await gateway.lookup(unit.sku for unit in units)
    stages_cut_short: list[str] = []
    if extractor.deadline_reached:
        stages_cut_short.append("extraction")
    if lookup.reason == DEADLINE_EXCEEDED:
        stages_cut_short.append("stock lookup")

    updates = reconciler.reconcile(units, lookup)
    report = InventorySyncReport(
        extracted=len(units),
        oracle_status=lookup.status,
        planned=updates,
        dry_run=dry_run,
        stages_cut_short=stages_cut_short,
    )
    if dry_run:
        log.info("Dry run: %s inventory updates planned, none applied", len(updates))
        return report

    log.info("Updating inventory with correct stock levels")
    report.outcomes = await reconciler.apply(updates)
    _log_summary(report)
    return report


def _log_summary(report: InventorySyncReport) -> None:
    log.info(
        "Finished inventory sync: extracted=%s, oracle=%s, planned=%s, succeeded=%s, failed=%s",
        report.extracted,
        report.oracle_status,
        len(report.planned),
        report.succeeded,
        len(report.failed),
    )
    if report.stages_cut_short:
        log.warning("Run deadline cut short: %s", ", ".join(report.stages_cut_short))
    if report.failed:
        log.warning("Failed inventory items: %s", ", ".join(report.failed_item_ids))
