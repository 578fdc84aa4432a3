"""Catalog extraction: walk the active product listing and collect sellable variants."""

from __future__ import annotations

import asyncio
from logging import getLogger
from typing import TYPE_CHECKING

from .deadline import is_expired, remaining_seconds
from .errors import CatalogPageError
from .types import ReconciliationUnit

if TYPE_CHECKING:
    from collections.abc import AsyncIterator, Iterable

    from .deadline import RunDeadline
    from .ports.catalog import CatalogPageFetcher
    from .types import CatalogPage, RawCatalogUnit

log = getLogger(__name__)

DEFAULT_PAGE_SIZE = 50


def to_reconciliation_unit(raw: RawCatalogUnit) -> ReconciliationUnit | None:
    """Return a unit for ``raw`` or ``None`` when it has no usable SKU."""

    sku = raw.sku.strip() if raw.sku else ""
    if not sku:
        return None
    return ReconciliationUnit(
        product_id=raw.product_id,
        product_title=raw.product_title,
        variant_id=raw.variant_id,
        sku=sku,
        inventory_item_id=raw.inventory_item_id or None,
    )


def select_units(raw_units: Iterable[RawCatalogUnit]) -> list[ReconciliationUnit]:
    units: list[ReconciliationUnit] = []
    for raw in raw_units:
        unit = to_reconciliation_unit(raw)
        if unit is None:
            log.debug("Skipping variant %s of %r: no SKU", raw.variant_id, raw.product_title)
            continue
        units.append(unit)
    return units


class CatalogExtractor:
    """Exhaustively walks the paginated catalog listing.

    A failed or malformed page ends the walk early; whatever was collected up to
    that point is still returned, because partial catalog data is enough for a
    partial reconciliation.

    ``deadline_reached`` tells whether the last walk was cut short by the run
    deadline.
    """

    def __init__(
        self,
        *,
        fetcher: CatalogPageFetcher,
        page_size: int = DEFAULT_PAGE_SIZE,
        deadline: RunDeadline | None = None,
    ) -> None:
        if page_size < 1:
            raise ValueError("page_size must be positive")
        self._fetcher = fetcher
        self._page_size = page_size
        self._deadline = deadline
        self.deadline_reached = False

    async def iter_pages(self) -> AsyncIterator[CatalogPage]:
        """Yield catalog pages in order, starting a fresh walk on every call."""

        self.deadline_reached = False
        cursor: str | None = None
        seen_cursors: set[str] = set()
        fetched = 0
        while True:
            if is_expired(self._deadline):
                self.deadline_reached = True
                log.warning("Run deadline reached after %s catalog page(s); stopping", fetched)
                return
            try:
                async with asyncio.timeout(remaining_seconds(self._deadline)):
                    page = await self._fetcher.fetch_page(cursor=cursor, page_size=self._page_size)
            except CatalogPageError as exc:
                log.warning(
                    "Catalog page %s failed, keeping %s earlier page(s): %s",
                    fetched + 1,
                    fetched,
                    exc,
                )
                return
            except TimeoutError:
                self.deadline_reached = True
                log.warning("Run deadline reached while fetching catalog page %s", fetched + 1)
                return

            fetched += 1
            yield page

            if not page.has_next_page:
                return
            next_cursor = page.end_cursor
            if not next_cursor or next_cursor in seen_cursors:
                log.warning(
                    "Catalog page %s reported more data without a fresh cursor (%r); stopping",
                    fetched,
                    next_cursor,
                )
                return
            seen_cursors.add(next_cursor)
            cursor = next_cursor

    async def extract_all(self) -> list[ReconciliationUnit]:
        units: list[ReconciliationUnit] = []
        async for page in self.iter_pages():
            units.extend(select_units(page.units))
        log.info("Fetched %s active product variants with valid SKUs", len(units))
        return units
