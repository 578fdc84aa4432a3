"""Batched lookup of true stock from the inventory oracle."""

from __future__ import annotations

import asyncio
from logging import getLogger
from typing import TYPE_CHECKING

from .deadline import DEADLINE_EXCEEDED, is_expired, remaining_seconds
from .errors import StockOracleError
from .types import StockLookup

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping

    from .deadline import RunDeadline
    from .ports.stock import StockQuantitySource

log = getLogger(__name__)


class StockOracleGateway:
    """Issues one request for all SKUs of a run and tags the result.

    Failures never propagate: they come back as an ``UNAVAILABLE`` lookup so the
    reconciler can decide what an unreachable oracle means.
    """

    def __init__(
        self,
        *,
        source: StockQuantitySource,
        deadline: RunDeadline | None = None,
    ) -> None:
        self._source = source
        self._deadline = deadline

    async def lookup(self, codes: Iterable[str]) -> StockLookup:
        batch = sorted(set(codes))
        if not batch:
            log.info("No SKUs to look up")
            return StockLookup.ok({})
        if is_expired(self._deadline):
            log.warning("Run deadline reached before the stock lookup")
            return StockLookup.unavailable(DEADLINE_EXCEEDED)

        log.info("Fetching stock levels for %s SKUs", len(batch))
        try:
            async with asyncio.timeout(remaining_seconds(self._deadline)):
                quantities = await self._source.fetch_quantities(batch)
        except StockOracleError as exc:
            log.warning("Stock oracle unavailable: %s", exc)
            return StockLookup.unavailable(str(exc))
        except TimeoutError:
            log.warning("Run deadline reached while waiting for the stock oracle")
            return StockLookup.unavailable(DEADLINE_EXCEEDED)

        snapshot = _non_negative(quantities)
        log.debug("Stock oracle answered for %s of %s SKUs", len(snapshot), len(batch))
        return StockLookup.ok(snapshot)


def _non_negative(quantities: Mapping[str, int]) -> dict[str, int]:
    """Clamp negative quantities to 0 and drop entries that are not integers."""

    snapshot: dict[str, int] = {}
    for code, quantity in quantities.items():
        if isinstance(quantity, bool) or not isinstance(quantity, int):
            log.debug("Ignoring non-integer stock %r for %s", quantity, code)
            continue
        snapshot[code] = max(0, quantity)
    return snapshot
