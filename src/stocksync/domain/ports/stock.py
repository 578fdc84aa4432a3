"""Port for querying the authoritative stock source."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence


@runtime_checkable
class StockQuantitySource(Protocol):
    """Returns true available quantities for a non-empty batch of SKUs.

    Codes missing from the result are unknown to the source. Implementations
    raise ``StockOracleError`` when the source cannot answer. The gateway clamps
    negative quantities to 0 and ignores values that are not integers.
    """

    async def fetch_quantities(self, codes: Sequence[str]) -> Mapping[str, int]: ...


__all__ = ["StockQuantitySource"]
