"""HTTP client for the forecasting API free-stock endpoint."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

import httpx

from stocksync.adapters.http_resilience import ResilientClient
from stocksync.domain.errors import StockOracleError

from .schema import FreeStockResponse

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence

    from stocksync.config.http_resilience import ResilienceConfig
    from stocksync.config.oracle import OracleConfig

log = getLogger(__name__)


class ForecastingStockClient:
    """Looks up free stock for a batch of SKUs with one POST request."""

    def __init__(
        self,
        *,
        config: OracleConfig,
        client_factory: Callable[[ResilienceConfig], ResilientClient] | None = None,
    ) -> None:
        self._config = config
        self._client_factory = client_factory or ResilientClient

    async def fetch_quantities(self, codes: Sequence[str]) -> dict[str, int]:
        if not codes:
            raise ValueError("At least one SKU is required")
        body = {"sku": ",".join(codes)}
        async with self._client_factory(self._config.resilience) as client:
            try:
                response = await client.post(self._config.endpoint, json=body)
                response.raise_for_status()
                payload = FreeStockResponse.model_validate(response.json())
            except httpx.HTTPError as exc:
                raise StockOracleError(f"Free-stock request failed: {exc}") from exc
            # JSONDecodeError, UnicodeDecodeError and ValidationError are all ValueErrors.
            except ValueError as exc:
                raise StockOracleError(f"Malformed free-stock response: {exc}") from exc

        log.debug("Forecasting API stock data: %s", payload.root)
        return payload.root
