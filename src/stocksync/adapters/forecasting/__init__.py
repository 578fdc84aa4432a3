"""Public interface for the forecasting (stock oracle) adapter."""

from __future__ import annotations

from .client import ForecastingStockClient
from .schema import FreeStockResponse

__all__ = ["ForecastingStockClient", "FreeStockResponse"]
