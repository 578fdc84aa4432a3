"""Pydantic model for the forecasting API free-stock payload."""

from __future__ import annotations

import math
from collections.abc import Mapping
from typing import cast

from pydantic import RootModel, model_validator


def _coerce_quantity(value: object) -> int | None:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return max(0, value)
    if isinstance(value, float):
        return max(0, math.floor(value)) if math.isfinite(value) else None
    if isinstance(value, str):
        stripped = value.strip()
        try:
            return _coerce_quantity(float(stripped)) if stripped else None
        except ValueError:
            return None
    return None


class FreeStockResponse(RootModel[dict[str, int]]):
    """SKU to free stock. Entries without a usable number are dropped, negatives clamp to 0."""

    @model_validator(mode="before")
    @classmethod
    def _normalize_quantities(cls, value: object) -> object:
        if not isinstance(value, Mapping):
            return value
        quantities: dict[str, int] = {}
        for sku, raw in cast(Mapping[object, object], value).items():
            quantity = _coerce_quantity(raw)
            if quantity is None:
                continue
            quantities[str(sku).strip()] = quantity
        return quantities
