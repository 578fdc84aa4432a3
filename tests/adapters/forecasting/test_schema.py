from __future__ import annotations

import pytest
from pydantic import ValidationError

from stocksync.adapters.forecasting import FreeStockResponse


def test_integer_quantities_pass_through() -> None:
    response = FreeStockResponse.model_validate({"CM-60": 12, "BG-30": 0})

    assert response.root == {"CM-60": 12, "BG-30": 0}


def test_numeric_strings_and_floats_are_coerced() -> None:
    response = FreeStockResponse.model_validate({"A": "7", "B": 3.9, "C": " 4 "})

    assert response.root == {"A": 7, "B": 3, "C": 4}


def test_negative_quantities_clamp_to_zero() -> None:
    response = FreeStockResponse.model_validate({"A": -3, "B": "-1.5"})

    assert response.root == {"A": 0, "B": 0}


def test_unusable_entries_are_dropped() -> None:
    response = FreeStockResponse.model_validate(
        {"A": None, "B": "n/a", "C": True, "D": [1], "E": 2, "F": float("nan")}
    )

    assert response.root == {"E": 2}


def test_non_mapping_payload_is_rejected() -> None:
    with pytest.raises(ValidationError):
        FreeStockResponse.model_validate(["A", "B"])
