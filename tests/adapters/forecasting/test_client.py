from __future__ import annotations

import asyncio
import json
from typing import TYPE_CHECKING

import httpx
import pytest

from stocksync.adapters.forecasting import ForecastingStockClient
from stocksync.domain.errors import StockOracleError
from stocksync.domain.stock_lookup import StockOracleGateway
from stocksync.domain.types import StockLookupStatus
from tests.support.http import make_client_factory

if TYPE_CHECKING:
    from stocksync.config.oracle import OracleConfig


def test_fetch_quantities_posts_comma_joined_skus(oracle_config: OracleConfig) -> None:
    seen: list[dict[str, object]] = []

    def handler(request: httpx.Request) -> httpx.Response:
        assert request.method == "POST"
        assert str(request.url) == "https://forecasting.example.test/api/getFreeStock"
        seen.append(json.loads(request.content))
        return httpx.Response(200, json={"CM-60": 14, "BG-30": "2"})

    client = ForecastingStockClient(
        config=oracle_config,
        client_factory=make_client_factory(handler),
    )
    quantities = asyncio.run(client.fetch_quantities(["BG-30", "CM-60", "XX-1"]))

    assert seen == [{"sku": "BG-30,CM-60,XX-1"}]
    assert quantities == {"CM-60": 14, "BG-30": 2}


def test_fetch_quantities_http_error_raises(oracle_config: OracleConfig) -> None:
    def handler(_: httpx.Request) -> httpx.Response:
        return httpx.Response(500, text="Internal Server Error")

    client = ForecastingStockClient(
        config=oracle_config,
        client_factory=make_client_factory(handler),
    )

    with pytest.raises(StockOracleError, match="request failed"):
        asyncio.run(client.fetch_quantities(["A"]))


def test_fetch_quantities_malformed_body_raises(oracle_config: OracleConfig) -> None:
    def handler(_: httpx.Request) -> httpx.Response:
        return httpx.Response(200, text="not json")

    client = ForecastingStockClient(
        config=oracle_config,
        client_factory=make_client_factory(handler),
    )

    with pytest.raises(StockOracleError, match="Malformed"):
        asyncio.run(client.fetch_quantities(["A"]))


def test_fetch_quantities_rejects_empty_batch(oracle_config: OracleConfig) -> None:
    client = ForecastingStockClient(config=oracle_config)

    with pytest.raises(ValueError, match="At least one SKU"):
        asyncio.run(client.fetch_quantities([]))


def test_fetch_quantities_undecodable_body_raises(oracle_config: OracleConfig) -> None:
    def handler(_: httpx.Request) -> httpx.Response:
        return httpx.Response(200, content=b'{"A": 1, "\xff\xfe": 2}')

    client = ForecastingStockClient(
        config=oracle_config,
        client_factory=make_client_factory(handler),
    )

    with pytest.raises(StockOracleError, match="Malformed"):
        asyncio.run(client.fetch_quantities(["A"]))


def test_gateway_reports_undecodable_body_as_unavailable(oracle_config: OracleConfig) -> None:
    def handler(_: httpx.Request) -> httpx.Response:
        return httpx.Response(200, content=b'{"A": 1, "\xff\xfe": 2}')

    gateway = StockOracleGateway(
        source=ForecastingStockClient(
            config=oracle_config,
            client_factory=make_client_factory(handler),
        )
    )

    lookup = asyncio.run(gateway.lookup(["A"]))

    assert lookup.status is StockLookupStatus.UNAVAILABLE
    assert dict(lookup.quantities) == {}
