from __future__ import annotations

import pytest

from stocksync.config.http_resilience import ResilienceConfig
from stocksync.config.oracle import OracleConfig
from stocksync.config.shopify import ShopifyConfig, build_shopify_resilience


@pytest.fixture
def shopify_config() -> ShopifyConfig:
    return ShopifyConfig(
        store_domain="demo-store.myshopify.com",
        access_token="shpat_demo",
        location_id="gid://shopify/Location/85832237378",
        resilience=build_shopify_resilience(
            store_domain="demo-store.myshopify.com",
            access_token="shpat_demo",
        ),
    )


@pytest.fixture
def oracle_config() -> OracleConfig:
    return OracleConfig(
        endpoint="https://forecasting.example.test/api/getFreeStock",
        resilience=ResilienceConfig(name="stock-oracle"),
    )
