"""Application orchestration entry points."""

from __future__ import annotations

import asyncio
from logging import getLogger
from typing import TYPE_CHECKING

from stocksync.adapters.forecasting import ForecastingStockClient
from stocksync.adapters.shopify import ShopifyCatalogClient
from stocksync.config import get_oracle_config, get_shopify_config, get_sync_config
from stocksync.domain import (
    CatalogExtractor,
    InventorySyncReport,
    Reconciler,
    RunDeadline,
    StockOracleGateway,
    UnavailableStockPolicy,
    run_inventory_sync,
)

if TYPE_CHECKING:
    from collections.abc import Callable

    from stocksync.adapters.http_resilience import ResilientClient
    from stocksync.config import OracleConfig, ResilienceConfig, ShopifyConfig, SyncConfig

    ClientFactory = Callable[[ResilienceConfig], ResilientClient]

log = getLogger(__name__)


def sync_inventory(
    *,
    shopify_config: ShopifyConfig | None = None,
    oracle_config: OracleConfig | None = None,
    sync_config: SyncConfig | None = None,
    dry_run: bool = False,
    shopify_client_factory: ClientFactory | None = None,
    oracle_client_factory: ClientFactory | None = None,
) -> InventorySyncReport:
    """Reconcile Shopify inventory with the stock oracle using the configured adapters."""

    return asyncio.run(
        sync_inventory_async(
            shopify_config=shopify_config,
            oracle_config=oracle_config,
            sync_config=sync_config,
            dry_run=dry_run,
            shopify_client_factory=shopify_client_factory,
            oracle_client_factory=oracle_client_factory,
        )
    )


async def sync_inventory_async(
    *,
    shopify_config: ShopifyConfig | None = None,
    oracle_config: OracleConfig | None = None,
    sync_config: SyncConfig | None = None,
    dry_run: bool = False,
    shopify_client_factory: ClientFactory | None = None,
    oracle_client_factory: ClientFactory | None = None,
) -> InventorySyncReport:
    shopify = shopify_config or get_shopify_config()
    oracle = oracle_config or get_oracle_config()
    settings = sync_config or get_sync_config()
    deadline = (
        RunDeadline.after(settings.run_deadline_seconds)
        if settings.run_deadline_seconds is not None
        else None
    )
    log.info(
        "Starting inventory sync: store=%s, location=%s, page_size=%s, concurrency=%s, "
        "deadline=%s, on_oracle_unavailable=%s, dry_run=%s",
        shopify.store_domain,
        shopify.location_id,
        settings.page_size,
        settings.apply_concurrency,
        settings.run_deadline_seconds,
        settings.on_oracle_unavailable,
        dry_run,
    )

    stock_source = ForecastingStockClient(config=oracle, client_factory=oracle_client_factory)
    async with ShopifyCatalogClient(
        config=shopify,
        variants_per_product=settings.variants_per_product,
        client_factory=shopify_client_factory,
    ) as catalog:
        return await run_inventory_sync(
            extractor=CatalogExtractor(
                fetcher=catalog,
                page_size=settings.page_size,
                deadline=deadline,
            ),
            gateway=StockOracleGateway(source=stock_source, deadline=deadline),
            reconciler=Reconciler(
                setter=catalog,
                location_id=shopify.location_id,
                concurrency=settings.apply_concurrency,
                unavailable_policy=UnavailableStockPolicy(settings.on_oracle_unavailable),
                deadline=deadline,
            ),
            dry_run=dry_run,
        )
