"""Shopify catalog configuration values."""

from __future__ import annotations

from dataclasses import dataclass

from .env import optional_env_var, require_env_vars
from .errors import ConfigurationError
from .http_resilience import RateLimit, ResilienceConfig, RetryPolicy

DEFAULT_SHOPIFY_API_VERSION = "2025-01"
SHOPIFY_TIMEOUT_SECONDS = 30.0
LOCATION_GID_PREFIX = "gid://shopify/Location/"


@dataclass(frozen=True, slots=True)
class ShopifyConfig:
    """Holds Shopify Admin API configuration values."""

    store_domain: str
    access_token: str
    location_id: str
    resilience: ResilienceConfig
    api_version: str = DEFAULT_SHOPIFY_API_VERSION

    @property
    def graphql_path(self) -> str:
        return f"/admin/api/{self.api_version}/graphql.json"

    @property
    def inventory_set_path(self) -> str:
        return f"/admin/api/{self.api_version}/inventory_levels/set.json"


def _normalize_location_id(value: str) -> str:
    if value.startswith("gid://"):
        return value
    if not value.isdigit():
        raise ConfigurationError(f"SHOPIFY_LOCATION_ID must be a GID or numeric id, got {value!r}")
    return f"{LOCATION_GID_PREFIX}{value}"


def _normalize_store_domain(value: str) -> str:
    domain = value.removeprefix("https://").removeprefix("http://").rstrip("/")
    if not domain:
        raise ConfigurationError("SHOPIFY_STORE_DOMAIN must not be empty")
    return domain


def build_shopify_resilience(
    *,
    store_domain: str,
    access_token: str,
    timeout_seconds: float = SHOPIFY_TIMEOUT_SECONDS,
) -> ResilienceConfig:
    return ResilienceConfig(
        name="shopify",
        base_url=f"https://{store_domain}",
        timeout_seconds=timeout_seconds,
        # REST admin bucket leaks at 2 requests/second on standard plans.
        ratelimit=RateLimit(max_calls=2, per_seconds=1.0),
        retry=RetryPolicy(total=3),
        default_headers={
            "Content-Type": "application/json",
            "X-Shopify-Access-Token": access_token,
        },
    )


def get_shopify_config(*, resilience: ResilienceConfig | None = None) -> ShopifyConfig:
    values = require_env_vars(
        ("SHOPIFY_STORE_DOMAIN", "SHOPIFY_ACCESS_TOKEN", "SHOPIFY_LOCATION_ID")
    )
    store_domain = _normalize_store_domain(values["SHOPIFY_STORE_DOMAIN"])
    access_token = values["SHOPIFY_ACCESS_TOKEN"]
    return ShopifyConfig(
        store_domain=store_domain,
        access_token=access_token,
        location_id=_normalize_location_id(values["SHOPIFY_LOCATION_ID"]),
        api_version=optional_env_var("SHOPIFY_API_VERSION") or DEFAULT_SHOPIFY_API_VERSION,
        resilience=resilience
        or build_shopify_resilience(store_domain=store_domain, access_token=access_token),
    )
