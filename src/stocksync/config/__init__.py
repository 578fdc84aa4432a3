"""Application configuration helpers."""

from __future__ import annotations

from .env import require_env_var, require_env_vars
from .errors import ConfigurationError, MissingConfigurationError
from .http_resilience import RateLimit, ResilienceConfig, RetryPolicy
from .logging import configure_logging
from .oracle import OracleConfig, get_oracle_config
from .shopify import ShopifyConfig, get_shopify_config
from .sync import SyncConfig, get_sync_config

__all__ = [
    "ConfigurationError",
    "MissingConfigurationError",
    "OracleConfig",
    "RateLimit",
    "ResilienceConfig",
    "RetryPolicy",
    "ShopifyConfig",
    "SyncConfig",
    "configure_logging",
    "get_oracle_config",
    "get_shopify_config",
    "get_sync_config",
    "require_env_var",
    "require_env_vars",
]
