"""Stock oracle (forecasting API) configuration values."""

from __future__ import annotations

from dataclasses import dataclass

from .env import require_env_vars
from .errors import ConfigurationError
from .http_resilience import ResilienceConfig, RetryPolicy

ORACLE_TIMEOUT_SECONDS = 60.0


@dataclass(frozen=True, slots=True)
class OracleConfig:
    """Holds the free-stock endpoint of the inventory oracle."""

    endpoint: str
    resilience: ResilienceConfig


def get_oracle_config(*, resilience: ResilienceConfig | None = None) -> OracleConfig:
    values = require_env_vars(("STOCK_ORACLE_URL",))
    endpoint = values["STOCK_ORACLE_URL"]
    if not endpoint.startswith(("http://", "https://")):
        raise ConfigurationError(f"STOCK_ORACLE_URL must be an http(s) URL, got {endpoint!r}")
    return OracleConfig(
        endpoint=endpoint,
        resilience=resilience
        or ResilienceConfig(
            name="stock-oracle",
            timeout_seconds=ORACLE_TIMEOUT_SECONDS,
            retry=RetryPolicy(total=2),
            default_headers={"Content-Type": "application/json"},
        ),
    )
