"""Synchronization defaults for the inventory reconciliation run."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Literal, cast

from .env import optional_env_var, optional_float_env_var, optional_int_env_var
from .errors import ConfigurationError

DEFAULT_PAGE_SIZE = 50
DEFAULT_VARIANTS_PER_PRODUCT = 100
DEFAULT_APPLY_CONCURRENCY = 1

# Shopify caps connection page sizes at 250.
MAX_PAGE_SIZE = 250

OracleUnavailablePolicy = Literal["zero", "skip"]
ORACLE_UNAVAILABLE_POLICIES: tuple[OracleUnavailablePolicy, ...] = ("zero", "skip")


@dataclass(frozen=True, slots=True)
class SyncConfig:
    page_size: int = DEFAULT_PAGE_SIZE
    variants_per_product: int = DEFAULT_VARIANTS_PER_PRODUCT
    apply_concurrency: int = DEFAULT_APPLY_CONCURRENCY
    run_deadline_seconds: float | None = None
    on_oracle_unavailable: OracleUnavailablePolicy = "zero"

    def __post_init__(self) -> None:
        if not 1 <= self.page_size <= MAX_PAGE_SIZE:
            raise ConfigurationError(f"page_size must be between 1 and {MAX_PAGE_SIZE}")
        if not 1 <= self.variants_per_product <= MAX_PAGE_SIZE:
            raise ConfigurationError(
                f"variants_per_product must be between 1 and {MAX_PAGE_SIZE}"
            )
        if self.apply_concurrency < 1:
            raise ConfigurationError("apply_concurrency must be at least 1")
        if self.run_deadline_seconds is not None and not (
            math.isfinite(self.run_deadline_seconds) and self.run_deadline_seconds > 0
        ):
            raise ConfigurationError("run_deadline_seconds must be a positive finite number")
        if self.on_oracle_unavailable not in ORACLE_UNAVAILABLE_POLICIES:
            raise ConfigurationError(
                f"Unknown oracle-unavailable policy: {self.on_oracle_unavailable!r}"
            )


def _int_setting(name: str, default: int) -> int:
    value = optional_int_env_var(name)
    return default if value is None else value


def get_sync_config() -> SyncConfig:
    """Build the sync configuration from optional ``STOCKSYNC_*`` overrides."""

    policy = optional_env_var("STOCKSYNC_ON_ORACLE_UNAVAILABLE") or "zero"
    return SyncConfig(
        page_size=_int_setting("STOCKSYNC_PAGE_SIZE", DEFAULT_PAGE_SIZE),
        variants_per_product=_int_setting(
            "STOCKSYNC_VARIANTS_PER_PRODUCT", DEFAULT_VARIANTS_PER_PRODUCT
        ),
        apply_concurrency=_int_setting("STOCKSYNC_APPLY_CONCURRENCY", DEFAULT_APPLY_CONCURRENCY),
        run_deadline_seconds=optional_float_env_var("STOCKSYNC_RUN_DEADLINE_SECONDS"),
        on_oracle_unavailable=cast(OracleUnavailablePolicy, policy.lower()),
    )
