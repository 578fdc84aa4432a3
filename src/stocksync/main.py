from __future__ import annotations

import argparse
import dataclasses
import logging
import math
import sys
from signal import SIGINT, signal
from typing import TYPE_CHECKING

from dotenv import load_dotenv

from stocksync.app import sync_inventory
from stocksync.config import ConfigurationError, configure_logging, get_sync_config
from stocksync.config.sync import ORACLE_UNAVAILABLE_POLICIES

if TYPE_CHECKING:
    from collections.abc import Sequence
    from types import FrameType

    from stocksync.config import SyncConfig

log = logging.getLogger(__name__)


def _positive_int(value: str) -> int:
    try:
        parsed = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"Invalid integer: {value}") from exc
    if parsed < 1:
        raise argparse.ArgumentTypeError(f"Must be at least 1: {value}")
    return parsed


def _positive_float(value: str) -> float:
    try:
        parsed = float(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"Invalid number: {value}") from exc
    if not math.isfinite(parsed) or parsed <= 0:
        raise argparse.ArgumentTypeError(f"Must be a positive finite number: {value}")
    return parsed


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Set Shopify available quantities to the stock reported by the forecasting API"
    )
    parser.add_argument(
        "--page-size",
        type=_positive_int,
        help="Number of products to request per catalog page (defaults to config)",
    )
    parser.add_argument(
        "--concurrency",
        type=_positive_int,
        help="Maximum number of inventory updates in flight (defaults to config, usually 1)",
    )
    parser.add_argument(
        "--deadline-seconds",
        type=_positive_float,
        help="Overall run deadline; unfinished work is reported as failed",
    )
    parser.add_argument(
        "--on-oracle-unavailable",
        choices=ORACLE_UNAVAILABLE_POLICIES,
        help="Set every quantity to 0 ('zero') or skip all updates ('skip') when the "
        "stock oracle cannot be reached (defaults to config)",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Compute the updates without applying them",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    return parser.parse_args(list(argv))


def _build_sync_config(args: argparse.Namespace) -> SyncConfig:
    overrides: dict[str, object] = {}
    if args.page_size is not None:
        overrides["page_size"] = args.page_size
    if args.concurrency is not None:
        overrides["apply_concurrency"] = args.concurrency
    if args.deadline_seconds is not None:
        overrides["run_deadline_seconds"] = args.deadline_seconds
    if args.on_oracle_unavailable is not None:
        overrides["on_oracle_unavailable"] = args.on_oracle_unavailable
    return dataclasses.replace(get_sync_config(), **overrides)


def main(argv: Sequence[str] | None = None) -> None:
    """Main application entry point."""
    args_list = list(argv) if argv is not None else list(sys.argv[1:])
    parsed_args = _parse_args(args_list)
    configure_logging(level=logging.DEBUG if parsed_args.verbose else logging.INFO)

    try:
        sync_config = _build_sync_config(parsed_args)
    except ConfigurationError:
        log.exception("Invalid sync configuration")
        sys.exit(2)

    try:
        report = sync_inventory(sync_config=sync_config, dry_run=parsed_args.dry_run)
    except Exception:
        log.exception("Fatal error during inventory sync")
        sys.exit(1)

    if report.failed:
        log.warning(
            "%s of %s inventory updates failed; they will be retried on the next run",
            len(report.failed),
            len(report.outcomes),
        )


def sigint_handler(_signal_received: int, _frame: FrameType | None) -> None:
    """Handle SIGINT (Ctrl+C) gracefully."""
    log.info("Closed by user (Ctrl+C)")
    sys.exit(0)


def run() -> None:
    load_dotenv()
    signal(SIGINT, sigint_handler)
    main()


if __name__ == "__main__":
    run()
