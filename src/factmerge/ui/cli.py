from __future__ import annotations

import argparse
import logging
import sys
from dataclasses import replace
from pathlib import Path
from signal import SIGINT, signal
from typing import TYPE_CHECKING

from dotenv import load_dotenv

from factmerge.app import reconcile_files
from factmerge.config import ConfigurationError, configure_logging, get_reconcile_settings

if TYPE_CHECKING:
    from collections.abc import Sequence
    from types import FrameType

    from factmerge.config import ReconcileSettings

log = logging.getLogger(__name__)

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Reconcile facts extracted from documents")
    parser.add_argument(
        "--log-level",
        choices=_LOG_LEVELS,
        default="INFO",
        help="Logging verbosity (default: %(default)s)",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    merge = subparsers.add_parser("merge", help="Merge facts from CSV and text files")
    merge.add_argument(
        "files",
        nargs="+",
        type=Path,
        help="CSV (.csv) or plain-text key/value (.txt) files",
    )
    merge.add_argument(
        "--output",
        type=Path,
        help="Write the JSON report here instead of stdout",
    )
    merge.add_argument(
        "--region",
        type=str,
        help="Default phone region, e.g. US or GB (defaults to config)",
    )
    merge.add_argument(
        "--tables",
        type=Path,
        help="TOML file with synonym/category/abbreviation overrides",
    )

    return parser.parse_args(list(argv))


def _resolve_settings(args: argparse.Namespace) -> ReconcileSettings:
    settings = get_reconcile_settings()
    if args.region:
        region = args.region.strip().upper()
        if len(region) != 2 or not region.isalpha():
            raise ValueError(f"Invalid region code: {args.region}")
        settings = replace(settings, default_region=region)
    if args.tables is not None:
        settings = replace(settings, tables_path=args.tables)
    return settings


def _run_merge(args: argparse.Namespace, settings: ReconcileSettings) -> None:
    outcome = reconcile_files(args.files, settings=settings)
    payload = outcome.report.to_json() + "\n"
    if args.output is None:
        sys.stdout.write(payload)
        return
    args.output.parent.mkdir(parents=True, exist_ok=True)
    args.output.write_text(payload, encoding="utf-8")
    log.info("Wrote reconciliation report: %s", args.output)


def main(argv: Sequence[str] | None = None) -> None:
    """Main application entry point."""
    args_list = list(argv) if argv is not None else list(sys.argv[1:])
    parsed_args = _parse_args(args_list)
    configure_logging(level=parsed_args.log_level)
    try:
        settings = _resolve_settings(parsed_args)
    except (ValueError, ConfigurationError):
        log.exception("CLI validation error")
        sys.exit(2)

    try:
        _run_merge(parsed_args, settings)
    except ConfigurationError:
        log.exception("Configuration error")
        sys.exit(2)
    except Exception:
        log.exception("Fatal error during reconciliation")
        sys.exit(1)


def sigint_handler(_signal_received: int, _frame: FrameType | None) -> None:
    """Handle SIGINT (Ctrl+C) gracefully."""
    log.info("Closed by user (Ctrl+C)")
    sys.exit(0)


def run() -> None:
    """Console-script entry point."""
    load_dotenv()
    signal(SIGINT, sigint_handler)
    main()


if __name__ == "__main__":
    run()
