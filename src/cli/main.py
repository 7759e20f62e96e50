"""geofriend CLI entry points.
This module exposes the load-data command and global logging flags.
It maps argparse commands onto pipeline calls.
"""

from __future__ import annotations

import argparse
from typing import Any, Sequence

from core.config import GeofriendConfig
from core.constants import SUPPORTED_LOG_LEVELS
from core.errors import GeofriendError
from core.logging_config import configure_logging
from core.types import LoadReport
from ingest.pipeline import load_geodata


def build_parser() -> argparse.ArgumentParser:
    """Build the top-level CLI parser.

    Returns:
        Configured argument parser.
    """
    parser = argparse.ArgumentParser(
        prog="geofriend",
        description="A geofencing and location utility.",
    )
    parser.add_argument(
        "-L",
        "--log-level",
        choices=SUPPORTED_LOG_LEVELS,
        type=str.lower,
        help="Level of log output verbosity (overrides LOGLEVEL)",
    )
    parser.add_argument(
        "-a",
        "--address",
        help="The address of the Tile38 server (overrides GEOFRIEND_TILE38_ADDRESS)",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)
    _add_load_data_command(subparsers)
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Run the geofriend CLI.

    Args:
        argv: Optional argument vector.

    Returns:
        Process exit code.
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        config = GeofriendConfig.from_env()
        configure_logging(args.log_level or config.log_level)
        if args.command == "load-data":
            return _run_load_data_command(config, args)
    except GeofriendError as error:
        print(f"load_error={error}")
        return 1
    parser.error(f"Unsupported command: {args.command}")
    return 2


def _run_load_data_command(config: GeofriendConfig, args: argparse.Namespace) -> int:
    """Handle load-data command.

    Args:
        config: Environment configuration.
        args: Parsed CLI args.

    Returns:
        Exit code.
    """
    report = load_geodata(
        args.address or config.store_address,
        args.data_dir or config.data_dir,
        ready_timeout_seconds=config.ready_timeout_seconds,
    )
    _print_report(report)
    return 0


def _print_report(report: LoadReport) -> None:
    for summary in report.files:
        if summary.status == "ignored":
            continue
        print(
            f"{summary.dataset_name}\t"
            f"{summary.status}\t"
            f"{summary.loaded_count}\t"
            f"{summary.skipped_count}"
        )


def _add_load_data_command(subparsers: Any) -> None:
    """Register load-data subcommand."""
    parser = subparsers.add_parser(
        "load-data",
        help="Autoload geodata to the destination server",
    )
    parser.add_argument(
        "-d",
        "--data-dir",
        help=(
            "The location of the directory containing GeoJSON (.json, .json.gz) "
            "data to load (overrides GEOFRIEND_DATA_DIR)"
        ),
    )
