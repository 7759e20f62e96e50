"""Load orchestration for geodata directories.

This module validates the run configuration, loads field mappings,
waits for the store, and fans out one worker per dataset file before
joining them into a single load report.
"""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Callable

from core.constants import DATASET_FILE_PATTERN, DEFAULT_READY_TIMEOUT_SECONDS
from core.errors import GeoConfigError
from core.field_map import load_field_mappings
from core.logging_config import get_logger
from core.store_address import StoreLocation, parse_store_address
from core.types import FileLoadSummary, LoadReport
from ingest.file_loader import LoadContext, load_dataset_file
from store.store_client import StoreClient, Tile38Client, wait_for_store

_LOGGER = get_logger(__name__)

StoreFactory = Callable[[StoreLocation], StoreClient]


class GeodataLoadRunner:
    """Runner for one load of a geodata directory into the store."""

    def __init__(
        self,
        address: str,
        source_dir: str,
        ready_timeout_seconds: float = DEFAULT_READY_TIMEOUT_SECONDS,
        store_factory: StoreFactory | None = None,
    ) -> None:
        if not address or not source_dir:
            raise GeoConfigError(
                "Must specify destination address and geodata source directory."
            )
        self._address = address
        self._location = parse_store_address(address)
        self._source_dir = _resolve_source_dir(source_dir)
        self._ready_timeout_seconds = ready_timeout_seconds
        self._store_factory = store_factory or Tile38Client.connect

    def run(self) -> LoadReport:
        """Execute the load and return per-file summaries."""
        registry = load_field_mappings(self._source_dir)
        store = self._store_factory(self._location)
        try:
            wait_for_store(store, self._address, self._ready_timeout_seconds)
            context = LoadContext(registry=registry, store=store)
            summaries = _dispatch_files(context, discover_dataset_files(self._source_dir))
        finally:
            store.close()
        report = LoadReport(files=summaries)
        _log_load_completion(self._address, self._source_dir, report)
        return report


def load_geodata(
    address: str,
    source_dir: str,
    *,
    ready_timeout_seconds: float = DEFAULT_READY_TIMEOUT_SECONDS,
    store_factory: StoreFactory | None = None,
) -> LoadReport:
    """Load every dataset file in a directory into the store.

    Args:
        address: Store address as ``host:port``.
        source_dir: Geodata directory; ``~`` is expanded.
        ready_timeout_seconds: Upper bound on waiting for the store.
        store_factory: Builds the store client; Tile38 over redis by default.

    Returns:
        Load report. Per-file and per-feature failures are reported here,
        not raised.

    Raises:
        GeoConfigError: If the address or directory is missing or invalid,
            or ``fieldmap.toml`` is malformed.
        GeoConnectivityError: If the store does not answer in time.
    """
    runner = GeodataLoadRunner(
        address,
        source_dir,
        ready_timeout_seconds=ready_timeout_seconds,
        store_factory=store_factory,
    )
    return runner.run()


def discover_dataset_files(source_dir: Path) -> list[Path]:
    """List files with an extension directly inside a directory.

    Args:
        source_dir: Geodata directory.

    Returns:
        Sorted file paths.
    """
    return sorted(path for path in source_dir.glob(DATASET_FILE_PATTERN) if path.is_file())


def _dispatch_files(
    context: LoadContext,
    file_paths: list[Path],
) -> tuple[FileLoadSummary, ...]:
    """Run one worker per file and wait for all of them."""
    if not file_paths:
        return ()
    with ThreadPoolExecutor(
        max_workers=len(file_paths), thread_name_prefix="geofriend-load"
    ) as executor:
        futures = [executor.submit(load_dataset_file, context, path) for path in file_paths]
        return tuple(future.result() for future in futures)


def _resolve_source_dir(source_dir: str) -> Path:
    """Expand and validate the geodata directory.

    Args:
        source_dir: Raw directory argument.

    Returns:
        Absolute directory path.

    Raises:
        GeoConfigError: If the path is not an existing directory.
    """
    resolved_dir = Path(source_dir).expanduser().resolve()
    if not resolved_dir.is_dir():
        raise GeoConfigError(
            f"Geodata directory {resolved_dir} does not exist or is not a directory. "
            "Provide an existing directory with --data-dir."
        )
    return resolved_dir


def _log_load_completion(address: str, source_dir: Path, report: LoadReport) -> None:
    """Log load completion with aggregate counts."""
    _LOGGER.info(
        "load_completed",
        address=address,
        source_dir=str(source_dir),
        file_count=len(report.files),
        loaded_count=report.loaded_count,
        skipped_count=report.skipped_count,
        aborted_count=len(report.aborted_files),
    )
