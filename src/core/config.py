"""Runtime configuration model for geofriend.

This module owns all environment variable parsing and validation.
Other modules consume a typed config object instead of raw env reads.
"""

from __future__ import annotations

from dataclasses import dataclass
import math
import os

from core.constants import (
    DEFAULT_DATA_DIR,
    DEFAULT_LOG_LEVEL,
    DEFAULT_READY_TIMEOUT_SECONDS,
    DEFAULT_STORE_ADDRESS,
)
from core.errors import GeoConfigError
from core.logging_config import resolve_log_level


@dataclass(frozen=True)
class GeofriendConfig:
    """Validated runtime configuration.

    Attributes:
        store_address: Tile38 server address as ``host:port``.
        data_dir: Directory holding geodata files and ``fieldmap.toml``.
        log_level: Log verbosity name.
        ready_timeout_seconds: How long to wait for the store to answer PING.
    """

    store_address: str
    data_dir: str
    log_level: str
    ready_timeout_seconds: float

    @classmethod
    def from_env(cls) -> "GeofriendConfig":
        """Build config from process environment variables.

        Returns:
            A validated config object.

        Raises:
            GeoConfigError: If environment values are invalid.
        """
        store_address = os.getenv("GEOFRIEND_TILE38_ADDRESS", DEFAULT_STORE_ADDRESS)
        data_dir = os.getenv("GEOFRIEND_DATA_DIR", DEFAULT_DATA_DIR)
        log_level = os.getenv("LOGLEVEL", DEFAULT_LOG_LEVEL)
        resolve_log_level(log_level)
        timeout_value = os.getenv("GEOFRIEND_READY_TIMEOUT", str(DEFAULT_READY_TIMEOUT_SECONDS))
        return cls(
            store_address=store_address,
            data_dir=data_dir,
            log_level=log_level.strip().lower(),
            ready_timeout_seconds=_parse_ready_timeout(timeout_value),
        )


def _parse_ready_timeout(raw_value: str) -> float:
    """Parse the readiness timeout environment value.

    Args:
        raw_value: Raw string from environment.

    Returns:
        Parsed positive timeout in seconds.

    Raises:
        GeoConfigError: If value is not a finite positive number.
    """
    try:
        timeout = float(raw_value)
    except ValueError as error:
        raise GeoConfigError(
            "Invalid GEOFRIEND_READY_TIMEOUT value: "
            f"expected number of seconds, got '{raw_value}'. "
            "Set GEOFRIEND_READY_TIMEOUT to a positive number."
        ) from error
    if not math.isfinite(timeout) or timeout <= 0:
        raise GeoConfigError(
            f"Invalid GEOFRIEND_READY_TIMEOUT value: {raw_value} must be a finite "
            "number greater than zero."
        )
    return timeout
