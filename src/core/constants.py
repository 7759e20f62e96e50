"""Core constants used across geofriend modules.

This module centralizes defaults, file names, and wire literals.
Keeping values here avoids magic literals in business logic.
"""

from __future__ import annotations

FIELD_MAP_FILE_NAME = "fieldmap.toml"
DEFAULT_STORE_ADDRESS = "localhost:9851"
DEFAULT_STORE_PORT = 9851
DEFAULT_DATA_DIR = "~/.config/geofriend/geodata"
DEFAULT_LOG_LEVEL = "info"
SUPPORTED_LOG_LEVELS = ("debug", "info", "warning", "error", "critical")
DEFAULT_READY_TIMEOUT_SECONDS = 10.0
READY_POLL_INTERVAL_SECONDS = 0.25
STORE_CONNECT_TIMEOUT_SECONDS = 5.0
DATASET_FILE_PATTERN = "*.*"
GZIP_EXTENSION = ".gz"
FEATURE_COLLECTION_EXTENSIONS = (".geojson", ".json")
DEFAULT_NORMALIZE_MODE = "underscore"
SUPPORTED_NORMALIZE_MODES = ("hyphenate", "camelize", "underscore", "upper", "lower")
ZIP_CODE_LENGTH = 5
SET_COMMAND = "SET"
FSET_COMMAND = "FSET"
OBJECT_MARKER = "OBJECT"
PING_COMMAND = "PING"
