"""Typed field-map parsing for per-dataset attribute rules.

This module loads ``fieldmap.toml`` from a geodata directory and validates
it into an immutable registry. A missing file means no mappings; a present
but malformed file is a configuration error that stops the load run.
"""

from __future__ import annotations

from pathlib import Path
from types import MappingProxyType
from typing import Mapping, Sequence

import tomli

from core.constants import (
    DEFAULT_NORMALIZE_MODE,
    FIELD_MAP_FILE_NAME,
    SUPPORTED_NORMALIZE_MODES,
)
from core.errors import GeoConfigError
from core.logging_config import get_logger
from core.types import FieldMapping

_LOGGER = get_logger(__name__)
_MAPPING_KEYS = {"display", "only", "normalize", "rename"}


class FieldMappingRegistry:
    """Read-only lookup of field mappings by dataset name.

    Instances are safe to share between threads; nothing mutates
    after construction.
    """

    def __init__(self, mappings: Mapping[str, FieldMapping] | None = None) -> None:
        self._mappings = MappingProxyType(dict(mappings or {}))

    def lookup(self, dataset_name: str) -> FieldMapping | None:
        """Return the mapping for a dataset, or None when absent."""
        return self._mappings.get(dataset_name)

    def dataset_names(self) -> tuple[str, ...]:
        """Return registered dataset names in sorted order."""
        return tuple(sorted(self._mappings))

    def __len__(self) -> int:
        return len(self._mappings)


def load_field_mappings(source_dir: Path) -> FieldMappingRegistry:
    """Load and validate ``fieldmap.toml`` from a geodata directory.

    Args:
        source_dir: Directory that may contain the field map file.

    Returns:
        Registry of dataset mappings; empty when the file is absent.

    Raises:
        GeoConfigError: If the file exists but cannot be read or validated.
    """
    field_map_path = source_dir / FIELD_MAP_FILE_NAME
    if not field_map_path.exists():
        _LOGGER.info("field_mappings_absent", path=str(field_map_path))
        return FieldMappingRegistry()
    payload = _load_toml_payload(field_map_path)
    registry = parse_field_mappings(payload, str(field_map_path))
    if len(registry) == 0:
        _LOGGER.warning("field_mappings_empty", path=str(field_map_path))
    else:
        _LOGGER.info("field_mappings_loaded", path=str(field_map_path), count=len(registry))
    return registry


def parse_field_mappings(payload: Mapping[str, object], source: str) -> FieldMappingRegistry:
    """Validate a decoded field-map document into a registry.

    Args:
        payload: Decoded TOML document.
        source: Description of the document origin for error messages.

    Returns:
        Registry of validated mappings.

    Raises:
        GeoConfigError: If the document shape is invalid.
    """
    raw_types = payload.get("types")
    if raw_types is None:
        return FieldMappingRegistry()
    types_mapping = _expect_mapping(raw_types, f"'types' table in {source}")
    mappings = {
        dataset_name: _parse_mapping(dataset_name, raw_mapping, source)
        for dataset_name, raw_mapping in types_mapping.items()
    }
    return FieldMappingRegistry(mappings)


def _load_toml_payload(field_map_path: Path) -> Mapping[str, object]:
    try:
        with field_map_path.open("rb") as handle:
            return tomli.load(handle)
    except OSError as error:
        raise GeoConfigError(
            f"Failed to read field map at {field_map_path}: {error}. "
            "Check file permissions and retry."
        ) from error
    except tomli.TOMLDecodeError as error:
        raise GeoConfigError(
            f"Failed to parse field map at {field_map_path}: {error}. "
            "Fix the TOML syntax and retry."
        ) from error


def _parse_mapping(dataset_name: str, raw_mapping: object, source: str) -> FieldMapping:
    context = f"field map for dataset '{dataset_name}' in {source}"
    mapping = _expect_mapping(raw_mapping, context)
    unknown_keys = sorted(set(mapping) - _MAPPING_KEYS)
    if unknown_keys:
        _LOGGER.warning(
            "field_mapping_unknown_keys",
            dataset_name=dataset_name,
            source=source,
            keys=unknown_keys,
        )
    return FieldMapping(
        dataset_name=dataset_name,
        display_keys=_string_list(mapping, "display", context),
        only_fields=frozenset(_string_list(mapping, "only", context)),
        normalize_keys=_parse_normalize_mode(mapping.get("normalize"), context),
        rename=_parse_rename_rules(mapping.get("rename"), context),
    )


def _parse_normalize_mode(raw_mode: object, context: str) -> str:
    if raw_mode is None or raw_mode == "":
        return DEFAULT_NORMALIZE_MODE
    if isinstance(raw_mode, str) and raw_mode in SUPPORTED_NORMALIZE_MODES:
        return raw_mode
    raise GeoConfigError(
        f"Invalid {context}: unsupported normalize value {raw_mode!r}. "
        f"Use one of: {', '.join(SUPPORTED_NORMALIZE_MODES)}."
    )


def _parse_rename_rules(raw_rules: object, context: str) -> tuple[tuple[str, str], ...]:
    if raw_rules is None:
        return ()
    rules = []
    for position, raw_rule in enumerate(_expect_sequence(raw_rules, f"{context} rename"), 1):
        pair = _expect_sequence(raw_rule, f"{context} rename rule #{position}")
        if len(pair) != 2 or not all(isinstance(item, str) for item in pair):
            raise GeoConfigError(
                f"Invalid {context}: rename rule #{position} must be a "
                '["from", "to"] pair of strings.'
            )
        rules.append((pair[0], pair[1]))
    return tuple(rules)


def _string_list(mapping: Mapping[str, object], field_name: str, context: str) -> tuple[str, ...]:
    raw_value = mapping.get(field_name)
    if raw_value is None:
        return ()
    values = _expect_sequence(raw_value, f"{context} '{field_name}'")
    if not all(isinstance(item, str) for item in values):
        raise GeoConfigError(f"Invalid {context}: '{field_name}' must be a list of strings.")
    return tuple(values)


def _expect_mapping(value: object, context: str) -> Mapping[str, object]:
    if isinstance(value, Mapping):
        return value
    raise GeoConfigError(
        f"Invalid {context}: expected a table, got {type(value).__name__}."
    )


def _expect_sequence(value: object, context: str) -> Sequence[object]:
    if isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray)):
        return value
    raise GeoConfigError(f"Invalid {context}: expected list, got {type(value).__name__}.")
