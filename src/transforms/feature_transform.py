"""Feature attribute transform.

This module applies one dataset's field mapping to a feature's raw
attributes: key normalization, renaming, allow-list filtering, typing
with the ZIP-code exception, and null compaction. It also extracts the
numeric attributes the store indexes separately.
"""

from __future__ import annotations

from typing import Any, Mapping

from core.constants import ZIP_CODE_LENGTH
from core.types import FieldMapping, IndexableField, TransformResult
from transforms.autotype import autotype, is_numeric, value_to_text
from transforms.key_normalization import normalize_key


def transform_properties(mapping: FieldMapping, properties: Mapping[str, Any]) -> TransformResult:
    """Clean one feature's attributes according to a field mapping.

    Args:
        mapping: Field rules for the feature's dataset.
        properties: Raw attribute mapping.

    Returns:
        Cleaned attributes and the ordered indexable numeric fields,
        keyed by the final (renamed) key.
    """
    rules = tuple(
        (normalize_key(source_key, mapping.normalize_keys), target_key)
        for source_key, target_key in mapping.rename
    )
    cleaned: dict[str, Any] = {}
    indexable: dict[str, int | float] = {}
    for raw_key, raw_value in properties.items():
        key = rename_key(normalize_key(raw_key, mapping.normalize_keys), rules)
        if mapping.only_fields and key not in mapping.only_fields:
            continue
        value, numeric = classify_value(raw_value)
        cleaned[key] = value
        if numeric:
            indexable[key] = value
        else:
            indexable.pop(key, None)
    compacted = compact_properties(cleaned)
    indexable_fields: tuple[IndexableField, ...] = tuple(
        (key, value) for key, value in indexable.items() if key in compacted
    )
    return TransformResult(properties=compacted, indexable_fields=indexable_fields)


def rename_key(key: str, rules: tuple[tuple[str, str], ...]) -> str:
    """Apply the first matching rename rule to a key.

    Rules with an empty target never match.

    Args:
        key: Normalized key.
        rules: Ordered ``(from, to)`` pairs.

    Returns:
        Renamed key, or the key unchanged when no rule matches.
    """
    for source_key, target_key in rules:
        if target_key and key == source_key:
            return target_key
    return key


def classify_value(raw_value: Any) -> tuple[Any, bool]:
    """Type a raw attribute value.

    Args:
        raw_value: Value as decoded from the source.

    Returns:
        Typed value and whether it belongs in the indexable fields.
    """
    text = value_to_text(raw_value)
    stripped = text.lstrip("0")
    if not is_numeric(stripped):
        return autotype(raw_value), False
    if len(stripped) == ZIP_CODE_LENGTH or (len(text) == ZIP_CODE_LENGTH and text.isdigit()):
        # US ZIP codes such as 07753 must keep their leading zero.
        return text, False
    typed_value = autotype(stripped)
    if isinstance(typed_value, bool) or not isinstance(typed_value, (int, float)):
        return autotype(raw_value), False
    return typed_value, True


def compact_properties(properties: Mapping[str, Any]) -> dict[str, Any]:
    """Drop attributes whose value is null or empty.

    Args:
        properties: Typed attributes.

    Returns:
        Attributes without None, empty strings, or empty containers.
    """
    return {key: value for key, value in properties.items() if not _is_empty(value)}


def _is_empty(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, (str, list, tuple, dict)):
        return len(value) == 0
    return False
