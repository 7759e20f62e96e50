"""Store wire payloads for feature records.

This module centralizes GeoJSON serialization of transformed features
and the positional arguments of the SET and FSET store commands.
"""

from __future__ import annotations

import json

from core.constants import OBJECT_MARKER
from core.types import FeatureRecord, RawFeature, TransformResult


def feature_to_payload(feature: RawFeature, result: TransformResult) -> dict[str, object]:
    """Build a GeoJSON Feature from a raw feature and its cleaned attributes.

    Args:
        feature: Decoded source feature.
        result: Transform output for the feature.

    Returns:
        Dictionary payload for JSON encoding.
    """
    payload: dict[str, object] = {
        "type": "Feature",
        "geometry": feature.geometry,
        "properties": dict(result.properties),
    }
    if feature.feature_id is not None:
        payload["id"] = feature.feature_id
    return payload


def build_feature_record(
    dataset_name: str,
    index: int,
    feature: RawFeature,
    result: TransformResult,
) -> FeatureRecord:
    """Serialize a transformed feature into a store record.

    Args:
        dataset_name: Dataset the feature belongs to.
        index: Zero-based feature position in its file.
        feature: Decoded source feature.
        result: Transform output for the feature.

    Returns:
        Record ready for emission.
    """
    payload = json.dumps(feature_to_payload(feature, result), separators=(",", ":"))
    return FeatureRecord(
        dataset_name=dataset_name,
        index=index,
        payload=payload,
        indexable_fields=result.indexable_fields,
    )


def set_object_args(record: FeatureRecord) -> tuple[object, ...]:
    """Return ``SET`` arguments: dataset, index, OBJECT marker, payload."""
    return (record.dataset_name, record.index, OBJECT_MARKER, record.payload)


def set_fields_args(record: FeatureRecord) -> tuple[object, ...]:
    """Return ``FSET`` arguments: dataset, index, then interleaved key/value pairs."""
    arguments: list[object] = [record.dataset_name, record.index]
    for key, value in record.indexable_fields:
        arguments.extend((key, value))
    return tuple(arguments)
