"""Dataset file decoding for ingestion.

This module turns one geodata file into an ordered feature sequence in
two stages: gzip layers are stripped first, then the remaining payload
is parsed by a decoder keyed on its final extension.
"""

from __future__ import annotations

import gzip
import json
import zlib
from pathlib import Path
from typing import Any, BinaryIO, Mapping

from core.constants import FEATURE_COLLECTION_EXTENSIONS, GZIP_EXTENSION
from core.errors import GeoDecodeError
from core.types import DecodedDataset, RawFeature


def read_dataset_file(file_path: Path) -> DecodedDataset:
    """Open and decode one dataset file.

    Args:
        file_path: Geodata file, optionally gzip-compressed.

    Returns:
        Decoded dataset; unsupported formats yield no features.

    Raises:
        GeoDecodeError: If the file cannot be opened, decompressed, or parsed.
    """
    try:
        with file_path.open("rb") as stream:
            return decode_dataset(stream, file_path.name)
    except OSError as error:
        raise GeoDecodeError(f"failed to open {file_path}: {error}") from error


def decode_dataset(stream: BinaryIO, file_name: str) -> DecodedDataset:
    """Decode a byte stream named like a dataset file.

    Args:
        stream: Readable binary stream with the file contents.
        file_name: File base name used for format and dataset detection.

    Returns:
        Decoded dataset.

    Raises:
        GeoDecodeError: If decompression or parsing fails.
    """
    payload, inner_name = decompress_payload(stream.read(), file_name)
    extension = _final_extension(inner_name)
    supported = extension in FEATURE_COLLECTION_EXTENSIONS
    features = decode_features(payload, extension) if supported else ()
    return DecodedDataset(
        dataset_name=dataset_name_for(file_name),
        extension=extension,
        features=features,
        supported=supported,
    )


def decompress_payload(payload: bytes, file_name: str) -> tuple[bytes, str]:
    """Strip every gzip layer named by the file's suffixes.

    Args:
        payload: Raw file bytes.
        file_name: File base name, e.g. ``parks.geojson.gz``.

    Returns:
        Plain payload and the inner file name, e.g. ``parks.geojson``.

    Raises:
        GeoDecodeError: If a gzip layer is corrupt.
    """
    inner_name = file_name
    while _final_extension(inner_name) == GZIP_EXTENSION:
        try:
            payload = gzip.decompress(payload)
        except (OSError, EOFError, zlib.error) as error:
            raise GeoDecodeError(f"failed to decompress {file_name}: {error}") from error
        inner_name = inner_name[: -len(GZIP_EXTENSION)]
    return payload, inner_name


def decode_features(payload: bytes, extension: str) -> tuple[RawFeature, ...]:
    """Parse a plain payload into features according to its extension.

    Args:
        payload: Uncompressed file contents.
        extension: Final lower-case extension, e.g. ``.geojson``.

    Returns:
        Features in source order; empty for unhandled formats.

    Raises:
        GeoDecodeError: If a GeoJSON payload is invalid.
    """
    if extension not in FEATURE_COLLECTION_EXTENSIONS:
        return ()
    try:
        document = json.loads(payload)
    except (ValueError, RecursionError) as error:
        raise GeoDecodeError(f"failed to parse GeoJSON: {error}") from error
    return _features_from_document(document)


def dataset_name_for(file_name: str) -> str:
    """Derive the dataset name from a file base name.

    Gzip suffixes are removed first, then the format extension:
    ``parks.geojson.gz`` becomes ``parks``.

    Args:
        file_name: File base name.

    Returns:
        Dataset name.
    """
    name = file_name
    while _final_extension(name) == GZIP_EXTENSION:
        name = name[: -len(GZIP_EXTENSION)]
    extension = Path(name).suffix
    return name[: -len(extension)] if extension else name


def _features_from_document(document: Any) -> tuple[RawFeature, ...]:
    if not isinstance(document, dict):
        raise GeoDecodeError("failed to parse GeoJSON: top level must be an object")
    document_type = document.get("type")
    if document_type == "Feature":
        return (_parse_feature(document, 0),)
    if document_type != "FeatureCollection":
        raise GeoDecodeError(
            f"failed to parse GeoJSON: expected FeatureCollection, got {document_type!r}"
        )
    raw_features = document.get("features")
    if not isinstance(raw_features, list):
        raise GeoDecodeError("failed to parse GeoJSON: 'features' must be a list")
    return tuple(_parse_feature(raw, index) for index, raw in enumerate(raw_features))


def _parse_feature(raw_feature: Any, index: int) -> RawFeature:
    if not isinstance(raw_feature, dict):
        raise GeoDecodeError(f"failed to parse GeoJSON: feature #{index} is not an object")
    geometry = raw_feature.get("geometry")
    if geometry is not None and not isinstance(geometry, Mapping):
        raise GeoDecodeError(f"failed to parse GeoJSON: feature #{index} has invalid geometry")
    properties = raw_feature.get("properties") or {}
    if not isinstance(properties, Mapping):
        raise GeoDecodeError(
            f"failed to parse GeoJSON: feature #{index} properties must be an object"
        )
    return RawFeature(geometry=geometry, properties=properties, feature_id=raw_feature.get("id"))


def _final_extension(file_name: str) -> str:
    return Path(file_name).suffix.lower()
