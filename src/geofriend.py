"""Public SDK surface for geofriend.

This module provides a stable import path for library users.
It re-exports the load entry point, config, and typed result models.
"""

from __future__ import annotations

from core.config import GeofriendConfig
from core.errors import (
    GeoConfigError,
    GeoConnectivityError,
    GeoDecodeError,
    GeofriendError,
    GeoStoreError,
)
from core.field_map import FieldMappingRegistry, load_field_mappings
from core.types import FeatureOutcome, FieldMapping, FileLoadSummary, LoadReport, RawFeature
from ingest.pipeline import load_geodata
from store.store_client import Tile38Client
from transforms.feature_transform import transform_properties

__all__ = [
    "FeatureOutcome",
    "FieldMapping",
    "FieldMappingRegistry",
    "FileLoadSummary",
    "GeoConfigError",
    "GeoConnectivityError",
    "GeoDecodeError",
    "GeoStoreError",
    "GeofriendConfig",
    "GeofriendError",
    "LoadReport",
    "RawFeature",
    "Tile38Client",
    "load_field_mappings",
    "load_geodata",
    "transform_properties",
]
