"""geofriend exception hierarchy.

This module defines traceable domain errors with clear boundaries.
Only config and connectivity errors escape a load run; the rest are
absorbed into per-file and per-feature summaries.
"""

from __future__ import annotations


class GeofriendError(Exception):
    """Base exception for all geofriend failures."""


class GeoConfigError(GeofriendError):
    """Raised for invalid runtime configuration or a malformed field map."""


class GeoConnectivityError(GeofriendError):
    """Raised when the geospatial store cannot be reached."""


class GeoDecodeError(GeofriendError):
    """Raised when one dataset file cannot be opened, decompressed, or parsed."""


class GeoStoreError(GeofriendError):
    """Raised when a single store command fails."""
