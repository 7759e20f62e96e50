"""Unit tests for logging configuration."""

from __future__ import annotations

import logging

import pytest

from core.errors import GeoConfigError
from core.logging_config import resolve_log_level


def test_resolve_log_level_maps_names_to_numbers() -> None:
    """Level names should map onto stdlib logging numbers."""
    assert resolve_log_level("Warning") == logging.WARNING


def test_resolve_log_level_rejects_unknown_names() -> None:
    """Unsupported names should raise a config error."""
    with pytest.raises(GeoConfigError):
        resolve_log_level("verbose")
