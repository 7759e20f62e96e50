"""Shared typed models.

This module defines immutable data models used by the registry,
transforms, decoder, loader, and store layers to keep interfaces explicit.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Literal, Mapping

from core.constants import DEFAULT_NORMALIZE_MODE

FileLoadStatus = Literal["done", "aborted", "ignored"]
IndexableField = tuple[str, int | float]


@dataclass(frozen=True)
class FieldMapping:
    """Declarative attribute rules for one dataset.

    Attributes:
        dataset_name: Dataset the rules apply to.
        display_keys: Ordered keys meant for display; not used by transforms.
        only_fields: Allow-list of final keys; empty keeps every key.
        normalize_keys: Key casing mode.
        rename: Ordered ``(from, to)`` rename rules.
    """

    dataset_name: str
    display_keys: tuple[str, ...] = ()
    only_fields: frozenset[str] = frozenset()
    normalize_keys: str = DEFAULT_NORMALIZE_MODE
    rename: tuple[tuple[str, str], ...] = ()


@dataclass(frozen=True)
class RawFeature:
    """One decoded feature before transforms.

    Attributes:
        geometry: GeoJSON geometry object, or None for unlocated features.
        properties: Raw attribute mapping as decoded from the source.
        feature_id: Optional GeoJSON feature id.
    """

    geometry: Mapping[str, Any] | None
    properties: Mapping[str, Any] = field(default_factory=dict)
    feature_id: str | int | None = None


@dataclass(frozen=True)
class TransformResult:
    """Cleaned attributes plus the numeric fields to index.

    Attributes:
        properties: Normalized, renamed, filtered, typed, compacted attributes.
        indexable_fields: Ordered ``(key, number)`` pairs for secondary indexing.
    """

    properties: Mapping[str, Any] = field(default_factory=dict)
    indexable_fields: tuple[IndexableField, ...] = ()


@dataclass(frozen=True)
class DecodedDataset:
    """Output of the decompress and decode stages for one file.

    Attributes:
        dataset_name: Dataset name derived from the file name.
        extension: Final format extension after decompression.
        features: Decoded features in source order.
        supported: Whether the final extension is a handled format.
    """

    dataset_name: str
    extension: str
    features: tuple[RawFeature, ...] = ()
    supported: bool = True


@dataclass(frozen=True)
class FeatureRecord:
    """Feature object ready to be written to the store.

    Attributes:
        dataset_name: Store collection key.
        index: Zero-based position of the feature in its file.
        payload: Serialized GeoJSON Feature.
        indexable_fields: Numeric fields sent with FSET.
    """

    dataset_name: str
    index: int
    payload: str
    indexable_fields: tuple[IndexableField, ...] = ()


@dataclass(frozen=True)
class FeatureOutcome:
    """Result of emitting one feature."""

    index: int
    loaded: bool
    reason: str | None = None


@dataclass(frozen=True)
class FileLoadSummary:
    """Result of processing one dataset file.

    Attributes:
        source_path: File that was processed.
        dataset_name: Dataset derived from the file name.
        status: ``done``, ``aborted``, or ``ignored``.
        loaded_count: Features written with both commands.
        skipped_count: Features that failed to emit.
        reasons: Abort reason or per-feature skip reasons.
    """

    source_path: str
    dataset_name: str
    status: FileLoadStatus
    loaded_count: int = 0
    skipped_count: int = 0
    reasons: tuple[str, ...] = ()


@dataclass(frozen=True)
class LoadReport:
    """Aggregate result of one load run."""

    files: tuple[FileLoadSummary, ...] = ()

    @property
    def loaded_count(self) -> int:
        """Total features loaded across files."""
        return sum(summary.loaded_count for summary in self.files)

    @property
    def skipped_count(self) -> int:
        """Total features skipped across files."""
        return sum(summary.skipped_count for summary in self.files)

    @property
    def aborted_files(self) -> tuple[FileLoadSummary, ...]:
        """Summaries of files whose processing stopped early."""
        return tuple(summary for summary in self.files if summary.status == "aborted")

    def summary_for(self, dataset_name: str) -> FileLoadSummary | None:
        """Return the first summary for a dataset, if any."""
        for summary in self.files:
            if summary.dataset_name == dataset_name:
                return summary
        return None
