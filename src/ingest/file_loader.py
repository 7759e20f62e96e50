"""Per-file load unit.

This module runs one dataset file through decode, transform, and emit.
Failures are confined: a bad file aborts only itself, and a failed store
command skips only its feature. Every outcome is returned in a summary.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from core.constants import FSET_COMMAND, SET_COMMAND
from core.errors import GeoDecodeError, GeoStoreError
from core.field_map import FieldMappingRegistry
from core.logging_config import get_logger
from core.types import FeatureOutcome, FieldMapping, FileLoadSummary, RawFeature
from ingest.dataset_decoder import dataset_name_for, read_dataset_file
from store.feature_payload import build_feature_record, set_fields_args, set_object_args
from store.store_client import StoreClient
from transforms.feature_transform import transform_properties

_LOGGER = get_logger(__name__)


@dataclass(frozen=True)
class LoadContext:
    """Shared, read-only inputs for every file worker.

    Attributes:
        registry: Field mappings by dataset name.
        store: Store client shared across workers.
    """

    registry: FieldMappingRegistry
    store: StoreClient


def load_dataset_file(context: LoadContext, file_path: Path) -> FileLoadSummary:
    """Decode, transform, and emit every feature of one file.

    Args:
        context: Registry and store shared by all workers.
        file_path: Dataset file to load.

    Returns:
        Summary with the file status and per-feature counts.
    """
    source_path = str(file_path)
    try:
        decoded = read_dataset_file(file_path)
    except GeoDecodeError as error:
        _LOGGER.warning("dataset_file_failed", path=source_path, reason=str(error))
        return _aborted_summary(source_path, dataset_name_for(file_path.name), str(error))
    if not decoded.supported:
        _LOGGER.debug("dataset_file_ignored", path=source_path, extension=decoded.extension)
        return FileLoadSummary(
            source_path=source_path, dataset_name=decoded.dataset_name, status="ignored"
        )
    mapping = context.registry.lookup(decoded.dataset_name)
    if mapping is None:
        reason = f"no field mapping found for dataset '{decoded.dataset_name}'"
        _LOGGER.warning(
            "dataset_mapping_missing",
            path=source_path,
            dataset_name=decoded.dataset_name,
            feature_count=len(decoded.features),
        )
        return _aborted_summary(source_path, decoded.dataset_name, reason)
    outcomes = [
        load_feature(context.store, mapping, index, feature)
        for index, feature in enumerate(decoded.features)
    ]
    summary = _summarize(source_path, decoded.dataset_name, outcomes)
    _LOGGER.info(
        "dataset_loaded",
        path=source_path,
        dataset_name=summary.dataset_name,
        loaded_count=summary.loaded_count,
        skipped_count=summary.skipped_count,
    )
    return summary


def load_feature(
    store: StoreClient,
    mapping: FieldMapping,
    index: int,
    feature: RawFeature,
) -> FeatureOutcome:
    """Transform one feature and write it with SET then FSET.

    Args:
        store: Store client.
        mapping: Field rules for the feature's dataset.
        index: Zero-based feature position, used as the object id.
        feature: Decoded feature.

    Returns:
        Loaded outcome, or a skipped outcome carrying the failure reason.
    """
    try:
        result = transform_properties(mapping, feature.properties)
        record = build_feature_record(mapping.dataset_name, index, feature, result)
        store.execute(SET_COMMAND, *set_object_args(record))
        store.execute(FSET_COMMAND, *set_fields_args(record))
    except (GeoStoreError, ValueError, TypeError) as error:
        _LOGGER.warning(
            "feature_skipped",
            dataset_name=mapping.dataset_name,
            index=index,
            reason=str(error),
        )
        return FeatureOutcome(index=index, loaded=False, reason=str(error))
    return FeatureOutcome(index=index, loaded=True)


def _summarize(
    source_path: str,
    dataset_name: str,
    outcomes: list[FeatureOutcome],
) -> FileLoadSummary:
    skipped = [outcome for outcome in outcomes if not outcome.loaded]
    return FileLoadSummary(
        source_path=source_path,
        dataset_name=dataset_name,
        status="done",
        loaded_count=len(outcomes) - len(skipped),
        skipped_count=len(skipped),
        reasons=tuple(f"feature {outcome.index}: {outcome.reason}" for outcome in skipped),
    )


def _aborted_summary(source_path: str, dataset_name: str, reason: str) -> FileLoadSummary:
    return FileLoadSummary(
        source_path=source_path,
        dataset_name=dataset_name,
        status="aborted",
        reasons=(reason,),
    )
