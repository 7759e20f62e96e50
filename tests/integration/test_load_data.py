"""Integration tests for loading a geodata directory end to end."""

from __future__ import annotations

import gzip
import json
import shutil
from pathlib import Path

from ingest.pipeline import load_geodata
from tests.fake_store import FakeStoreClient
from tests.fixture_paths import fixture_path, write_feature_collection

_ADDRESS = "localhost:9851"


def _copy_fixture_dir(tmp_path: Path) -> Path:
    target = tmp_path / "geodata"
    shutil.copytree(fixture_path("geodata"), target)
    return target


def test_load_fixture_directory_writes_cleaned_parks(fake_store: FakeStoreClient) -> None:
    """Parks objects should carry renamed, typed, compacted properties."""
    load_geodata(_ADDRESS, str(fixture_path("geodata")), store_factory=fake_store.factory)

    set_command = fake_store.commands_for("parks")[0]

    assert set_command[:4] == ("SET", "parks", 0, "OBJECT") and json.loads(
        str(set_command[4])
    )["properties"] == {"park_name": "Central", "acres": 843}


def test_load_fixture_directory_indexes_numeric_fields(fake_store: FakeStoreClient) -> None:
    """FSET should carry the numeric attributes of each feature."""
    load_geodata(_ADDRESS, str(fixture_path("geodata")), store_factory=fake_store.factory)

    fset_commands = [command for command in fake_store.commands_for("parks") if command[0] == "FSET"]

    assert fset_commands == [("FSET", "parks", 0, "acres", 843), ("FSET", "parks", 1, "acres", 526.25)]


def test_load_fixture_directory_keeps_zip_codes_and_filters_fields(
    fake_store: FakeStoreClient,
) -> None:
    """ZIP codes stay strings, padded numbers are indexed, and unlisted keys drop."""
    load_geodata(_ADDRESS, str(fixture_path("geodata")), store_factory=fake_store.factory)

    set_command, fset_command = fake_store.commands_for("zipcodes")
    payload = json.loads(str(set_command[4]))

    assert (payload["id"], payload["properties"], fset_command) == (
        "nj-07753",
        {"zip": "07753", "city": "Neptune", "population": 390000},
        ("FSET", "zipcodes", 0, "population", 390000),
    )


def test_failed_file_does_not_stop_other_files(fake_store: FakeStoreClient) -> None:
    """Broken and unmapped files abort alone while mapped files load."""
    report = load_geodata(_ADDRESS, str(fixture_path("geodata")), store_factory=fake_store.factory)

    assert (
        sorted(summary.dataset_name for summary in report.aborted_files),
        report.loaded_count,
    ) == (["broken", "trails"], 3)


def test_unmapped_dataset_emits_no_commands(fake_store: FakeStoreClient) -> None:
    """A dataset without a mapping never reaches the store."""
    load_geodata(_ADDRESS, str(fixture_path("geodata")), store_factory=fake_store.factory)

    assert fake_store.commands_for("trails") == []


def test_failed_feature_does_not_stop_file(tmp_path: Path) -> None:
    """A rejected command skips one feature and later features still load."""
    source_dir = _copy_fixture_dir(tmp_path)
    store = FakeStoreClient(fail_on={("FSET", "parks", 0)})

    report = load_geodata(_ADDRESS, str(source_dir), store_factory=store.factory)
    summary = report.summary_for("parks")

    assert summary is not None and (summary.loaded_count, summary.skipped_count) == (1, 1)


def test_feature_without_numeric_fields_gets_bare_fset(
    tmp_path: Path,
    fake_store: FakeStoreClient,
) -> None:
    """Features with only text attributes still receive an FSET."""
    source_dir = tmp_path / "geodata"
    source_dir.mkdir()
    shutil.copy(fixture_path("geodata/fieldmap.toml"), source_dir / "fieldmap.toml")
    write_feature_collection(source_dir / "parks.geojson", [{"Name": "Central"}])

    load_geodata(_ADDRESS, str(source_dir), store_factory=fake_store.factory)

    assert fake_store.commands_for("parks") == [
        (
            "SET",
            "parks",
            0,
            "OBJECT",
            '{"type":"Feature","geometry":{"type":"Point","coordinates":[-122.4,37.7]},'
            '"properties":{"park_name":"Central"}}',
        ),
        ("FSET", "parks", 0),
    ]


def test_compressed_dataset_loads_like_plain(tmp_path: Path, fake_store: FakeStoreClient) -> None:
    """Gzipped datasets load under their base name."""
    source_dir = tmp_path / "geodata"
    source_dir.mkdir()
    shutil.copy(fixture_path("geodata/fieldmap.toml"), source_dir / "fieldmap.toml")
    plain_path = write_feature_collection(tmp_path / "parks.geojson", [{"Acres": "12"}])
    (source_dir / "parks.geojson.gz").write_bytes(gzip.compress(plain_path.read_bytes()))

    report = load_geodata(_ADDRESS, str(source_dir), store_factory=fake_store.factory)

    assert (report.summary_for("parks").loaded_count, fake_store.commands[-1]) == (
        1,
        ("FSET", "parks", 0, "acres", 12),
    )


def test_directory_without_field_map_aborts_every_dataset(
    tmp_path: Path,
    fake_store: FakeStoreClient,
) -> None:
    """With no fieldmap.toml every dataset lacks a mapping."""
    write_feature_collection(tmp_path / "parks.geojson", [{"Name": "Central"}])

    report = load_geodata(_ADDRESS, str(tmp_path), store_factory=fake_store.factory)

    assert ([summary.status for summary in report.files], fake_store.commands) == (["aborted"], [])


def test_rename_rule_in_source_casing_loads_renamed_key(
    tmp_path: Path,
    fake_store: FakeStoreClient,
) -> None:
    """A rename rule written with the source key's casing still applies."""
    (tmp_path / "fieldmap.toml").write_text(
        '[types.parks]\nnormalize = "underscore"\nrename = [["Name", "park_name"]]\n',
        encoding="utf-8",
    )
    write_feature_collection(tmp_path / "parks.json", [{"Name": "Central"}])

    load_geodata(_ADDRESS, str(tmp_path), store_factory=fake_store.factory)
    set_command, fset_command = fake_store.commands

    assert (json.loads(str(set_command[4]))["properties"], fset_command) == (
        {"park_name": "Central"},
        ("FSET", "parks", 0),
    )


def test_deeply_nested_file_aborts_alone(tmp_path: Path, fake_store: FakeStoreClient) -> None:
    """A file nested too deeply to parse aborts while other files load."""
    source_dir = _copy_fixture_dir(tmp_path)
    (source_dir / "deep.geojson").write_text("[" * 200000 + "]" * 200000, encoding="utf-8")

    report = load_geodata(_ADDRESS, str(source_dir), store_factory=fake_store.factory)

    assert (report.summary_for("deep").status, report.summary_for("parks").loaded_count) == (
        "aborted",
        2,
    )


def test_oversized_digit_string_does_not_stop_file(
    tmp_path: Path,
    fake_store: FakeStoreClient,
) -> None:
    """Digit strings past the int conversion limit load as plain text."""
    source_dir = tmp_path / "geodata"
    source_dir.mkdir()
    shutil.copy(fixture_path("geodata/fieldmap.toml"), source_dir / "fieldmap.toml")
    write_feature_collection(source_dir / "parks.geojson", [{"code": "1" * 5000}, {"Name": "B"}])

    report = load_geodata(_ADDRESS, str(source_dir), store_factory=fake_store.factory)

    assert (report.summary_for("parks").loaded_count, fake_store.commands[-1]) == (
        2,
        ("FSET", "parks", 1),
    )


def test_unknown_mapping_key_does_not_stop_load(
    tmp_path: Path,
    fake_store: FakeStoreClient,
) -> None:
    """Extra keys in a dataset table are ignored and the dataset still loads."""
    (tmp_path / "fieldmap.toml").write_text(
        '[types.parks]\nnote = "curated by parks dept"\n',
        encoding="utf-8",
    )
    write_feature_collection(tmp_path / "parks.json", [{"Name": "Central"}])

    report = load_geodata(_ADDRESS, str(tmp_path), store_factory=fake_store.factory)

    assert report.summary_for("parks").status == "done"
