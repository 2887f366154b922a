"""Tests for cache slot read/write behavior."""

from __future__ import annotations

from pathlib import Path

from restgate.cache import load_slot, new_slot, save_slot


def test_slot_roundtrip(tmp_path: Path) -> None:
    slot_path = tmp_path / "pdsc.sources.json"
    payload = new_slot("pdsc.sources")
    payload["files"]["/tmp/A.pdsc"] = {"size": 2, "mtime_ns": 123, "sha256": "deadbeef"}
    payload["outputs"]["/tmp/A.java"] = "cafebabe"

    save_slot(slot_path, payload)

    assert load_slot(slot_path) == payload


def test_missing_slot_loads_as_none(tmp_path: Path) -> None:
    assert load_slot(tmp_path / "absent.json") is None


def test_unknown_version_loads_as_none(tmp_path: Path) -> None:
    slot_path = tmp_path / "slot.json"
    slot_path.write_text('{"version": 999, "slot": "x", "files": {}}', encoding="utf-8")

    assert load_slot(slot_path) is None


def test_malformed_entry_invalidates_whole_slot(tmp_path: Path) -> None:
    slot_path = tmp_path / "slot.json"
    slot_path.write_text(
        '{"version": 2, "slot": "x", "outputs": {}, '
        '"files": {"a": {"size": 1, "mtime_ns": 1, "sha256": "x"}, "b": {"size": "1"}}}',
        encoding="utf-8",
    )

    assert load_slot(slot_path) is None


def test_slot_without_output_manifest_loads_as_none(tmp_path: Path) -> None:
    slot_path = tmp_path / "slot.json"
    slot_path.write_text('{"version": 2, "slot": "x", "files": {}}', encoding="utf-8")

    assert load_slot(slot_path) is None


def test_non_string_output_digest_invalidates_slot(tmp_path: Path) -> None:
    slot_path = tmp_path / "slot.json"
    slot_path.write_text('{"version": 2, "slot": "x", "files": {}, "outputs": {"/a.java": 1}}', encoding="utf-8")

    assert load_slot(slot_path) is None
