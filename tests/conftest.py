"""Shared pytest fixtures for pipeline tests."""

from __future__ import annotations

from pathlib import Path

import pytest

from restgate.cache import ChangeDetectionCache


@pytest.fixture
def cache(tmp_path: Path) -> ChangeDetectionCache:
    """Cache rooted in a per-test directory."""
    return ChangeDetectionCache(tmp_path / "cache")


@pytest.fixture(scope="session")
def schemas_root() -> Path:
    """Return the directory holding the JSON Schemas."""
    return Path(__file__).resolve().parents[1] / "schemas"
