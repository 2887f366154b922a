"""File-level helpers for hashing, globbing and deletion."""

from __future__ import annotations

import hashlib
import logging
from collections.abc import Iterable
from pathlib import Path

from restgate.constants.cache import FILE_HASH_CHUNK_SIZE

logger = logging.getLogger(__name__)


def file_sha256(path: Path) -> str:
    """Return SHA-256 hex digest for a file."""
    digest = hashlib.sha256()
    with path.open("rb") as handle:
        for chunk in iter(lambda: handle.read(FILE_HASH_CHUNK_SIZE), b""):
            digest.update(chunk)
    return digest.hexdigest()


def collect_files(root: Path, pattern: str) -> list[Path]:
    """Return resolved regular files under ``root`` matching ``pattern``, sorted.

    A missing ``root`` yields an empty list.
    """
    if not root.is_dir():
        return []
    return sorted({path.resolve() for path in root.glob(pattern) if path.is_file()})


def remove_files(paths: Iterable[Path]) -> list[Path]:
    """Delete each path that still exists and return the ones removed."""
    removed: list[Path] = []
    for path in sorted(paths):
        try:
            path.unlink()
        except FileNotFoundError:
            continue
        removed.append(path)
    return removed
