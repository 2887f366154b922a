"""Typed cache slot payload structures."""

from __future__ import annotations

from typing import TypedDict


class SlotFileEntry(TypedDict):
    """Recorded signature of one input file."""

    size: int
    mtime_ns: int
    sha256: str


class CacheSlotPayload(TypedDict):
    """On-disk record of the last successful run.

    ``files`` holds the inputs; ``outputs`` maps each file the run left in its
    output directories to its SHA-256.
    """

    version: int
    slot: str
    files: dict[str, SlotFileEntry]
    outputs: dict[str, str]
