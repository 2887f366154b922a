"""Cache slot loading and persistence."""

from __future__ import annotations

import logging
from pathlib import Path

from restgate.constants.cache import CACHE_TEMP_PREFIX, CACHE_TEMP_SUFFIX, CACHE_VERSION
from restgate.io import load_json_file, write_json_atomic
from restgate.types import CacheSlotPayload, SlotFileEntry

logger = logging.getLogger(__name__)


def new_slot(slot_name: str) -> CacheSlotPayload:
    """Return an empty slot payload."""
    return {
        "version": CACHE_VERSION,
        "slot": slot_name,
        "files": {},
        "outputs": {},
    }


def load_slot(slot_path: Path) -> CacheSlotPayload | None:
    """Load a slot file, or ``None`` when it is missing or unusable.

    Callers treat ``None`` as "never run", so a corrupt slot forces regeneration.
    """
    if not slot_path.is_file():
        return None

    try:
        payload = load_json_file(slot_path)
    except (OSError, ValueError) as exc:
        logger.warning("Ignoring unreadable cache slot %s (%s)", slot_path, exc)
        return None

    if not isinstance(payload, dict) or payload.get("version") != CACHE_VERSION:
        logger.debug("Ignoring cache slot %s with unexpected layout", slot_path)
        return None

    slot_name = payload.get("slot")
    files = _normalize_files(payload.get("files"))
    outputs = _normalize_outputs(payload.get("outputs"))
    if not isinstance(slot_name, str) or files is None or outputs is None:
        return None

    return {
        "version": CACHE_VERSION,
        "slot": slot_name,
        "files": files,
        "outputs": outputs,
    }


def save_slot(slot_path: Path, payload: CacheSlotPayload) -> None:
    """Persist a slot atomically; on failure the previous slot stays intact."""
    write_json_atomic(
        path=slot_path,
        payload=payload,
        temp_prefix=CACHE_TEMP_PREFIX,
        temp_suffix=CACHE_TEMP_SUFFIX,
    )


def _normalize_files(raw_files: object) -> dict[str, SlotFileEntry] | None:
    # A single malformed entry invalidates the slot; dropping it would hide a removed input.
    if not isinstance(raw_files, dict):
        return None

    files: dict[str, SlotFileEntry] = {}
    for key, value in raw_files.items():
        if not isinstance(key, str) or not isinstance(value, dict):
            return None

        size = value.get("size")
        mtime_ns = value.get("mtime_ns")
        sha256 = value.get("sha256")
        if isinstance(size, bool) or not isinstance(size, int):
            return None
        if isinstance(mtime_ns, bool) or not isinstance(mtime_ns, int):
            return None
        if not isinstance(sha256, str):
            return None

        files[key] = {"size": size, "mtime_ns": mtime_ns, "sha256": sha256}
    return files


def _normalize_outputs(raw_outputs: object) -> dict[str, str] | None:
    if not isinstance(raw_outputs, dict):
        return None
    if not all(isinstance(key, str) and isinstance(value, str) for key, value in raw_outputs.items()):
        return None
    return dict(raw_outputs)
