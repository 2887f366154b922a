"""Staleness detection for groups of input files.

A slot records the fingerprints of the inputs seen by the last successful run
and the manifest of the outputs it left behind. ``evaluate`` compares the
current inputs and outputs with that record and hands back a ``commit``
callback; the consumer calls it only once its work has succeeded, so a failed
run is retried on the next invocation.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable
from pathlib import Path

from restgate.cache.slots import load_slot, new_slot, save_slot
from restgate.constants.cache import CACHE_SLOT_SUFFIX, UNREADABLE_SHA256
from restgate.io import file_sha256
from restgate.model import CacheEvaluation, FileFingerprint
from restgate.types import CacheSlotPayload

logger = logging.getLogger(__name__)

_UNSAFE_SLOT_CHARS: re.Pattern[str] = re.compile(r"[^A-Za-z0-9._-]+")


def fingerprint_files(paths: Iterable[Path]) -> tuple[FileFingerprint, ...]:
    """Fingerprint each distinct path, ordered by resolved path."""
    fingerprints: list[FileFingerprint] = []
    for path in sorted({path.resolve() for path in paths}):
        try:
            stat = path.stat()
            fingerprints.append(
                FileFingerprint(
                    path=str(path),
                    size=int(stat.st_size),
                    mtime_ns=int(stat.st_mtime_ns),
                    sha256=file_sha256(path),
                )
            )
        except OSError as exc:
            logger.warning("Failed to read input file metadata: %s (%s)", path, exc)
            fingerprints.append(FileFingerprint(path=str(path), size=-1, mtime_ns=-1, sha256=UNREADABLE_SHA256))
    return tuple(fingerprints)


class ChangeDetectionCache:
    """File-backed change detection keyed by slot name."""

    def __init__(self, cache_dir: Path) -> None:
        self.cache_dir = cache_dir

    def slot_path(self, slot_name: str) -> Path:
        """Return the on-disk record for ``slot_name``."""
        safe_name = _UNSAFE_SLOT_CHARS.sub("_", slot_name).strip(".") or "_"
        return self.cache_dir / f"{safe_name}{CACHE_SLOT_SUFFIX}"

    def evaluate(
        self,
        slot_name: str,
        current_files: Iterable[Path],
        output_files: Iterable[Path] = (),
    ) -> CacheEvaluation:
        """Report whether the inputs or outputs differ from the slot's last commit.

        ``output_files`` are the files currently in the guarded output
        directories. If they no longer match what the last successful run left
        there (for example, artifacts from a later rejected run), the slot is
        stale even when the inputs are unchanged.
        """
        fingerprints = fingerprint_files(current_files)
        output_fingerprints = fingerprint_files(output_files)
        slot_path = self.slot_path(slot_name)
        stored = load_slot(slot_path)
        is_stale = _is_stale(stored, fingerprints, output_fingerprints)
        logger.debug(
            "Cache slot %s: %d input file(s), %d output file(s), stale=%s",
            slot_name,
            len(fingerprints),
            len(output_fingerprints),
            is_stale,
        )

        committed = False

        def commit(produced_files: Iterable[Path] = ()) -> None:
            nonlocal committed
            if committed:
                return
            save_slot(slot_path, _build_payload(slot_name, fingerprints, fingerprint_files(produced_files)))
            committed = True
            logger.debug("Committed cache slot %s", slot_name)

        return CacheEvaluation(
            slot_name=slot_name,
            is_stale=is_stale,
            commit=commit,
            fingerprints=fingerprints,
        )


def _is_stale(
    stored: CacheSlotPayload | None,
    fingerprints: tuple[FileFingerprint, ...],
    output_fingerprints: tuple[FileFingerprint, ...],
) -> bool:
    if stored is None:
        return True
    if any(fingerprint.sha256 == UNREADABLE_SHA256 for fingerprint in fingerprints):
        return True
    stored_signatures = {(path, entry["sha256"]) for path, entry in stored["files"].items()}
    if stored_signatures != {fingerprint.signature for fingerprint in fingerprints}:
        return True
    return set(stored["outputs"].items()) != {fingerprint.signature for fingerprint in output_fingerprints}


def _build_payload(
    slot_name: str,
    fingerprints: tuple[FileFingerprint, ...],
    output_fingerprints: tuple[FileFingerprint, ...],
) -> CacheSlotPayload:
    payload = new_slot(slot_name)
    for fingerprint in fingerprints:
        payload["files"][fingerprint.path] = {
            "size": fingerprint.size,
            "mtime_ns": fingerprint.mtime_ns,
            "sha256": fingerprint.sha256,
        }
    for fingerprint in output_fingerprints:
        payload["outputs"][fingerprint.path] = fingerprint.sha256
    return payload
