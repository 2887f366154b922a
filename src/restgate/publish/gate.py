"""Publish gate: copy generated artifacts over their published counterparts."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from pathlib import Path

from restgate.constants.artifacts import PUBLISH_TEMP_PREFIX, PUBLISH_TEMP_SUFFIX
from restgate.io import copy_file_atomic
from restgate.model import ArtifactPair, CompatibilityReport, PublishResult

logger = logging.getLogger(__name__)


def build_artifact_pairs(generated_files: Iterable[Path], published_dir: Path) -> list[ArtifactPair]:
    """Pair each generated file with the same file name in ``published_dir``."""
    return [
        ArtifactPair(name=path.name, current=path, published=published_dir / path.name)
        for path in sorted(generated_files, key=lambda path: (path.name, str(path)))
    ]


def publish(
    report: CompatibilityReport,
    file_pairs: Iterable[ArtifactPair],
    published_dir: Path,
    *,
    kind_name: str = "artifact",
) -> PublishResult:
    """Apply ``report`` to the published tree.

    An unchecked report (level ``off``) and a compatible report copy every
    pair. An equivalent report only adds artifacts that are not published yet.
    Copies are per-file and not rolled back if a later copy fails.
    """
    published_dir.mkdir(parents=True, exist_ok=True)
    pairs = list(file_pairs)

    if not report.checked:
        logger.info("Compatibility checking is off; publishing %s files without checks.", kind_name)
        selected = pairs
    elif report.is_equivalent:
        selected = [pair for pair in pairs if pair.previous is None]
        if not selected:
            logger.info("%s files are equivalent. No need to publish.", kind_name)
            return PublishResult(published_dir=published_dir)
    else:
        logger.info(report.summary)
        selected = pairs

    logger.info("Publishing %s files to API project ...", kind_name)
    copied: list[Path] = []
    for pair in selected:
        copy_file_atomic(
            pair.current,
            pair.published,
            temp_prefix=PUBLISH_TEMP_PREFIX,
            temp_suffix=PUBLISH_TEMP_SUFFIX,
        )
        logger.debug("Published %s -> %s", pair.current, pair.published)
        copied.append(pair.published)
    return PublishResult(published_dir=published_dir, copied=tuple(copied))
