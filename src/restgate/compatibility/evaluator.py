"""Batch compatibility evaluation for one publish cycle."""

from __future__ import annotations

import logging
from collections.abc import Iterable

from restgate.compatibility.base import CompatibilityChecker
from restgate.compatibility.info_map import CompatibilityInfoMap
from restgate.compatibility.levels import parse_compat_level
from restgate.constants.compatibility import (
    CHANGE_MODE_HINT,
    LEVEL_BACKWARDS,
    LEVEL_EQUIVALENT,
    LEVEL_OFF,
    RELAX_TO_BACKWARDS_HINT,
    RELAX_TO_IGNORE_HINT,
    VERDICT_COMPATIBLE,
    VERDICT_EQUIVALENT,
)
from restgate.exceptions import CompatibilityError
from restgate.model import ArtifactPair, CompatibilityReport
from restgate.types import CompatLevel

logger = logging.getLogger(__name__)


def check_compatibility(
    artifact_pairs: Iterable[ArtifactPair],
    compatibility_level: CompatLevel | str,
    checker: CompatibilityChecker,
) -> CompatibilityReport:
    """Compare each generated artifact with its published counterpart.

    Returns an ``equivalent`` report when nothing changed and a ``compatible``
    report (with a summary) when every change is tolerated by the level.
    Raises ``CompatibilityError`` when any pair violates the level. At level
    ``off`` no comparison runs and the report is flagged ``checked=False``.
    """
    level = parse_compat_level(compatibility_level)
    if level == LEVEL_OFF:
        logger.debug("Compatibility checking is off; skipping structural checks")
        return CompatibilityReport(verdict=VERDICT_EQUIVALENT, level=level, checked=False)

    info_map = CompatibilityInfoMap()
    for pair in artifact_pairs:
        previous = pair.previous
        if previous is None:
            logger.debug("No published %s; treating as a new artifact", pair.published)
            continue
        info_map.add_all(checker.check(previous, pair.current, level))

    if info_map.is_equivalent:
        return CompatibilityReport(verdict=VERDICT_EQUIVALENT, level=level)

    summary = info_map.create_summary() + directions_message(level)
    if not info_map.is_compatible(level):
        raise CompatibilityError(summary, level=level)

    return CompatibilityReport(
        verdict=VERDICT_COMPATIBLE,
        level=level,
        summary=summary,
        infos=info_map.infos,
    )


def directions_message(level: CompatLevel) -> str:
    """Explain which level was used and how to relax it."""
    message = f"This check was run on compatibility level {level}.\n"
    if level == LEVEL_EQUIVALENT:
        message += RELAX_TO_BACKWARDS_HINT
    if level in (LEVEL_EQUIVALENT, LEVEL_BACKWARDS):
        message += RELAX_TO_IGNORE_HINT
    return message + CHANGE_MODE_HINT
