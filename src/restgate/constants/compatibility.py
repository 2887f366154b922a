"""Compatibility levels, verdicts and operator guidance text."""

from __future__ import annotations

from restgate.types import CompatLevel

LEVEL_EQUIVALENT: str = "equivalent"
LEVEL_BACKWARDS: str = "backwards"
LEVEL_IGNORE: str = "ignore"
LEVEL_OFF: str = "off"

VALID_COMPAT_LEVELS: tuple[str, ...] = (LEVEL_EQUIVALENT, LEVEL_BACKWARDS, LEVEL_IGNORE, LEVEL_OFF)
DEFAULT_COMPAT_LEVEL: CompatLevel = "equivalent"

VERDICT_EQUIVALENT: str = "equivalent"
VERDICT_COMPATIBLE: str = "compatible"

INFO_COMPATIBLE: str = "compatible"
INFO_INCOMPATIBLE: str = "incompatible"

# Info kinds each level tolerates before the batch is rejected.
ALLOWED_INFO_KINDS: dict[str, frozenset[str]] = {
    LEVEL_EQUIVALENT: frozenset(),
    LEVEL_BACKWARDS: frozenset({INFO_COMPATIBLE}),
    LEVEL_IGNORE: frozenset({INFO_COMPATIBLE, INFO_INCOMPATIBLE}),
    LEVEL_OFF: frozenset({INFO_COMPATIBLE, INFO_INCOMPATIBLE}),
}

# Object keys whose value changes never break consumers.
DOC_ONLY_KEYS: frozenset[str] = frozenset({"doc"})

ROOT_JSON_PATH: str = "$"

RELAX_TO_BACKWARDS_HINT: str = (
    "You may set compatibility to 'backwards' to allow backwards compatible changes in interface.\n"
)
RELAX_TO_IGNORE_HINT: str = "You may set compatibility to 'ignore' to ignore compatibility errors.\n"
CHANGE_MODE_HINT: str = (
    "Change the mode with 'compat_mode' in restgate.yaml or '--compat-mode' on the command line.\n"
    "E.g. restgate publish-api --root . --compat-mode backwards\n"
)
