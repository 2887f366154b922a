"""Compatibility level parsing and tolerance rules."""

from __future__ import annotations

from collections.abc import Iterable
from typing import cast

from restgate.constants.compatibility import ALLOWED_INFO_KINDS, VALID_COMPAT_LEVELS
from restgate.exceptions import ConfigError
from restgate.model import CompatibilityInfo
from restgate.types import CompatLevel


def parse_compat_level(value: str) -> CompatLevel:
    """Normalize a configured compatibility mode, raising ``ConfigError`` if unknown."""
    normalized = value.strip().lower() if isinstance(value, str) else ""
    if normalized not in VALID_COMPAT_LEVELS:
        raise ConfigError(f"compat_mode must be one of {list(VALID_COMPAT_LEVELS)}, got {value!r}")
    return cast(CompatLevel, normalized)


def is_compatible(infos: Iterable[CompatibilityInfo], level: CompatLevel) -> bool:
    """Return True when every info is tolerated at ``level``."""
    allowed = ALLOWED_INFO_KINDS[level]
    return all(info.kind in allowed for info in infos)
