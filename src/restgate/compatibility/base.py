"""Structural checker interface."""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path

from restgate.model import CompatibilityInfo
from restgate.types import CompatLevel


class CompatibilityChecker(ABC):
    """Classifies the differences between two versions of one artifact."""

    @abstractmethod
    def check(self, previous: Path, current: Path, level: CompatLevel) -> list[CompatibilityInfo]:
        """Return every difference found; an empty list means no change."""
