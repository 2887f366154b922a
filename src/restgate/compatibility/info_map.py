"""Aggregation of per-pair checker findings."""

from __future__ import annotations

from collections.abc import Iterable

from restgate.compatibility.levels import is_compatible
from restgate.constants.compatibility import INFO_COMPATIBLE, INFO_INCOMPATIBLE
from restgate.model import CompatibilityInfo
from restgate.types import CompatLevel


class CompatibilityInfoMap:
    """Collects findings across artifact pairs; the batch is judged by its worst finding."""

    def __init__(self) -> None:
        self._infos: list[CompatibilityInfo] = []

    def add_all(self, infos: Iterable[CompatibilityInfo]) -> None:
        self._infos.extend(infos)

    @property
    def infos(self) -> tuple[CompatibilityInfo, ...]:
        """Findings in a deterministic order, independent of pair order."""
        return tuple(sorted(self._infos, key=lambda info: (info.artifact, info.location, info.kind, info.message)))

    @property
    def is_equivalent(self) -> bool:
        return not self._infos

    def is_compatible(self, level: CompatLevel) -> bool:
        return is_compatible(self._infos, level)

    def create_summary(self) -> str:
        """Render incompatible findings first, then compatible ones."""
        sections: list[str] = []
        for kind, heading in (
            (INFO_INCOMPATIBLE, "Incompatible changes:"),
            (INFO_COMPATIBLE, "Compatible changes:"),
        ):
            lines = [f"  {index}) {info.format()}" for index, info in enumerate(self._of_kind(kind), start=1)]
            if lines:
                sections.append("\n".join([heading, *lines]))
        return "\n".join(sections) + "\n" if sections else ""

    def _of_kind(self, kind: str) -> list[CompatibilityInfo]:
        return [info for info in self.infos if info.kind == kind]
