"""Dataclasses passed between pipeline stages."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path

from restgate.constants.compatibility import VERDICT_EQUIVALENT
from restgate.types import CompatLevel, InfoKind, Verdict


@dataclass(frozen=True)
class FileFingerprint:
    """Signature of one input file at evaluation time."""

    path: str
    size: int
    mtime_ns: int
    sha256: str

    @property
    def signature(self) -> tuple[str, str]:
        """Identity used for staleness comparison: path plus content digest."""
        return (self.path, self.sha256)


@dataclass(frozen=True)
class CacheEvaluation:
    """Outcome of checking a cache slot against the current inputs.

    ``commit(produced_files)`` persists ``fingerprints`` and the manifest of
    ``produced_files`` into the slot. Call it only after the guarded work has
    succeeded; repeated calls are no-ops.
    """

    slot_name: str
    is_stale: bool
    commit: Callable[..., None]
    fingerprints: tuple[FileFingerprint, ...] = ()


@dataclass(frozen=True)
class GenerationRequest:
    """Inputs handed to an external generator."""

    api_name: str
    output_dir: Path
    resolver_path: str = ""
    classpath: tuple[str, ...] = ()
    source_paths: tuple[str, ...] = ()
    packages: tuple[str, ...] = ()


@dataclass(frozen=True)
class GeneratorResult:
    """Files a generator wrote plus the files it considers current targets."""

    modified_files: tuple[Path, ...] = ()
    target_files: tuple[Path, ...] = ()

    def all_files(self, base_dir: Path) -> frozenset[Path]:
        """Union of modified and target files, resolved against ``base_dir``."""
        resolved: set[Path] = set()
        for path in (*self.modified_files, *self.target_files):
            candidate = path if path.is_absolute() else base_dir / path
            resolved.add(candidate.resolve())
        return frozenset(resolved)


@dataclass(frozen=True)
class ArtifactPair:
    """A generated artifact and the published location it would replace."""

    name: str
    current: Path
    published: Path

    @property
    def previous(self) -> Path | None:
        """Previously published artifact, or ``None`` for a new artifact."""
        return self.published if self.published.is_file() else None


@dataclass(frozen=True)
class CompatibilityInfo:
    """A single difference reported by a structural checker."""

    artifact: str
    kind: InfoKind
    location: str
    message: str

    def format(self) -> str:
        """Render as a single summary line."""
        return f"{self.artifact} {self.location}: {self.message}"


@dataclass(frozen=True)
class CompatibilityReport:
    """Aggregated verdict for one publish cycle."""

    verdict: Verdict
    level: CompatLevel
    summary: str = ""
    infos: tuple[CompatibilityInfo, ...] = ()
    checked: bool = True

    @property
    def is_equivalent(self) -> bool:
        return self.verdict == VERDICT_EQUIVALENT


@dataclass(frozen=True)
class PublishResult:
    """Where artifacts were published and which files were written."""

    published_dir: Path
    copied: tuple[Path, ...] = ()


@dataclass(frozen=True)
class KindResult:
    """Per-artifact-kind outcome of an API pipeline run."""

    kind: str
    generated_files: tuple[Path, ...]
    report: CompatibilityReport | None = None
    publish: PublishResult | None = None


@dataclass(frozen=True)
class ModelGenerationResult:
    """Outcome of the data-model pipeline."""

    regenerated: bool
    generated_files: tuple[Path, ...]


@dataclass(frozen=True)
class ApiPublishResult:
    """Outcome of the API pipeline."""

    api_name: str
    regenerated: bool
    kinds: tuple[KindResult, ...] = field(default_factory=tuple)

    def files_for(self, kind: str) -> tuple[Path, ...]:
        """Generated files for ``kind``; empty when the kind was not run."""
        for result in self.kinds:
            if result.kind == kind:
                return result.generated_files
        return ()
