"""In-test generator and checker doubles."""

from __future__ import annotations

import json
from collections.abc import Callable
from pathlib import Path
from typing import TypeAlias

from restgate.compatibility import CompatibilityChecker
from restgate.generation import Generator
from restgate.model import CompatibilityInfo, GenerationRequest, GeneratorResult
from restgate.types import CompatLevel

OutputFactory: TypeAlias = Callable[[GenerationRequest], dict[str, str]]


class RecordingGenerator(Generator):
    """Writes the files returned by ``outputs`` and records every request."""

    def __init__(self, outputs: OutputFactory) -> None:
        self.outputs = outputs
        self.calls: list[GenerationRequest] = []

    def generate(self, request: GenerationRequest) -> GeneratorResult:
        self.calls.append(request)
        written: list[Path] = []
        for relative, content in self.outputs(request).items():
            path = request.output_dir / relative
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(content, encoding="utf-8")
            written.append(path)
        return GeneratorResult(modified_files=tuple(written))


class FailingGenerator(Generator):
    """Raises ``error`` on every call."""

    def __init__(self, error: Exception) -> None:
        self.error = error

    def generate(self, request: GenerationRequest) -> GeneratorResult:
        raise self.error


class StubChecker(CompatibilityChecker):
    """Returns canned infos per current artifact name and records calls."""

    def __init__(self, infos: dict[str, list[CompatibilityInfo]] | None = None) -> None:
        self.infos = infos or {}
        self.calls: list[tuple[Path, Path, CompatLevel]] = []

    def check(self, previous: Path, current: Path, level: CompatLevel) -> list[CompatibilityInfo]:
        self.calls.append((previous, current, level))
        return list(self.infos.get(current.name, []))


class ExplodingChecker(CompatibilityChecker):
    """Fails the test if a structural check is attempted."""

    def check(self, previous: Path, current: Path, level: CompatLevel) -> list[CompatibilityInfo]:
        raise AssertionError(f"unexpected check of {current}")


def descriptor_models(request: GenerationRequest) -> dict[str, str]:
    """One model file per ``.pdsc`` source, named after the descriptor."""
    return {
        f"{Path(source).stem}.java": f"// generated from {Path(source).name}\n" for source in request.source_paths
    }


def write_json(path: Path, payload: object) -> Path:
    """Write ``payload`` as pretty JSON, creating parent directories."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(payload, indent=2, sort_keys=True), encoding="utf-8")
    return path


def write_text(path: Path, content: str) -> Path:
    """Write ``content``, creating parent directories."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
    return path
