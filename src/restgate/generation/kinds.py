"""Artifact kind strategies selected once per pipeline run."""

from __future__ import annotations

from dataclasses import dataclass

from restgate.compatibility.base import CompatibilityChecker
from restgate.compatibility.json_checker import JsonStructureChecker
from restgate.constants.artifacts import (
    DATA_TEMPLATE_GLOB,
    IDL_GLOB,
    KIND_DATA_TEMPLATE,
    KIND_IDL,
    KIND_SNAPSHOT,
    SNAPSHOT_GLOB,
)
from restgate.generation.base import Generator


@dataclass(frozen=True)
class ArtifactKind:
    """Kind-specific glob, generator and checker.

    ``checker`` is ``None`` for kinds that are generated but never published.
    """

    name: str
    file_glob: str
    generator: Generator
    checker: CompatibilityChecker | None = None


def data_template_kind(generator: Generator) -> ArtifactKind:
    """Model classes generated from source descriptors."""
    return ArtifactKind(name=KIND_DATA_TEMPLATE, file_glob=DATA_TEMPLATE_GLOB, generator=generator)


def idl_kind(generator: Generator, checker: CompatibilityChecker | None = None) -> ArtifactKind:
    """Interface descriptions of the API's resources."""
    return ArtifactKind(
        name=KIND_IDL,
        file_glob=IDL_GLOB,
        generator=generator,
        checker=checker or JsonStructureChecker(),
    )


def snapshot_kind(generator: Generator, checker: CompatibilityChecker | None = None) -> ArtifactKind:
    """Interface descriptions bundled with every schema they reference."""
    return ArtifactKind(
        name=KIND_SNAPSHOT,
        file_glob=SNAPSHOT_GLOB,
        generator=generator,
        checker=checker or JsonStructureChecker(),
    )
