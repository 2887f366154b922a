"""End-to-end orchestration of the data-model and API pipelines.

Both pipelines follow the same sequence: evaluate the cache slot, and only
when it is stale run the generators, check compatibility, publish, and
finally commit the slot. Any failure leaves the slot untouched so the next
run starts over.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path

from restgate.cache import ChangeDetectionCache
from restgate.compatibility import check_compatibility, parse_compat_level
from restgate.constants.artifacts import DESCRIPTOR_GLOB, RESOURCE_CLASS_GLOB
from restgate.constants.cache import API_CACHE_SLOT, DATA_MODEL_CACHE_SLOT
from restgate.exceptions import MissingInputDirectoryError
from restgate.generation import ArtifactKind, run_kind_generator
from restgate.io import collect_files
from restgate.model import (
    ApiPublishResult,
    ArtifactPair,
    CompatibilityReport,
    GenerationRequest,
    KindResult,
    ModelGenerationResult,
)
from restgate.publish import build_artifact_pairs, publish
from restgate.types import CompatLevel

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class KindTarget:
    """Where one artifact kind is generated and where it is published."""

    kind: ArtifactKind
    generated_dir: Path
    published_dir: Path


@dataclass(frozen=True)
class ApiPipelineInputs:
    """Everything the API pipeline reads; nothing is taken from ambient state."""

    api_name: str
    compat_level: CompatLevel
    resource_products: tuple[Path, ...] = ()
    resource_packages: tuple[str, ...] = ()
    resource_source_paths: tuple[str, ...] = ()
    classpath: tuple[str, ...] = ()
    resolver_path: str = ""


def build_resolver_path(descriptor_dir: Path, classpath: tuple[str, ...] = ()) -> str:
    """Join the descriptor directory and classpath entries with the platform separator."""
    entries = [str(descriptor_dir.resolve())]
    entries.extend(str(Path(entry).resolve()) for entry in classpath if entry)
    return os.pathsep.join(dict.fromkeys(entries))


def run_data_model_pipeline(
    *,
    descriptor_dir: Path,
    model_dir: Path,
    kind: ArtifactKind,
    cache: ChangeDetectionCache,
    resolver_path: str = "",
    api_name: str = "",
) -> ModelGenerationResult:
    """Regenerate model files from source descriptors when they changed."""
    if not descriptor_dir.is_dir():
        raise MissingInputDirectoryError(descriptor_dir, description="Descriptor source")

    source_files = collect_files(descriptor_dir, DESCRIPTOR_GLOB)
    logger.debug("source files: (%d) %s", len(source_files), [str(path) for path in source_files])

    model_files = collect_files(model_dir, kind.file_glob)
    evaluation = cache.evaluate(DATA_MODEL_CACHE_SLOT, source_files, model_files)
    logger.debug("detected changed files: %s", evaluation.is_stale)
    if not evaluation.is_stale:
        logger.info("Cache is up-to-date, skipping %s regeneration", kind.name)
        return ModelGenerationResult(regenerated=False, generated_files=tuple(model_files))

    request = GenerationRequest(
        api_name=api_name,
        output_dir=model_dir,
        resolver_path=resolver_path or build_resolver_path(descriptor_dir),
        source_paths=tuple(str(path) for path in source_files),
    )
    generated = _kind_outputs(kind, model_dir, run_kind_generator(kind, request))
    evaluation.commit(generated)
    return ModelGenerationResult(regenerated=True, generated_files=generated)


def collect_api_inputs(
    resource_products: tuple[Path, ...],
    resource_packages: tuple[str, ...],
    resolver_path: str,
) -> list[Path]:
    """Files whose change requires the API artifacts to be regenerated.

    Compiled resources under every (product, package) directory plus every
    descriptor reachable through the resolver path.
    """
    inputs: set[Path] = set()
    for product in resource_products:
        for package in resource_packages:
            package_dir = product.joinpath(*package.split("."))
            inputs.update(collect_files(package_dir, RESOURCE_CLASS_GLOB))

    for entry in resolver_path.split(os.pathsep):
        if not entry:
            continue
        inputs.update(collect_files(Path(entry), DESCRIPTOR_GLOB))
    return sorted(inputs)


def run_api_pipeline(
    inputs: ApiPipelineInputs,
    targets: tuple[KindTarget, ...],
    cache: ChangeDetectionCache,
) -> ApiPublishResult:
    """Regenerate, check and publish API artifacts when resources or descriptors changed."""
    level = parse_compat_level(inputs.compat_level)
    input_files = collect_api_inputs(inputs.resource_products, inputs.resource_packages, inputs.resolver_path)
    existing_by_kind = {
        target.kind.name: tuple(collect_files(target.generated_dir, target.kind.file_glob)) for target in targets
    }
    evaluation = cache.evaluate(API_CACHE_SLOT, input_files, _flatten(existing_by_kind))

    if not evaluation.is_stale:
        logger.info("Cache is up-to-date, skipping idl and snapshot regeneration")
        return ApiPublishResult(
            api_name=inputs.api_name,
            regenerated=False,
            kinds=tuple(
                KindResult(kind=target.kind.name, generated_files=existing_by_kind[target.kind.name])
                for target in targets
            ),
        )

    generated_by_kind: dict[str, tuple[Path, ...]] = {}
    for target in targets:
        request = GenerationRequest(
            api_name=inputs.api_name,
            output_dir=target.generated_dir,
            resolver_path=inputs.resolver_path,
            classpath=inputs.classpath,
            source_paths=inputs.resource_source_paths,
            packages=inputs.resource_packages,
        )
        generated = run_kind_generator(target.kind, request)
        generated_by_kind[target.kind.name] = _kind_outputs(target.kind, target.generated_dir, generated)

    # Check every kind before publishing any of them.
    checked: list[tuple[KindTarget, list[ArtifactPair], CompatibilityReport | None]] = []
    for target in targets:
        if target.kind.checker is None:
            checked.append((target, [], None))
            continue
        pairs = build_artifact_pairs(generated_by_kind[target.kind.name], target.published_dir)
        checked.append((target, pairs, check_compatibility(pairs, level, target.kind.checker)))

    results: list[KindResult] = []
    for target, pairs, report in checked:
        generated_files = generated_by_kind[target.kind.name]
        if report is None:
            results.append(KindResult(kind=target.kind.name, generated_files=generated_files))
            continue
        outcome = publish(report, pairs, target.published_dir, kind_name=target.kind.name)
        results.append(
            KindResult(kind=target.kind.name, generated_files=generated_files, report=report, publish=outcome)
        )

    evaluation.commit(_flatten(generated_by_kind))
    return ApiPublishResult(api_name=inputs.api_name, regenerated=True, kinds=tuple(results))


def _kind_outputs(kind: ArtifactKind, output_dir: Path, generated: frozenset[Path]) -> tuple[Path, ...]:
    """Generated files matching ``kind``'s glob; anything else the generator reported is not an artifact."""
    return tuple(path for path in collect_files(output_dir, kind.file_glob) if path in generated)


def _flatten(files_by_kind: dict[str, tuple[Path, ...]]) -> list[Path]:
    return [path for files in files_by_kind.values() for path in files]
