"""Generator invocation with stale-output pruning."""

from __future__ import annotations

import logging
from collections.abc import Callable
from pathlib import Path
from typing import Any

from restgate.constants.generation import DESCRIPTOR_PARSE_ERROR_PATTERN
from restgate.exceptions import DescriptorParseError, GenerationError
from restgate.generation.kinds import ArtifactKind
from restgate.io import collect_files, remove_files
from restgate.model import GenerationRequest, GeneratorResult

logger = logging.getLogger(__name__)


def invoke_generator(
    target_dir: Path,
    generator_call: Callable[[], GeneratorResult],
    *,
    kind_name: str,
    file_glob: str,
    request: GenerationRequest | None = None,
) -> frozenset[Path]:
    """Run ``generator_call`` and delete outputs it no longer produces.

    Outputs present under ``target_dir`` before the call that are neither
    modified nor targeted by the generator are removed. On failure, including a
    result naming files that do not exist, nothing is deleted and a
    ``GenerationError`` carrying ``request`` context is raised.
    """
    target_dir = target_dir.resolve()
    previous_outputs = collect_files(target_dir, file_glob)
    target_dir.mkdir(parents=True, exist_ok=True)

    try:
        result = generator_call()
    except Exception as exc:
        error = classify_generation_failure(exc, kind_name=kind_name, target_dir=target_dir, request=request)
        for line in error.diagnostics():
            logger.error(line)
        logger.error("%s file glob expression: %s", kind_name, file_glob)
        raise error from exc

    if not isinstance(result, GeneratorResult):
        raise GenerationError(
            f"{kind_name} generator returned {type(result).__name__}, expected GeneratorResult",
            kind=kind_name,
            output_dir=target_dir,
            **_request_context(request),
        )

    generated_files = result.all_files(target_dir)
    logger.debug("generated %s files: %s", kind_name, sorted(str(path) for path in generated_files))

    missing_files = sorted(str(path) for path in generated_files if not path.is_file())
    if missing_files:
        raise GenerationError(
            f"{kind_name} generator reported files it did not write: {', '.join(missing_files)}",
            kind=kind_name,
            output_dir=target_dir,
            **_request_context(request),
        )

    stale_files = set(previous_outputs) - generated_files
    if stale_files:
        logger.debug("deleting stale files: %s", sorted(str(path) for path in stale_files))
        remove_files(stale_files)
    return generated_files


def run_kind_generator(kind: ArtifactKind, request: GenerationRequest) -> frozenset[Path]:
    """Invoke ``kind``'s generator into ``request.output_dir``."""
    return invoke_generator(
        request.output_dir,
        lambda: kind.generator.generate(request),
        kind_name=kind.name,
        file_glob=kind.file_glob,
        request=request,
    )


def classify_generation_failure(
    exc: BaseException,
    *,
    kind_name: str,
    target_dir: Path,
    request: GenerationRequest | None = None,
) -> GenerationError:
    """Turn a generator exception into a ``DescriptorParseError`` or ``GenerationError``."""
    if isinstance(exc, GenerationError):
        return exc

    context = _request_context(request)
    detail = str(exc) or type(exc).__name__
    match = DESCRIPTOR_PARSE_ERROR_PATTERN.search(detail)
    if match is not None:
        source = Path(match.group("source"))
        line = int(match.group("line"))
        column = int(match.group("column"))
        return DescriptorParseError(
            f"JSON parse error in {source}: line: {line}, column: {column}",
            source=source,
            line=line,
            column=column,
            kind=kind_name,
            output_dir=target_dir,
            cause=exc,
            **context,
        )
    return GenerationError(
        f"{kind_name} generator error: {detail}",
        kind=kind_name,
        output_dir=target_dir,
        cause=exc,
        **context,
    )


def _request_context(request: GenerationRequest | None) -> dict[str, Any]:
    if request is None:
        return {}
    return {
        "api_name": request.api_name,
        "classpath": request.classpath,
        "source_paths": request.source_paths,
        "packages": request.packages,
    }
