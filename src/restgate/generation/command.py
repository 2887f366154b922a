"""Subprocess adapter for generators exposed as command-line tools.

The command receives its inputs through argv placeholders and must print a
JSON object with ``modifiedFiles`` and ``targetFiles`` lists on stdout.
"""

from __future__ import annotations

import json
import logging
import os
import subprocess
from pathlib import Path

from restgate.constants.generation import (
    COMMAND_PLACEHOLDER_PATTERN,
    DEFAULT_COMMAND_TIMEOUT_SECONDS,
    GENERATOR_MODIFIED_FILES_KEY,
    GENERATOR_TARGET_FILES_KEY,
)
from restgate.exceptions import GeneratorCommandError
from restgate.generation.base import Generator
from restgate.model import GenerationRequest, GeneratorResult

logger = logging.getLogger(__name__)


class CommandGenerator(Generator):
    """Run a configured argv template as the generator."""

    def __init__(
        self,
        argv: tuple[str, ...],
        *,
        timeout_seconds: int = DEFAULT_COMMAND_TIMEOUT_SECONDS,
    ) -> None:
        if not argv:
            raise ValueError("generator command must not be empty")
        self.argv = argv
        self.timeout_seconds = timeout_seconds

    def render_argv(self, request: GenerationRequest) -> list[str]:
        """Substitute request values into the argv template.

        Only the known placeholder names are replaced, so inline scripts and
        JSON arguments keep their braces.
        """
        values = {
            "api_name": request.api_name,
            "output_dir": str(request.output_dir),
            "resolver_path": request.resolver_path,
            "classpath": os.pathsep.join(request.classpath),
            "source_paths": os.pathsep.join(request.source_paths),
            "packages": ",".join(request.packages),
        }
        return [COMMAND_PLACEHOLDER_PATTERN.sub(lambda match: values[match.group(1)], part) for part in self.argv]

    def generate(self, request: GenerationRequest) -> GeneratorResult:
        command = self.render_argv(request)
        logger.debug("Running generator command: %s", command)
        try:
            completed = subprocess.run(
                command,
                capture_output=True,
                text=True,
                check=False,
                timeout=self.timeout_seconds,
            )
        except (OSError, subprocess.TimeoutExpired) as exc:
            raise GeneratorCommandError(f"Failed to run generator command {command[0]}: {exc}") from exc

        if completed.returncode != 0:
            stderr = completed.stderr.strip()
            raise GeneratorCommandError(
                f"Generator command {command[0]} exited with status {completed.returncode}: {stderr}"
            )
        return parse_generator_output(completed.stdout, base_dir=request.output_dir)


def parse_generator_output(stdout: str, *, base_dir: Path) -> GeneratorResult:
    """Parse the generator's JSON report into a ``GeneratorResult``."""
    try:
        payload = json.loads(stdout)
    except ValueError as exc:
        raise GeneratorCommandError(f"Generator output is not valid JSON: {exc}") from exc

    if not isinstance(payload, dict):
        raise GeneratorCommandError("Generator output must be a JSON object")

    return GeneratorResult(
        modified_files=_path_list(payload, GENERATOR_MODIFIED_FILES_KEY, base_dir),
        target_files=_path_list(payload, GENERATOR_TARGET_FILES_KEY, base_dir),
    )


def _path_list(payload: dict[str, object], key: str, base_dir: Path) -> tuple[Path, ...]:
    raw = payload.get(key, [])
    if not isinstance(raw, list) or not all(isinstance(item, str) for item in raw):
        raise GeneratorCommandError(f"Generator output field '{key}' must be a list of strings")
    paths = (Path(item) for item in raw)
    return tuple(path if path.is_absolute() else base_dir / path for path in paths)
