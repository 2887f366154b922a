"""Exceptions raised while running external generators."""

from __future__ import annotations

from pathlib import Path
from typing import Any

from restgate.exceptions.base import RestgateError


class GeneratorCommandError(RestgateError, RuntimeError):
    """Raised by the subprocess adapter when a generator command fails."""


class GenerationError(RestgateError, RuntimeError):
    """A generator failed; carries the context an operator needs for triage."""

    def __init__(
        self,
        message: str,
        *,
        kind: str,
        api_name: str = "",
        classpath: tuple[str, ...] = (),
        source_paths: tuple[str, ...] = (),
        packages: tuple[str, ...] = (),
        output_dir: Path | None = None,
        cause: BaseException | None = None,
    ) -> None:
        super().__init__(message)
        self.kind = kind
        self.api_name = api_name
        self.classpath = classpath
        self.source_paths = source_paths
        self.packages = packages
        self.output_dir = output_dir
        self.cause = cause

    def diagnostics(self) -> list[str]:
        """Return the context lines logged alongside the failure."""
        return [
            f"Running {self.kind} generator for {self.api_name or '<unnamed>'}: {self.cause!r}",
            f"Classpath: {', '.join(self.classpath)}",
            f"Source paths: {', '.join(self.source_paths)}",
            f"Packages: {', '.join(self.packages)}",
            f"Output dir: {self.output_dir}",
        ]


class DescriptorParseError(GenerationError):
    """A source descriptor is malformed; location is taken from the parser message."""

    def __init__(self, message: str, *, source: Path, line: int, column: int, **context: Any) -> None:
        super().__init__(message, **context)
        self.source = source
        self.line = line
        self.column = column
