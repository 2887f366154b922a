"""Configuration and input-layout exceptions."""

from __future__ import annotations

from pathlib import Path

from restgate.exceptions.base import RestgateError


class ConfigError(RestgateError, ValueError):
    """Raised when pipeline configuration is invalid."""


class MissingInputDirectoryError(RestgateError, FileNotFoundError):
    """Raised when a required source directory does not exist."""

    def __init__(self, directory: Path, *, description: str = "Source") -> None:
        self.directory = directory
        super().__init__(f"{description} directory does not exist: {directory}")
