"""Shared exception hierarchy for Restgate."""

from __future__ import annotations

from .base import RestgateError
from .compatibility import CompatibilityError
from .config import ConfigError, MissingInputDirectoryError
from .generation import DescriptorParseError, GenerationError, GeneratorCommandError

__all__ = [
    "CompatibilityError",
    "ConfigError",
    "DescriptorParseError",
    "GenerationError",
    "GeneratorCommandError",
    "MissingInputDirectoryError",
    "RestgateError",
]
