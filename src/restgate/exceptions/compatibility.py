"""Compatibility gating exceptions."""

from __future__ import annotations

from restgate.exceptions.base import RestgateError


class CompatibilityError(RestgateError):
    """Generated artifacts break the configured compatibility level.

    ``summary`` holds every violating pair's explanation followed by guidance
    on how to relax the level.
    """

    def __init__(self, summary: str, *, level: str) -> None:
        super().__init__(summary)
        self.summary = summary
        self.level = level
