"""Structured validation issues reported by the config validator."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ValidationError:
    """One config problem with a stable code and the offending key."""

    code: str
    path: str
    field: str
    message: str
    hint: str = ""

    def format(self) -> str:
        """Render as ``[CODE] path field: message (hint)``."""
        subject = f"{self.path} {self.field}".rstrip()
        rendered = f"[{self.code}] {subject}: {self.message}"
        if self.hint:
            rendered = f"{rendered} ({self.hint})"
        return rendered


def format_errors(errors: list[ValidationError]) -> str:
    """Format validation errors one per line, ordered by code then field."""
    ordered = sorted(errors, key=lambda e: (e.code, e.path, e.field))
    return "\n".join(error.format() for error in ordered)
