"""Collect-all validation of ``restgate.yaml``."""

from __future__ import annotations

import difflib
from pathlib import Path
from typing import Any

import yaml

from restgate.constants.artifacts import VALID_GENERATOR_KINDS
from restgate.constants.compatibility import VALID_COMPAT_LEVELS
from restgate.constants.config import (
    ALLOWED_CONFIG_KEYS,
    CFG001,
    CFG002,
    CFG003,
    CFG004,
    CFG005,
    CFG006,
    CFG007,
    CONFIG_FILENAME,
    LIST_OF_STRINGS_KEYS,
    STRING_KEYS,
)
from restgate.constants.generation import BRACED_IDENTIFIER_PATTERN, COMMAND_PLACEHOLDERS, PLACEHOLDER_TYPO_CUTOFF
from restgate.exceptions.validation import ValidationError


def validate_config_file(root: Path, config_path: Path | None = None) -> list[ValidationError]:
    """Validate a config file and return every problem found.

    A missing default ``restgate.yaml`` is not an error; a missing explicit
    ``config_path`` is. Never raises.
    """
    path = config_path.resolve() if config_path else (root.resolve() / CONFIG_FILENAME)
    path_str = str(path)

    if not path.is_file():
        if config_path is None:
            return []
        return [ValidationError(code=CFG001, path=path_str, field="", message=f"config file not found: {path}")]

    try:
        raw = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as exc:
        return [ValidationError(code=CFG002, path=path_str, field="", message=f"invalid YAML: {exc}")]
    return validate_config_payload(raw, path_str)


def validate_config_payload(raw: Any, path_str: str) -> list[ValidationError]:
    """Validate an already-parsed YAML document."""
    if raw is None:
        return []
    if not isinstance(raw, dict):
        return [ValidationError(code=CFG003, path=path_str, field="", message="config must be a YAML mapping")]

    errors: list[ValidationError] = []
    for key in sorted(str(key) for key in raw):
        if key in ALLOWED_CONFIG_KEYS:
            continue
        suggestion = difflib.get_close_matches(key, sorted(ALLOWED_CONFIG_KEYS), n=1)
        errors.append(
            ValidationError(
                code=CFG004,
                path=path_str,
                field=key,
                message="unknown key",
                hint=f"did you mean '{suggestion[0]}'?" if suggestion else "",
            )
        )

    for key in sorted(STRING_KEYS & set(raw)):
        if raw[key] is not None and not isinstance(raw[key], str):
            errors.append(ValidationError(code=CFG005, path=path_str, field=key, message="must be a string"))

    for key in sorted(LIST_OF_STRINGS_KEYS & set(raw)):
        if not _is_string_list(raw[key]):
            errors.append(
                ValidationError(code=CFG005, path=path_str, field=key, message="must be a list of strings")
            )

    compat_mode = raw.get("compat_mode")
    if isinstance(compat_mode, str) and compat_mode.strip().lower() not in VALID_COMPAT_LEVELS:
        errors.append(
            ValidationError(
                code=CFG006,
                path=path_str,
                field="compat_mode",
                message=f"unknown compatibility mode {compat_mode!r}",
                hint=f"use one of {', '.join(VALID_COMPAT_LEVELS)}",
            )
        )

    errors.extend(_validate_generators(raw.get("generators"), path_str))
    return errors


def _validate_generators(generators: Any, path_str: str) -> list[ValidationError]:
    if generators is None:
        return []
    if not isinstance(generators, dict):
        return [ValidationError(code=CFG005, path=path_str, field="generators", message="must be a mapping")]

    errors: list[ValidationError] = []
    for kind, argv in sorted(generators.items(), key=lambda item: str(item[0])):
        field = f"generators.{kind}"
        if kind not in VALID_GENERATOR_KINDS:
            errors.append(
                ValidationError(
                    code=CFG004,
                    path=path_str,
                    field=field,
                    message="unknown generator kind",
                    hint=f"use one of {', '.join(sorted(VALID_GENERATOR_KINDS))}",
                )
            )
            continue
        if not _is_string_list(argv) or not argv:
            errors.append(
                ValidationError(code=CFG007, path=path_str, field=field, message="must be a non-empty list of strings")
            )
            continue
        for name in _misspelled_placeholders(argv):
            suggestion = _closest_placeholder(name)
            errors.append(
                ValidationError(
                    code=CFG007,
                    path=path_str,
                    field=field,
                    message=f"unknown placeholder {{{name}}}",
                    hint=f"did you mean '{{{suggestion[0]}}}'?",
                )
            )
    return errors


def _is_string_list(value: Any) -> bool:
    return isinstance(value, list) and all(isinstance(item, str) for item in value)


def _misspelled_placeholders(argv: list[str]) -> list[str]:
    # Other braces are passed through literally, so only near-misses are reported.
    names = {
        match.group(1)
        for part in argv
        for match in BRACED_IDENTIFIER_PATTERN.finditer(part)
        if match.group(1) not in COMMAND_PLACEHOLDERS
    }
    return sorted(name for name in names if _closest_placeholder(name))


def _closest_placeholder(name: str) -> list[str]:
    return difflib.get_close_matches(name, sorted(COMMAND_PLACEHOLDERS), n=1, cutoff=PLACEHOLDER_TYPO_CUTOFF)
