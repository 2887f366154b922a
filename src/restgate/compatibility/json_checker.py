"""Structural diff of JSON artifacts.

Additions (new object keys, new list entries) are compatible. Removals and
changed values are incompatible, except under keys that only carry
documentation. Lists whose entries are all objects with a ``name`` are matched
by name so that reordering is not reported as a change.
"""

from __future__ import annotations

from pathlib import Path

from restgate.compatibility.base import CompatibilityChecker
from restgate.constants.compatibility import DOC_ONLY_KEYS, INFO_COMPATIBLE, INFO_INCOMPATIBLE, ROOT_JSON_PATH
from restgate.io import load_json_file
from restgate.model import CompatibilityInfo
from restgate.types import CompatLevel, InfoKind


class JsonStructureChecker(CompatibilityChecker):
    """Compare two JSON documents key by key."""

    def check(self, previous: Path, current: Path, level: CompatLevel) -> list[CompatibilityInfo]:
        artifact = current.name
        if not previous.is_file():
            return []

        try:
            previous_doc = load_json_file(previous)
        except (OSError, ValueError) as exc:
            return [_info(artifact, INFO_INCOMPATIBLE, ROOT_JSON_PATH, f"cannot read published artifact: {exc}")]
        try:
            current_doc = load_json_file(current)
        except (OSError, ValueError) as exc:
            return [_info(artifact, INFO_INCOMPATIBLE, ROOT_JSON_PATH, f"cannot read generated artifact: {exc}")]

        infos: list[CompatibilityInfo] = []
        _diff(artifact, previous_doc, current_doc, ROOT_JSON_PATH, infos, doc_only=False)
        return infos


def _diff(
    artifact: str,
    previous: object,
    current: object,
    location: str,
    infos: list[CompatibilityInfo],
    *,
    doc_only: bool,
) -> None:
    if isinstance(previous, dict) and isinstance(current, dict):
        for key in sorted(set(previous) | set(current)):
            child = f"{location}.{key}"
            child_doc_only = doc_only or key in DOC_ONLY_KEYS
            if key not in current:
                kind = INFO_COMPATIBLE if child_doc_only else INFO_INCOMPATIBLE
                infos.append(_info(artifact, kind, child, "removed"))
            elif key not in previous:
                infos.append(_info(artifact, INFO_COMPATIBLE, child, "added"))
            else:
                _diff(artifact, previous[key], current[key], child, infos, doc_only=child_doc_only)
        return

    if isinstance(previous, list) and isinstance(current, list):
        if _is_named_list(previous) and _is_named_list(current):
            _diff_named(artifact, previous, current, location, infos, doc_only=doc_only)
        else:
            _diff_positional(artifact, previous, current, location, infos, doc_only=doc_only)
        return

    if type(previous) is not type(current) or previous != current:
        kind = INFO_COMPATIBLE if doc_only else INFO_INCOMPATIBLE
        infos.append(_info(artifact, kind, location, f"changed from {previous!r} to {current!r}"))


def _diff_named(
    artifact: str,
    previous: list[dict],
    current: list[dict],
    location: str,
    infos: list[CompatibilityInfo],
    *,
    doc_only: bool,
) -> None:
    previous_by_name = {item["name"]: item for item in previous}
    current_by_name = {item["name"]: item for item in current}
    for name in sorted(set(previous_by_name) | set(current_by_name)):
        child = f"{location}[{name}]"
        if name not in current_by_name:
            infos.append(_info(artifact, INFO_COMPATIBLE if doc_only else INFO_INCOMPATIBLE, child, "removed"))
        elif name not in previous_by_name:
            infos.append(_info(artifact, INFO_COMPATIBLE, child, "added"))
        else:
            _diff(artifact, previous_by_name[name], current_by_name[name], child, infos, doc_only=doc_only)


def _diff_positional(
    artifact: str,
    previous: list,
    current: list,
    location: str,
    infos: list[CompatibilityInfo],
    *,
    doc_only: bool,
) -> None:
    for index, (before, after) in enumerate(zip(previous, current)):
        _diff(artifact, before, after, f"{location}[{index}]", infos, doc_only=doc_only)
    for index in range(len(current), len(previous)):
        kind = INFO_COMPATIBLE if doc_only else INFO_INCOMPATIBLE
        infos.append(_info(artifact, kind, f"{location}[{index}]", "removed"))
    for index in range(len(previous), len(current)):
        infos.append(_info(artifact, INFO_COMPATIBLE, f"{location}[{index}]", "added"))


def _is_named_list(items: list) -> bool:
    names = [item.get("name") for item in items if isinstance(item, dict)]
    return (
        len(names) == len(items)
        and all(isinstance(name, str) for name in names)
        and len(set(names)) == len(names)
    )


def _info(artifact: str, kind: InfoKind, location: str, message: str) -> CompatibilityInfo:
    return CompatibilityInfo(artifact=artifact, kind=kind, location=location, message=message)
