"""Artifact kinds and the file globs that identify them on disk."""

from __future__ import annotations

KIND_DATA_TEMPLATE: str = "data_template"
KIND_IDL: str = "idl"
KIND_SNAPSHOT: str = "snapshot"

# API artifacts are generated in this order; the snapshot carries idl plus schemas.
API_KINDS: tuple[str, ...] = (KIND_SNAPSHOT, KIND_IDL)
VALID_GENERATOR_KINDS: frozenset[str] = frozenset({KIND_DATA_TEMPLATE, KIND_IDL, KIND_SNAPSHOT})

DESCRIPTOR_GLOB: str = "**/*.pdsc"
RESOURCE_CLASS_GLOB: str = "**/*.class"
DATA_TEMPLATE_GLOB: str = "**/*.java"
IDL_GLOB: str = "**/*.restspec.json"
SNAPSHOT_GLOB: str = "**/*.snapshot.json"

PUBLISH_TEMP_PREFIX: str = ".publish-"
PUBLISH_TEMP_SUFFIX: str = ".tmp"
