"""Configuration defaults, filenames and validation codes."""

from __future__ import annotations

CONFIG_FILENAME: str = "restgate.yaml"

DEFAULT_DESCRIPTOR_DIR: str = "src/main/pegasus"
DEFAULT_MODEL_DIR: str = "src/main/codegen"
DEFAULT_IDL_GENERATED_DIR: str = "build/restspec_json"
DEFAULT_SNAPSHOT_GENERATED_DIR: str = "build/snapshot_json"
DEFAULT_IDL_PUBLISHED_DIR: str = "api/src/main/idl"
DEFAULT_SNAPSHOT_PUBLISHED_DIR: str = "api/src/main/snapshot"
DEFAULT_CACHE_DIR: str = "build/.restgate-cache"

STRING_KEYS: frozenset[str] = frozenset(
    {
        "api_name",
        "compat_mode",
        "descriptor_dir",
        "model_dir",
        "idl_generated_dir",
        "snapshot_generated_dir",
        "idl_published_dir",
        "snapshot_published_dir",
        "cache_dir",
    }
)
LIST_OF_STRINGS_KEYS: frozenset[str] = frozenset(
    {"resource_packages", "resource_source_paths", "resource_products", "classpath"}
)
ALLOWED_CONFIG_KEYS: frozenset[str] = STRING_KEYS | LIST_OF_STRINGS_KEYS | {"generators"}

CFG001: str = "CFG001"  # config file not found
CFG002: str = "CFG002"  # invalid YAML
CFG003: str = "CFG003"  # top level is not a mapping
CFG004: str = "CFG004"  # unknown key
CFG005: str = "CFG005"  # wrong value type
CFG006: str = "CFG006"  # unknown compatibility mode
CFG007: str = "CFG007"  # malformed generator command
