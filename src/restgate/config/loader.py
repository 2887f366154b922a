"""Config loading and normalization for Restgate pipelines."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml

from restgate.compatibility.levels import parse_compat_level
from restgate.config.model import RestgateConfig
from restgate.config.validator import validate_config_payload
from restgate.constants.compatibility import DEFAULT_COMPAT_LEVEL
from restgate.constants.config import (
    CONFIG_FILENAME,
    DEFAULT_CACHE_DIR,
    DEFAULT_DESCRIPTOR_DIR,
    DEFAULT_IDL_GENERATED_DIR,
    DEFAULT_IDL_PUBLISHED_DIR,
    DEFAULT_MODEL_DIR,
    DEFAULT_SNAPSHOT_GENERATED_DIR,
    DEFAULT_SNAPSHOT_PUBLISHED_DIR,
)
from restgate.exceptions import ConfigError
from restgate.exceptions.validation import format_errors

_DIRECTORY_DEFAULTS: dict[str, str] = {
    "descriptor_dir": DEFAULT_DESCRIPTOR_DIR,
    "model_dir": DEFAULT_MODEL_DIR,
    "idl_generated_dir": DEFAULT_IDL_GENERATED_DIR,
    "snapshot_generated_dir": DEFAULT_SNAPSHOT_GENERATED_DIR,
    "idl_published_dir": DEFAULT_IDL_PUBLISHED_DIR,
    "snapshot_published_dir": DEFAULT_SNAPSHOT_PUBLISHED_DIR,
    "cache_dir": DEFAULT_CACHE_DIR,
}


def load_config(root: Path, config_path: Path | None = None) -> RestgateConfig:
    """Load config from ``restgate.yaml`` under ``root`` or an explicit path.

    Relative paths in the file resolve against the file's directory; without a
    file every default resolves against ``root``.
    """
    root = root.resolve()
    path = config_path.resolve() if config_path else (root / CONFIG_FILENAME)
    if not path.is_file():
        if config_path is not None:
            raise ConfigError(f"Config file not found: {path}")
        return _build_config({}, base_dir=root)

    try:
        raw = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as exc:
        raise ConfigError(f"Invalid YAML config file at {path}: {exc}") from exc

    errors = validate_config_payload(raw, str(path))
    if errors:
        raise ConfigError(format_errors(errors))
    return _build_config(raw or {}, base_dir=path.parent)


def _build_config(raw: dict[str, Any], *, base_dir: Path) -> RestgateConfig:
    directories = {
        key: _resolve(base_dir, raw.get(key) or default) for key, default in _DIRECTORY_DEFAULTS.items()
    }
    return RestgateConfig(
        api_name=raw.get("api_name") or "",
        compat_mode=parse_compat_level(raw.get("compat_mode") or DEFAULT_COMPAT_LEVEL),
        resource_packages=tuple(raw.get("resource_packages") or ()),
        resource_source_paths=tuple(str(_resolve(base_dir, p)) for p in raw.get("resource_source_paths") or ()),
        resource_products=tuple(_resolve(base_dir, p) for p in raw.get("resource_products") or ()),
        classpath=tuple(str(_resolve(base_dir, p)) for p in raw.get("classpath") or ()),
        generators={kind: tuple(argv) for kind, argv in (raw.get("generators") or {}).items()},
        **directories,
    )


def _resolve(base_dir: Path, value: str) -> Path:
    path = Path(value).expanduser()
    return (path if path.is_absolute() else base_dir / path).resolve()
