"""Config data model for Restgate pipelines."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from restgate.constants.compatibility import DEFAULT_COMPAT_LEVEL
from restgate.types import CompatLevel


@dataclass(frozen=True)
class RestgateConfig:
    """Resolved pipeline config; every directory is absolute."""

    descriptor_dir: Path
    model_dir: Path
    idl_generated_dir: Path
    snapshot_generated_dir: Path
    idl_published_dir: Path
    snapshot_published_dir: Path
    cache_dir: Path
    api_name: str = ""
    compat_mode: CompatLevel = DEFAULT_COMPAT_LEVEL
    resource_packages: tuple[str, ...] = ()
    resource_source_paths: tuple[str, ...] = ()
    resource_products: tuple[Path, ...] = ()
    classpath: tuple[str, ...] = ()
    generators: dict[str, tuple[str, ...]] = field(default_factory=dict)

    def generator_command(self, kind: str) -> tuple[str, ...] | None:
        """Configured argv for ``kind``, if any."""
        return self.generators.get(kind)
