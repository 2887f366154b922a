"""Generator invocation, output reconciliation and artifact kinds."""

from .base import Generator
from .command import CommandGenerator
from .kinds import ArtifactKind, data_template_kind, idl_kind, snapshot_kind
from .reconcile import classify_generation_failure, invoke_generator, run_kind_generator

__all__ = [
    "ArtifactKind",
    "CommandGenerator",
    "Generator",
    "classify_generation_failure",
    "data_template_kind",
    "idl_kind",
    "invoke_generator",
    "run_kind_generator",
    "snapshot_kind",
]
