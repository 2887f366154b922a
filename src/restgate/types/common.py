"""Cross-module type aliases."""

from __future__ import annotations

from typing import Literal, TypeAlias

CompatLevel: TypeAlias = Literal["equivalent", "backwards", "ignore", "off"]
Verdict: TypeAlias = Literal["equivalent", "compatible", "incompatible"]
InfoKind: TypeAlias = Literal["compatible", "incompatible"]
