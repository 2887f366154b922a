"""Shared type aliases for Restgate."""

from .cache import CacheSlotPayload, SlotFileEntry
from .common import CompatLevel, InfoKind, Verdict

__all__ = [
    "CacheSlotPayload",
    "CompatLevel",
    "InfoKind",
    "SlotFileEntry",
    "Verdict",
]
