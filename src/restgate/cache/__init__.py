"""Change detection over named cache slots."""

from .detector import ChangeDetectionCache, fingerprint_files
from .slots import load_slot, new_slot, save_slot

__all__ = ["ChangeDetectionCache", "fingerprint_files", "load_slot", "new_slot", "save_slot"]
