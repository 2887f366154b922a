"""Compatibility evaluation between generated and published artifacts."""

from .base import CompatibilityChecker
from .evaluator import check_compatibility, directions_message
from .info_map import CompatibilityInfoMap
from .json_checker import JsonStructureChecker
from .levels import is_compatible, parse_compat_level

__all__ = [
    "CompatibilityChecker",
    "CompatibilityInfoMap",
    "JsonStructureChecker",
    "check_compatibility",
    "directions_message",
    "is_compatible",
    "parse_compat_level",
]
