"""Shared file I/O helpers."""

from .files import collect_files, file_sha256, remove_files
from .json_io import copy_file_atomic, load_json_file, write_json_atomic

__all__ = [
    "collect_files",
    "copy_file_atomic",
    "file_sha256",
    "load_json_file",
    "remove_files",
    "write_json_atomic",
]
