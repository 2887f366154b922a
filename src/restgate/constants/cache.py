"""Constants used by the change-detection cache and file hashing."""

from __future__ import annotations

CACHE_VERSION: int = 2
CACHE_SLOT_SUFFIX: str = ".json"
CACHE_TEMP_PREFIX: str = ".slot-"
CACHE_TEMP_SUFFIX: str = ".tmp"
FILE_HASH_CHUNK_SIZE: int = 65536

DATA_MODEL_CACHE_SLOT: str = "pdsc.sources"
API_CACHE_SLOT: str = "idlgen.classfiles"

# Marker for inputs whose content could not be read; never equal to a real digest.
UNREADABLE_SHA256: str = ""
