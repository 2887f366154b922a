"""Configuration loading and validation."""

from .loader import load_config
from .model import RestgateConfig
from .validator import validate_config_file, validate_config_payload

__all__ = ["RestgateConfig", "load_config", "validate_config_file", "validate_config_payload"]
