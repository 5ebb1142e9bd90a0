"""Utility helpers: configuration loading and validation."""

from .config_validator import (
    BackendConfigValidator,
    ConfigurationError,
    load_config_file,
    normalize_config,
    validate_and_load_config,
)

__all__ = [
    "BackendConfigValidator",
    "ConfigurationError",
    "load_config_file",
    "normalize_config",
    "validate_and_load_config",
]
