"""Configuration management module for the faculty records pipeline."""

from .environment import EnvironmentConfig, load_environment_config
from .exceptions import ConfigurationError
from .loader import load_config, validate_config_file
from .models import (
    DEFAULT_RECORD_PATTERN,
    AppConfig,
    DirectoryConfig,
    ExtractionConfig,
    LogFormat,
    LoggingConfig,
    LogLevel,
    YearConfig,
)

__all__ = [
    # Main loader functions
    "load_config",
    "validate_config_file",
    "load_environment_config",
    # Configuration models
    "AppConfig",
    "YearConfig",
    "DirectoryConfig",
    "ExtractionConfig",
    "LoggingConfig",
    "EnvironmentConfig",
    "DEFAULT_RECORD_PATTERN",
    # Enums
    "LogLevel",
    "LogFormat",
    # Exceptions
    "ConfigurationError",
]
