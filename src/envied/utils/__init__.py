"""Utility functions for envied."""

from envied.utils.logging import configure_logging, get_logger, get_logger_with_context
from envied.utils.errors import (
    EnviedError,
    EnvFileNotFoundError,
    GenerationError,
    InconsistentEnvironmentsError,
    MalformedConfigError,
    MissingVariableError,
)
from envied.utils.config import (
    EnviedConfig,
    EnvironmentConfig,
    find_config_file,
    load_config,
    parse_config,
)

__all__ = [
    # Logging
    "configure_logging",
    "get_logger",
    "get_logger_with_context",
    # Errors
    "EnviedError",
    "EnvFileNotFoundError",
    "GenerationError",
    "InconsistentEnvironmentsError",
    "MalformedConfigError",
    "MissingVariableError",
    # Config
    "EnviedConfig",
    "EnvironmentConfig",
    "find_config_file",
    "load_config",
    "parse_config",
]
