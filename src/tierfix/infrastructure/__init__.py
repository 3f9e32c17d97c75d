"""Configuration and logging infrastructure for tierfix."""

from tierfix.infrastructure.config import (
    ConfigSource,
    DictConfigSource,
    EnvConfigSource,
    load_config,
)
from tierfix.infrastructure.logging import (
    LogConfig,
    LogLevel,
    configure_logging,
    get_logger,
    logger_sink,
    reset_logging,
)

__all__ = [
    # Config
    "ConfigSource",
    "DictConfigSource",
    "EnvConfigSource",
    "load_config",
    # Logging
    "LogConfig",
    "LogLevel",
    "configure_logging",
    "get_logger",
    "logger_sink",
    "reset_logging",
]
