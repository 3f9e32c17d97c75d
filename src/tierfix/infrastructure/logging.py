"""Logging setup for tierfix.

Modules log through the standard library (``logging.getLogger(__name__)``).
This module installs one handler on the ``tierfix`` logger with either a
console or a JSON-lines format, and adapts a logger into the single-argument
sink the tiering components receive.

Usage:
    >>> from tierfix.infrastructure.logging import (
    ...     LogConfig, configure_logging, get_logger, logger_sink,
    ... )
    >>>
    >>> configure_logging(LogConfig(level="debug", format="json"))
    >>> log = logger_sink(get_logger("tierfix.run"))
    >>> log("Setting a.bin to Archive tier")
"""

from __future__ import annotations

import json
import logging
import os
import sys
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import IntEnum
from typing import Any, Callable, TextIO

ROOT_LOGGER = "tierfix"

_HANDLER_NAME = "tierfix-handler"


class LogLevel(IntEnum):
    """Log severity levels."""

    DEBUG = logging.DEBUG
    INFO = logging.INFO
    WARNING = logging.WARNING
    ERROR = logging.ERROR
    CRITICAL = logging.CRITICAL

    @classmethod
    def from_string(cls, level: str) -> "LogLevel":
        """Convert string to LogLevel."""
        mapping = {
            "debug": cls.DEBUG,
            "info": cls.INFO,
            "warning": cls.WARNING,
            "warn": cls.WARNING,
            "error": cls.ERROR,
            "critical": cls.CRITICAL,
            "fatal": cls.CRITICAL,
        }
        return mapping.get(level.lower(), cls.INFO)


@dataclass
class LogConfig:
    """Logging configuration.

    Attributes:
        level: Minimum level emitted.
        format: ``console`` for human readable lines, ``json`` for one JSON
            object per line.
        stream: Output stream (stderr when None).
    """

    level: str | LogLevel = LogLevel.INFO
    format: str = "console"
    stream: TextIO | None = None

    @property
    def resolved_level(self) -> LogLevel:
        if isinstance(self.level, LogLevel):
            return self.level
        return LogLevel.from_string(self.level)

    @classmethod
    def from_environment(cls) -> "LogConfig":
        """Load configuration from environment variables."""
        return cls(
            level=os.getenv("TIERFIX_LOG_LEVEL", "INFO"),
            format=os.getenv("TIERFIX_LOG_FORMAT", "console"),
        )


class JsonFormatter(logging.Formatter):
    """Format records as single-line JSON objects."""

    def format(self, record: logging.LogRecord) -> str:
        data: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info:
            data["exception"] = self.formatException(record.exc_info)
        return json.dumps(data, default=str)


class ConsoleFormatter(logging.Formatter):
    """Format records as ``timestamp LEVEL [logger] message``."""

    def __init__(self) -> None:
        super().__init__(
            fmt="%(asctime)s %(levelname)-8s [%(name)s] %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )


def _create_formatter(format: str) -> logging.Formatter:
    if format == "json":
        return JsonFormatter()
    if format == "console":
        return ConsoleFormatter()
    raise ValueError(f"Unknown log format: {format}")


def configure_logging(config: LogConfig | None = None) -> logging.Logger:
    """Configure the ``tierfix`` logger.

    Replaces any handler installed by a previous call, so it is safe to
    call more than once.

    Args:
        config: Logging configuration (environment defaults when None).

    Returns:
        The configured root ``tierfix`` logger.
    """
    config = config or LogConfig.from_environment()
    root = logging.getLogger(ROOT_LOGGER)

    for handler in list(root.handlers):
        if handler.get_name() == _HANDLER_NAME:
            root.removeHandler(handler)
            handler.close()

    handler = logging.StreamHandler(config.stream or sys.stderr)
    handler.set_name(_HANDLER_NAME)
    handler.setFormatter(_create_formatter(config.format))
    root.addHandler(handler)
    root.setLevel(config.resolved_level)
    root.propagate = False
    return root


def get_logger(name: str) -> logging.Logger:
    """Get a logger below the ``tierfix`` namespace."""
    if name != ROOT_LOGGER and not name.startswith(f"{ROOT_LOGGER}."):
        name = f"{ROOT_LOGGER}.{name}"
    return logging.getLogger(name)


def reset_logging() -> None:
    """Remove the installed handler and restore defaults."""
    root = logging.getLogger(ROOT_LOGGER)
    for handler in list(root.handlers):
        if handler.get_name() == _HANDLER_NAME:
            root.removeHandler(handler)
            handler.close()
    root.setLevel(logging.NOTSET)
    root.propagate = True


def logger_sink(logger: logging.Logger, level: int = logging.INFO) -> Callable[[str], None]:
    """Adapt a logger into a ``write line`` sink."""

    def sink(line: str) -> None:
        logger.log(level, line)

    return sink
