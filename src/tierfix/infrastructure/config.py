"""Configuration loading for tierfix.

Run settings come from two sources: ``TIERFIX_*`` environment variables and
explicit values (usually command-line options). Explicit values win. The
merged values are turned into an immutable ``TieringConfig``.

Example:
    TIERFIX_CONTAINER=backups
    TIERFIX_MAX_OBJECTS=10000
    TIERFIX_DRY_RUN=true

    >>> config = load_config(blob_path="2024/01/dump.tar")
    >>> config.container, config.max_objects, config.dry_run
    ('backups', 10000, True)
"""

from __future__ import annotations

import os
from abc import ABC, abstractmethod
from dataclasses import fields
from typing import Any

from tierfix.stores.tiering.base import (
    ConfigurationError,
    ListingMode,
    TieringConfig,
    TierType,
)


class ConfigSource(ABC):
    """Abstract base class for configuration sources."""

    def __init__(self, priority: int = 0) -> None:
        """Initialize config source.

        Args:
            priority: Source priority (higher = processed later, overrides earlier).
        """
        self._priority = priority

    @property
    def priority(self) -> int:
        """Get source priority."""
        return self._priority

    @abstractmethod
    def load(self) -> dict[str, Any]:
        """Load configuration from source."""
        pass


class EnvConfigSource(ConfigSource):
    """Environment variable configuration source.

    Reads flat configuration keys from environment variables with a prefix.
    ``TIERFIX_MAX_OBJECTS=100`` becomes ``{"max_objects": 100}``.
    """

    def __init__(
        self,
        prefix: str = "TIERFIX",
        priority: int = 100,
        environ: dict[str, str] | None = None,
    ) -> None:
        super().__init__(priority)
        self._prefix = f"{prefix}_"
        self._environ = environ

    def load(self) -> dict[str, Any]:
        environ = self._environ if self._environ is not None else os.environ
        result: dict[str, Any] = {}
        for key, value in environ.items():
            if key.startswith(self._prefix):
                result[key[len(self._prefix) :].lower()] = self._parse_value(value)
        return result

    def _parse_value(self, value: str) -> Any:
        """Parse string value to appropriate type."""
        if value.lower() in ("true", "yes", "on"):
            return True
        if value.lower() in ("false", "no", "off"):
            return False

        if value.lower() in ("null", "none", ""):
            return None

        try:
            return int(value)
        except ValueError:
            pass

        return value


class DictConfigSource(ConfigSource):
    """Explicit values, e.g. parsed command-line options."""

    def __init__(self, values: dict[str, Any], priority: int = 200) -> None:
        super().__init__(priority)
        self._values = values

    def load(self) -> dict[str, Any]:
        return {k: v for k, v in self._values.items() if v is not None}


def _coerce(values: dict[str, Any]) -> dict[str, Any]:
    """Convert loose source values into TieringConfig field types."""
    known = {f.name for f in fields(TieringConfig)}
    errors: list[str] = []
    result: dict[str, Any] = {}

    for key, value in values.items():
        if key not in known:
            continue
        try:
            if key == "target_tier" and not isinstance(value, TierType):
                value = TierType(str(value).lower())
            elif key == "listing" and not isinstance(value, ListingMode):
                value = ListingMode(str(value).lower())
            elif key in ("max_objects", "max_workers"):
                value = int(value)
            elif key in ("dry_run", "fail_fast", "debug") and not isinstance(value, bool):
                value = str(value).lower() in ("true", "yes", "on", "1")
            elif key in ("container", "connection_string", "blob_path"):
                value = str(value)
        except ValueError:
            errors.append(f"invalid value for {key}: {value!r}")
            continue
        result[key] = value

    if errors:
        raise ConfigurationError(errors)
    return result


def load_config(
    sources: list[ConfigSource] | None = None,
    **overrides: Any,
) -> TieringConfig:
    """Build a TieringConfig from sources and explicit overrides.

    Args:
        sources: Configuration sources (environment only when None).
        **overrides: Explicit values; ``None`` means "not given".

    Returns:
        Validated configuration.

    Raises:
        ConfigurationError: If a value cannot be parsed or validation fails.
    """
    all_sources = list(sources) if sources is not None else [EnvConfigSource()]
    all_sources.append(DictConfigSource(overrides))

    merged: dict[str, Any] = {}
    for source in sorted(all_sources, key=lambda s: s.priority):
        merged.update(source.load())

    return TieringConfig(**_coerce(merged))
