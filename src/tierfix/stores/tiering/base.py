"""Base classes and interfaces for blob tier transitions.

This module defines the data structures, exceptions and capability
interfaces shared by the providers, fixers and the tiering pipeline.
"""

from __future__ import annotations

import json
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Callable, Iterator

LogSink = Callable[[str], None]

DEFAULT_MAX_OBJECTS = 5000


# =============================================================================
# Exceptions
# =============================================================================


class TieringError(Exception):
    """Base exception for tiering-related errors."""

    pass


class ConfigurationError(TieringError):
    """Raised when run settings are missing or invalid."""

    def __init__(self, errors: list[str]) -> None:
        self.errors = errors
        super().__init__(f"Configuration validation failed: {', '.join(errors)}")


class CapExceededError(TieringError):
    """Raised when a provider yields more objects than the configured cap."""

    def __init__(self, cap: int) -> None:
        self.cap = cap
        super().__init__(f"Number of provided blobs exceeds the limit {cap}")


class ProviderError(TieringError):
    """Raised when listing the container fails."""

    def __init__(self, container: str, message: str) -> None:
        self.container = container
        super().__init__(f"Failed to list container {container}: {message}")


class TransitionError(TieringError):
    """Raised when setting the tier of a single object fails."""

    def __init__(self, name: str, tier: "TierType", message: str) -> None:
        self.name = name
        self.tier = tier
        super().__init__(f"Failed to set {name} to {tier.label} tier: {message}")


# =============================================================================
# Enums
# =============================================================================


class TierType(Enum):
    """Access tier of a stored blob."""

    HOT = "hot"
    COOL = "cool"
    COLD = "cold"
    ARCHIVE = "archive"
    UNKNOWN = "unknown"  # Backend did not report a tier

    @classmethod
    def from_string(cls, value: str | None) -> "TierType":
        """Parse a backend tier label ("Hot", "Archive", ...).

        Unrecognized or missing values map to UNKNOWN.
        """
        if not value:
            return cls.UNKNOWN
        try:
            return cls(str(getattr(value, "value", value)).strip().lower())
        except ValueError:
            return cls.UNKNOWN

    @property
    def label(self) -> str:
        """Tier name as the storage service spells it."""
        return self.value.capitalize()

    @property
    def is_known(self) -> bool:
        return self is not TierType.UNKNOWN


class ListingMode(Enum):
    """Which listing strategy to use when no blob path is given."""

    WARM = "warm"
    ALL = "all"


# =============================================================================
# Data Classes
# =============================================================================


@dataclass(frozen=True)
class StorageObjectRef:
    """Reference to a single blob in a container.

    Attributes:
        container: Container holding the blob.
        name: Blob name (path inside the container).
        uri: Full URI of the blob.
        snapshot: Snapshot marker, if this reference is a snapshot.
        version_id: Version marker, if versioning is enabled.
        tier: Tier reported at listing time.
        size_bytes: Blob size reported at listing time.
        last_modified: Last modification time reported at listing time.
    """

    container: str
    name: str
    uri: str = ""
    snapshot: str | None = None
    version_id: str | None = None
    tier: TierType = TierType.UNKNOWN
    size_bytes: int = 0
    last_modified: datetime | None = None

    @property
    def location(self) -> str:
        """Container-relative location, e.g. ``data/dir/file.bin``."""
        return f"{self.container}/{self.name}"

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "container": self.container,
            "name": self.name,
            "uri": self.uri,
            "snapshot": self.snapshot,
            "version_id": self.version_id,
            "tier": self.tier.value,
            "size_bytes": self.size_bytes,
            "last_modified": (
                self.last_modified.isoformat() if self.last_modified else None
            ),
        }


@dataclass(frozen=True)
class TieringConfig:
    """Settings for one tiering run.

    Attributes:
        container: Name of the container to scan.
        connection_string: Storage connection string (never rendered).
        target_tier: Tier to move eligible blobs to.
        dry_run: Log what would happen without changing anything.
        max_objects: Abort when more candidates than this are listed.
        blob_path: Fix only this blob instead of listing the container.
        listing: Listing strategy used when blob_path is not set.
        max_workers: Concurrent tier-set calls after the listing completes.
        fail_fast: Stop at the first failed transition.
        debug: Pause before running so a debugger can attach.
    """

    container: str = ""
    connection_string: str | None = field(default=None, repr=False)
    target_tier: TierType = TierType.ARCHIVE
    dry_run: bool = False
    max_objects: int = DEFAULT_MAX_OBJECTS
    blob_path: str | None = None
    listing: ListingMode = ListingMode.WARM
    max_workers: int = 1
    fail_fast: bool = True
    debug: bool = False

    def __post_init__(self) -> None:
        """Validate the configuration."""
        errors = self.validate()
        if errors:
            raise ConfigurationError(errors)

    def validate(self) -> list[str]:
        """Return a list of validation problems (empty when valid)."""
        errors: list[str] = []
        if not self.container:
            errors.append("container is required")
        if self.max_objects < 1:
            errors.append("max_objects must be >= 1")
        if self.max_workers < 1:
            errors.append("max_workers must be >= 1")
        if not self.target_tier.is_known:
            errors.append("target_tier must be a concrete tier")
        if self.blob_path is not None and not self.blob_path.strip("/"):
            errors.append("blob_path must not be empty")
        return errors

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary with the connection string redacted."""
        return {
            "container": self.container,
            "connection_string": "***" if self.connection_string else None,
            "target_tier": self.target_tier.value,
            "dry_run": self.dry_run,
            "max_objects": self.max_objects,
            "blob_path": self.blob_path,
            "listing": self.listing.value,
            "max_workers": self.max_workers,
            "fail_fast": self.fail_fast,
            "debug": self.debug,
        }

    def to_json(self) -> str:
        return json.dumps(self.to_dict())


@dataclass
class TieringResult:
    """Result of a tiering run.

    Attributes:
        start_time: When the run started.
        end_time: When the run finished.
        items_scanned: Objects returned by the provider.
        items_transitioned: Objects handed to the fixer successfully.
        items_skipped: Objects already at the target tier.
        transitioned: Names of transitioned objects, in order.
        errors: Errors collected when not failing fast.
        dry_run: Whether this was a dry run.
    """

    start_time: datetime
    end_time: datetime | None = None
    items_scanned: int = 0
    items_transitioned: int = 0
    items_skipped: int = 0
    transitioned: list[str] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)
    dry_run: bool = False

    @property
    def first_error(self) -> str | None:
        return self.errors[0] if self.errors else None

    @property
    def success(self) -> bool:
        return not self.errors

    @property
    def duration_seconds(self) -> float:
        """Get run duration in seconds."""
        if self.end_time is None:
            return 0.0
        return (self.end_time - self.start_time).total_seconds()

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "start_time": self.start_time.isoformat(),
            "end_time": self.end_time.isoformat() if self.end_time else None,
            "duration_seconds": self.duration_seconds,
            "items_scanned": self.items_scanned,
            "items_transitioned": self.items_transitioned,
            "items_skipped": self.items_skipped,
            "transitioned": self.transitioned,
            "errors": self.errors,
            "first_error": self.first_error,
            "dry_run": self.dry_run,
        }


# =============================================================================
# Abstract Base Classes
# =============================================================================


class BlobProvider(ABC):
    """Produces the candidate blobs for a run.

    Each call to ``provide`` performs a fresh listing; the returned
    iterator is consumed once.
    """

    @abstractmethod
    def provide(self) -> Iterator[StorageObjectRef]:
        """Yield candidate objects.

        Raises:
            ProviderError: If the listing call fails.
        """
        pass


class Fixer(ABC):
    """Applies (or simulates) the tier change for one blob."""

    @abstractmethod
    def fix(self, obj: StorageObjectRef) -> None:
        """Fix a single object.

        Raises:
            TransitionError: If the tier-set call fails.
        """
        pass
