"""Tier transitions for blobs in a storage container.

This module selects the blobs of a container that are eligible for a
colder tier and moves them there, behind a cap on the number of
candidates and with an optional dry-run mode.

Example:
    >>> from tierfix.stores import get_storage_client
    >>> from tierfix.stores.tiering import TieringConfig, TieringPipeline
    >>>
    >>> config = TieringConfig(container="backups", dry_run=True)
    >>> client = get_storage_client("azure", connection_string="...")
    >>> pipeline = TieringPipeline.from_config(config, client, log=print)
    >>> result = pipeline.run()
    [dry run] would fix 2024/01/dump.tar
"""

from tierfix.stores.tiering.base import (
    DEFAULT_MAX_OBJECTS,
    BlobProvider,
    CapExceededError,
    ConfigurationError,
    Fixer,
    ListingMode,
    LogSink,
    ProviderError,
    StorageObjectRef,
    TieringConfig,
    TieringError,
    TieringResult,
    TierType,
    TransitionError,
)
from tierfix.stores.tiering.fixers import DryRunFixer, TierFixer, create_fixer
from tierfix.stores.tiering.manager import TieringPipeline, run_tiering
from tierfix.stores.tiering.policies import is_already_at_target, is_eligible
from tierfix.stores.tiering.providers import (
    AllBlobProvider,
    SpecifiedBlobProvider,
    WarmBlobProvider,
    create_provider,
)

__all__ = [
    # Base
    "DEFAULT_MAX_OBJECTS",
    "BlobProvider",
    "Fixer",
    "ListingMode",
    "LogSink",
    "StorageObjectRef",
    "TieringConfig",
    "TieringResult",
    "TierType",
    # Exceptions
    "TieringError",
    "CapExceededError",
    "ConfigurationError",
    "ProviderError",
    "TransitionError",
    # Policies
    "is_already_at_target",
    "is_eligible",
    # Providers
    "AllBlobProvider",
    "SpecifiedBlobProvider",
    "WarmBlobProvider",
    "create_provider",
    # Fixers
    "DryRunFixer",
    "TierFixer",
    "create_fixer",
    # Pipeline
    "TieringPipeline",
    "run_tiering",
]
