"""tierfix - move blobs of a storage container to a colder access tier."""

from tierfix.stores import StorageClient, get_storage_client
from tierfix.stores.tiering import (
    CapExceededError,
    ConfigurationError,
    ListingMode,
    ProviderError,
    StorageObjectRef,
    TieringConfig,
    TieringError,
    TieringPipeline,
    TieringResult,
    TierType,
    TransitionError,
    run_tiering,
)

__version__ = "0.1.0"

__all__ = [
    "StorageClient",
    "get_storage_client",
    "CapExceededError",
    "ConfigurationError",
    "ListingMode",
    "ProviderError",
    "StorageObjectRef",
    "TieringConfig",
    "TieringError",
    "TieringPipeline",
    "TieringResult",
    "TierType",
    "TransitionError",
    "run_tiering",
]
