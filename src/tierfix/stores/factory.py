"""Factory functions for creating storage clients.

This module provides a registry-based factory for storage clients. New
backends can be registered at runtime.
"""

from __future__ import annotations

from typing import Any, Callable

from tierfix.stores.backends._protocols import StorageClient
from tierfix.stores.tiering.base import ConfigurationError

# Type for client constructor functions
ClientConstructor = Callable[..., StorageClient]

# Registry of client constructors
_client_registry: dict[str, ClientConstructor] = {}


def register_client(name: str) -> Callable[[ClientConstructor], ClientConstructor]:
    """Decorator to register a storage client backend.

    Example:
        >>> @register_client("my_backend")
        ... def create_my_client(**kwargs):
        ...     return MyClient(**kwargs)
    """

    def decorator(constructor: ClientConstructor) -> ClientConstructor:
        _client_registry[name] = constructor
        return constructor

    return decorator


def get_storage_client(backend: str, **kwargs: Any) -> StorageClient:
    """Create a storage client for the specified backend.

    Args:
        backend: Name of the backend. Options:
            - "azure": Azure Blob Storage
            - "memory": In-memory storage (for testing)
        **kwargs: Backend-specific options. For "azure" these are the
            fields of ``AzureBlobConfig``.

    Returns:
        Configured storage client.

    Raises:
        ConfigurationError: If the backend is unknown or misconfigured.
    """
    backend = backend.lower().strip()

    if backend in _client_registry:
        return _client_registry[backend](**kwargs)

    if backend in ("azure", "azure_blob", "azureblob"):
        from tierfix.stores.backends.azure_blob import (
            AzureBlobConfig,
            AzureBlobStorageClient,
        )

        return AzureBlobStorageClient.from_config(AzureBlobConfig(**kwargs))

    if backend == "memory":
        from tierfix.stores.backends.memory import MemoryStorageClient

        return MemoryStorageClient(**kwargs)

    available = sorted(set(_client_registry) | {"azure", "memory"})
    raise ConfigurationError(
        [f"Unknown storage backend: {backend}. Available backends: {', '.join(available)}"]
    )
