"""Protocol definitions for storage clients.

The ``StorageClient`` protocol is the capability set the tiering core
needs from a backend. The Azure protocols describe the minimal surface of
azure-storage-blob used by ``AzureBlobStorageClient``, so tests can pass
in-memory doubles without the SDK talking to the network.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Iterable, Protocol, runtime_checkable

if TYPE_CHECKING:
    from tierfix.stores.tiering.base import StorageObjectRef, TierType


# =============================================================================
# Storage Client Capability
# =============================================================================


@runtime_checkable
class StorageClient(Protocol):
    """Capabilities the tiering core uses against remote storage."""

    def list_objects(self, container: str) -> Iterable["StorageObjectRef"]:
        """List every object in a container, flat, with tier detail."""
        ...

    def object_ref(self, container: str, path: str) -> "StorageObjectRef":
        """Build a reference from container and path without a remote call."""
        ...

    def set_tier(self, obj: "StorageObjectRef", tier: "TierType") -> None:
        """Set the access tier of one object."""
        ...


# =============================================================================
# Azure Blob Storage Protocol (azure-storage-blob)
# =============================================================================


class AzureBlobPropertiesProtocol(Protocol):
    """Protocol for the BlobProperties items returned by list_blobs."""

    name: str
    blob_type: Any
    blob_tier: str | None
    snapshot: str | None
    version_id: str | None
    size: int
    last_modified: Any


@runtime_checkable
class AzureBlobClientProtocol(Protocol):
    """Protocol for Azure Blob Client."""

    url: str

    def set_standard_blob_tier(self, standard_blob_tier: Any, **kwargs: Any) -> None:
        """Set the access tier of the blob."""
        ...


@runtime_checkable
class AzureContainerClientProtocol(Protocol):
    """Protocol for Azure Container Client."""

    url: str

    def get_blob_client(
        self,
        blob: str,
        snapshot: str | None = None,
        **kwargs: Any,
    ) -> AzureBlobClientProtocol:
        """Get a blob client."""
        ...

    def list_blobs(
        self,
        name_starts_with: str | None = None,
        include: str | list[str] | None = None,
        **kwargs: Any,
    ) -> Iterable[AzureBlobPropertiesProtocol]:
        """List blobs in the container."""
        ...


@runtime_checkable
class AzureBlobServiceClientProtocol(Protocol):
    """Protocol for Azure Blob Service Client."""

    url: str

    def get_container_client(self, container: str) -> AzureContainerClientProtocol:
        """Get a container client."""
        ...
