"""Azure Blob Storage client backend.

This module adapts azure-storage-blob to the ``StorageClient`` capability
used by the tiering pipeline: flat listing with tier detail, syntactic
blob references, and setting a blob's standard tier.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Iterator

from azure.core.exceptions import AzureError
from azure.storage.blob import BlobServiceClient, BlobType

from tierfix.stores.tiering.base import (
    ConfigurationError,
    ProviderError,
    StorageObjectRef,
    TierType,
    TransitionError,
)

if TYPE_CHECKING:
    from tierfix.stores.backends._protocols import (
        AzureBlobPropertiesProtocol,
        AzureBlobServiceClientProtocol,
    )

logger = logging.getLogger(__name__)

# Listing detail needed to see snapshots and tier properties.
LIST_INCLUDE = ["metadata", "snapshots"]


@dataclass
class AzureBlobConfig:
    """Connection settings for Azure Blob Storage.

    Attributes:
        connection_string: Azure Storage connection string.
        account_url: Azure Storage account URL (alternative to connection_string).
        account_name: Azure Storage account name.
        account_key: Azure Storage account key.
        sas_token: SAS token for authentication.
    """

    connection_string: str | None = field(default=None, repr=False)
    account_url: str | None = None
    account_name: str | None = None
    account_key: str | None = field(default=None, repr=False)
    sas_token: str | None = field(default=None, repr=False)


def create_blob_service_client(config: AzureBlobConfig) -> BlobServiceClient:
    """Create a BlobServiceClient from whichever credentials are present.

    Authentication Methods:
        1. Connection string.
        2. Account URL with SAS token or account key.
        3. Account name and key.
        4. Account URL alone, using DefaultAzureCredential (managed identity).

    Raises:
        ConfigurationError: If no usable credentials were given.
    """
    if config.connection_string:
        return BlobServiceClient.from_connection_string(config.connection_string)

    if config.account_url:
        credential: Any
        if config.sas_token:
            credential = config.sas_token
        elif config.account_key:
            credential = config.account_key
        else:
            from azure.identity import DefaultAzureCredential

            credential = DefaultAzureCredential()
        return BlobServiceClient(account_url=config.account_url, credential=credential)

    if config.account_name:
        account_url = f"https://{config.account_name}.blob.core.windows.net"
        return BlobServiceClient(account_url=account_url, credential=config.account_key)

    raise ConfigurationError(
        [
            "No connection credentials provided. Provide connection_string, "
            "account_url, or account_name."
        ]
    )


class AzureBlobStorageClient:
    """Storage client backed by Azure Blob Storage.

    Example:
        >>> client = AzureBlobStorageClient.from_connection_string(
        ...     "DefaultEndpointsProtocol=https;..."
        ... )
        >>> for obj in client.list_objects("backups"):
        ...     print(obj.name, obj.tier)
    """

    def __init__(self, service_client: "AzureBlobServiceClientProtocol") -> None:
        """Initialize the client.

        Args:
            service_client: A BlobServiceClient (or compatible double).
        """
        self._service = service_client

    @classmethod
    def from_config(cls, config: AzureBlobConfig) -> "AzureBlobStorageClient":
        return cls(create_blob_service_client(config))

    @classmethod
    def from_connection_string(cls, connection_string: str) -> "AzureBlobStorageClient":
        return cls.from_config(AzureBlobConfig(connection_string=connection_string))

    def list_objects(self, container: str) -> Iterator[StorageObjectRef]:
        """List every block blob in a container, snapshots included.

        Listing is lazy; pages are fetched as the iterator is consumed.

        Raises:
            ProviderError: If the container cannot be listed.
        """
        container_client = self._service.get_container_client(container)
        try:
            for props in container_client.list_blobs(include=LIST_INCLUDE):
                if not _is_block_blob(props):
                    continue
                blob_client = container_client.get_blob_client(
                    props.name, snapshot=props.snapshot
                )
                yield StorageObjectRef(
                    container=container,
                    name=props.name,
                    uri=blob_client.url,
                    snapshot=props.snapshot,
                    version_id=getattr(props, "version_id", None),
                    tier=TierType.from_string(props.blob_tier),
                    size_bytes=props.size or 0,
                    last_modified=props.last_modified,
                )
        except AzureError as e:
            raise ProviderError(container, str(e)) from e

    def object_ref(self, container: str, path: str) -> StorageObjectRef:
        """Build a reference to ``container/path``.

        No request is sent; the blob is not checked for existence.
        """
        name = path.lstrip("/")
        blob_client = self._service.get_container_client(container).get_blob_client(name)
        return StorageObjectRef(container=container, name=name, uri=blob_client.url)

    def set_tier(self, obj: StorageObjectRef, tier: TierType) -> None:
        """Set the standard tier of a blob (or blob snapshot).

        Raises:
            TransitionError: If the service rejects the request.
        """
        blob_client = self._service.get_container_client(obj.container).get_blob_client(
            obj.name, snapshot=obj.snapshot
        )
        kwargs: dict[str, Any] = {}
        if obj.version_id:
            kwargs["version_id"] = obj.version_id

        try:
            blob_client.set_standard_blob_tier(tier.label, **kwargs)
        except AzureError as e:
            raise TransitionError(obj.name, tier, str(e)) from e
        logger.debug(f"Set tier of {obj.location} to {tier.label}")


def _is_block_blob(props: "AzureBlobPropertiesProtocol") -> bool:
    """Only block blobs support standard tiers."""
    return props.blob_type is None or props.blob_type == BlobType.BLOCKBLOB
