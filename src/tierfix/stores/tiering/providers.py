"""Blob provider implementations.

A provider produces the candidate blobs for one run. Three strategies
exist: a single explicitly named blob, every blob in the container, and
only the blobs whose tier still differs from the target (the default).
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Iterator

from tierfix.stores.tiering.base import (
    BlobProvider,
    ListingMode,
    LogSink,
    StorageObjectRef,
    TieringConfig,
    TierType,
)
from tierfix.stores.tiering.policies import is_eligible

if TYPE_CHECKING:
    from tierfix.stores.backends._protocols import StorageClient

logger = logging.getLogger(__name__)


class SpecifiedBlobProvider(BlobProvider):
    """Provide exactly one blob named by path.

    The reference is built from container and path only; the blob is not
    looked up remotely.
    """

    def __init__(
        self,
        client: "StorageClient",
        container: str,
        log: LogSink,
        path: str,
    ) -> None:
        self._client = client
        self._container = container
        self._log = log
        self._path = path

    def provide(self) -> Iterator[StorageObjectRef]:
        obj = self._client.object_ref(self._container, self._path)
        self._log(f"Blob specified: {obj.uri}")
        return iter([obj])


class AllBlobProvider(BlobProvider):
    """Provide every block blob in the container, snapshots included."""

    def __init__(self, client: "StorageClient", container: str, log: LogSink) -> None:
        self._client = client
        self._container = container
        self._log = log

    def provide(self) -> Iterator[StorageObjectRef]:
        logger.debug(f"Listing all blobs in {self._container}")
        return iter(self._client.list_objects(self._container))


class WarmBlobProvider(AllBlobProvider):
    """Provide blobs whose known tier is not yet the target tier.

    Blobs already in the target tier, and blobs whose tier the backend
    did not report, are left out.
    """

    def __init__(
        self,
        client: "StorageClient",
        container: str,
        log: LogSink,
        target: TierType = TierType.ARCHIVE,
    ) -> None:
        super().__init__(client, container, log)
        self._target = target

    def provide(self) -> Iterator[StorageObjectRef]:
        listing = super().provide()
        return (obj for obj in listing if is_eligible(obj.tier, self._target))


def create_provider(
    config: TieringConfig,
    client: "StorageClient",
    log: LogSink,
) -> BlobProvider:
    """Select the provider for a configuration.

    A configured blob path wins; otherwise the listing mode decides.
    """
    if config.blob_path is not None:
        return SpecifiedBlobProvider(client, config.container, log, config.blob_path)
    if config.listing is ListingMode.ALL:
        return AllBlobProvider(client, config.container, log)
    return WarmBlobProvider(client, config.container, log, target=config.target_tier)
