"""In-memory storage client backend.

This module provides a storage client that keeps blobs in memory.
Useful for testing and dry rehearsals. Nothing is persisted.
"""

from __future__ import annotations

from dataclasses import replace
from typing import Iterator

from tierfix.stores.tiering.base import (
    ProviderError,
    StorageObjectRef,
    TierType,
    TransitionError,
)


class MemoryStorageClient:
    """In-memory storage client.

    Records every ``set_tier`` call in ``tier_calls`` so tests can assert
    exactly which mutations happened.

    Example:
        >>> client = MemoryStorageClient()
        >>> client.add("data", "a.bin", TierType.HOT)
        >>> client.set_tier(client.object_ref("data", "a.bin"), TierType.ARCHIVE)
        >>> client.get_tier("data", "a.bin")
        <TierType.ARCHIVE: 'archive'>
    """

    def __init__(self, base_url: str = "https://memory.blob.local") -> None:
        self._base_url = base_url.rstrip("/")
        self._containers: dict[str, dict[str, StorageObjectRef]] = {}
        self._failing: set[str] = set()
        self.tier_calls: list[tuple[str, TierType]] = []
        self.list_calls = 0

    def create_container(self, container: str) -> None:
        self._containers.setdefault(container, {})

    def add(
        self,
        container: str,
        name: str,
        tier: TierType = TierType.HOT,
        size_bytes: int = 0,
        snapshot: str | None = None,
    ) -> StorageObjectRef:
        """Add a blob to a container, creating the container if needed."""
        obj = StorageObjectRef(
            container=container,
            name=name,
            uri=self._uri(container, name),
            snapshot=snapshot,
            tier=tier,
            size_bytes=size_bytes,
        )
        key = name if snapshot is None else f"{name}?snapshot={snapshot}"
        self._containers.setdefault(container, {})[key] = obj
        return obj

    def fail_on(self, name: str) -> None:
        """Make ``set_tier`` fail for the given blob name."""
        self._failing.add(name)

    def get_tier(self, container: str, name: str) -> TierType:
        return self._containers[container][name].tier

    def list_objects(self, container: str) -> Iterator[StorageObjectRef]:
        """List blobs in insertion order.

        Raises:
            ProviderError: If the container does not exist.
        """
        self.list_calls += 1
        if container not in self._containers:
            raise ProviderError(container, "container not found")
        return iter(list(self._containers[container].values()))

    def object_ref(self, container: str, path: str) -> StorageObjectRef:
        name = path.lstrip("/")
        return StorageObjectRef(
            container=container, name=name, uri=self._uri(container, name)
        )

    def set_tier(self, obj: StorageObjectRef, tier: TierType) -> None:
        """Record the call and update the stored tier.

        Raises:
            TransitionError: If the blob was marked failing or does not exist.
        """
        self.tier_calls.append((obj.name, tier))
        if obj.name in self._failing:
            raise TransitionError(obj.name, tier, "simulated failure")

        blobs = self._containers.get(obj.container, {})
        key = obj.name if obj.snapshot is None else f"{obj.name}?snapshot={obj.snapshot}"
        if key not in blobs:
            raise TransitionError(obj.name, tier, "blob not found")
        blobs[key] = replace(blobs[key], tier=tier)

    def _uri(self, container: str, name: str) -> str:
        return f"{self._base_url}/{container}/{name}"
