"""Fixer implementations.

A fixer moves one blob to the target tier. The dry-run fixer only logs
what would be done and holds no storage client at all.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from tierfix.stores.tiering.base import (
    Fixer,
    LogSink,
    StorageObjectRef,
    TieringConfig,
    TierType,
)

if TYPE_CHECKING:
    from tierfix.stores.backends._protocols import StorageClient


class TierFixer(Fixer):
    """Set each blob to the target tier."""

    def __init__(
        self,
        client: "StorageClient",
        log: LogSink,
        target: TierType = TierType.ARCHIVE,
    ) -> None:
        self._client = client
        self._log = log
        self._target = target

    @property
    def target(self) -> TierType:
        return self._target

    def fix(self, obj: StorageObjectRef) -> None:
        self._log(f"Setting {obj.name} to {self._target.label} tier")
        self._client.set_tier(obj, self._target)


class DryRunFixer(Fixer):
    """Log the blob that would be fixed and change nothing."""

    def __init__(self, log: LogSink) -> None:
        self._log = log

    def fix(self, obj: StorageObjectRef) -> None:
        self._log(f"[dry run] would fix {obj.name}")


def create_fixer(
    config: TieringConfig,
    client: "StorageClient",
    log: LogSink,
) -> Fixer:
    """Pick the fixer for a configuration, once, from its dry-run flag."""
    if config.dry_run:
        return DryRunFixer(log)
    return TierFixer(client, log, target=config.target_tier)
