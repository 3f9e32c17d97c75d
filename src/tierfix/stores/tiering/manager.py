"""Tiering pipeline with a listing cap.

The pipeline runs in two passes. The first pass drains the provider into
a list while counting, and aborts with ``CapExceededError`` as soon as the
count passes the cap. Only once the listing is complete does the second
pass hand each collected blob to the fixer, in listing order. No blob is
touched when the cap trips, including the ones already collected.
"""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from datetime import datetime
from typing import TYPE_CHECKING

from tierfix.stores.tiering.base import (
    DEFAULT_MAX_OBJECTS,
    BlobProvider,
    CapExceededError,
    ConfigurationError,
    Fixer,
    LogSink,
    StorageObjectRef,
    TieringConfig,
    TieringResult,
    TierType,
    TransitionError,
)
from tierfix.stores.tiering.fixers import DryRunFixer, create_fixer
from tierfix.stores.tiering.policies import is_already_at_target
from tierfix.stores.tiering.providers import create_provider

if TYPE_CHECKING:
    from tierfix.stores.backends._protocols import StorageClient

logger = logging.getLogger(__name__)


class TieringPipeline:
    """Wire a provider to a fixer behind the listing cap.

    Example:
        >>> pipeline = TieringPipeline.from_config(config, client, log=print)
        >>> result = pipeline.run()
        >>> result.items_transitioned
        2
    """

    def __init__(
        self,
        provider: BlobProvider,
        fixer: Fixer,
        max_objects: int = DEFAULT_MAX_OBJECTS,
        target: TierType = TierType.ARCHIVE,
        max_workers: int = 1,
        fail_fast: bool = True,
    ) -> None:
        """Initialize the pipeline.

        Args:
            provider: Source of candidate blobs.
            fixer: Applies or simulates the tier change.
            max_objects: Largest number of candidates allowed in one run.
            target: Target tier; blobs known to be there are skipped.
            max_workers: Concurrent fixer calls in the second pass.
            fail_fast: Re-raise the first TransitionError instead of
                recording it and moving on.
        """
        errors: list[str] = []
        if max_objects < 1:
            errors.append("max_objects must be >= 1")
        if max_workers < 1:
            errors.append("max_workers must be >= 1")
        if errors:
            raise ConfigurationError(errors)

        self._provider = provider
        self._fixer = fixer
        self._max_objects = max_objects
        self._target = target
        self._max_workers = max_workers
        self._fail_fast = fail_fast

    @classmethod
    def from_config(
        cls,
        config: TieringConfig,
        client: "StorageClient",
        log: LogSink,
    ) -> "TieringPipeline":
        """Build the provider, fixer and pipeline for a configuration."""
        return cls(
            provider=create_provider(config, client, log),
            fixer=create_fixer(config, client, log),
            max_objects=config.max_objects,
            target=config.target_tier,
            max_workers=config.max_workers,
            fail_fast=config.fail_fast,
        )

    @property
    def max_objects(self) -> int:
        return self._max_objects

    @property
    def dry_run(self) -> bool:
        return isinstance(self._fixer, DryRunFixer)

    def collect(self) -> list[StorageObjectRef]:
        """Drain the provider into a list, enforcing the cap.

        Raises:
            CapExceededError: When more than ``max_objects`` blobs are listed.
            ProviderError: When the listing fails.
        """
        collected: list[StorageObjectRef] = []
        count = 0
        for obj in self._provider.provide():
            count += 1
            if count > self._max_objects:
                raise CapExceededError(self._max_objects)
            collected.append(obj)

        logger.info(f"Collected {count} candidate blobs")
        return collected

    def run(self) -> TieringResult:
        """Collect all candidates, then fix them.

        Returns:
            Result of the run.

        Raises:
            CapExceededError: Before any fixer call, when the cap trips.
            ProviderError: Before any fixer call, when the listing fails.
            TransitionError: When a fix fails and ``fail_fast`` is set.
            Exception: Any other fixer error, regardless of ``fail_fast``.
        """
        result = TieringResult(start_time=datetime.now(), dry_run=self.dry_run)
        candidates = self.collect()
        result.items_scanned = len(candidates)

        pending: list[StorageObjectRef] = []
        for obj in candidates:
            if is_already_at_target(obj.tier, self._target):
                logger.debug(f"Skipping {obj.name}: already {self._target.label}")
                result.items_skipped += 1
            else:
                pending.append(obj)

        try:
            if self._max_workers > 1 and len(pending) > 1:
                self._fix_concurrently(pending, result)
            else:
                self._fix_sequentially(pending, result)
        except Exception:
            logger.error(
                f"Run aborted after {result.items_transitioned} of "
                f"{result.items_scanned} blobs"
            )
            raise
        finally:
            result.end_time = datetime.now()

        logger.info(
            f"Tiering completed: {result.items_transitioned} transitioned, "
            f"{result.items_skipped} skipped, {len(result.errors)} failed"
        )
        return result

    def _fix_sequentially(
        self, pending: list[StorageObjectRef], result: TieringResult
    ) -> None:
        for obj in pending:
            try:
                self._fixer.fix(obj)
            except TransitionError as e:
                if self._fail_fast:
                    raise
                self._record_error(result, e)
                continue
            self._record_success(result, obj)

    def _fix_concurrently(
        self, pending: list[StorageObjectRef], result: TieringResult
    ) -> None:
        with ThreadPoolExecutor(
            max_workers=self._max_workers, thread_name_prefix="tierfix"
        ) as executor:
            futures = [(obj, executor.submit(self._fixer.fix, obj)) for obj in pending]
            for obj, future in futures:
                try:
                    future.result()
                except Exception as e:
                    if isinstance(e, TransitionError) and not self._fail_fast:
                        self._record_error(result, e)
                        continue
                    # Queued transitions must not start once the run is aborting
                    executor.shutdown(wait=True, cancel_futures=True)
                    raise
                self._record_success(result, obj)

    def _record_success(self, result: TieringResult, obj: StorageObjectRef) -> None:
        result.items_transitioned += 1
        result.transitioned.append(obj.name)

    def _record_error(self, result: TieringResult, error: TransitionError) -> None:
        logger.warning(f"Continuing after failure: {error}")
        result.errors.append(str(error))


def run_tiering(
    config: TieringConfig,
    client: "StorageClient",
    log: LogSink,
) -> TieringResult:
    """Run one tiering pass for a configuration."""
    return TieringPipeline.from_config(config, client, log).run()
