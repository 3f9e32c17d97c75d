"""Tier policy functions.

These decide, from the tier reported at listing time, whether a blob
still needs a transition. Both functions are pure.
"""

from __future__ import annotations

from tierfix.stores.tiering.base import TierType


def is_already_at_target(state: TierType, target: TierType) -> bool:
    """Check whether a blob already sits in the target tier.

    An unknown tier is never considered at target, so such blobs are
    re-evaluated rather than silently skipped.

    Example:
        >>> is_already_at_target(TierType.ARCHIVE, TierType.ARCHIVE)
        True
        >>> is_already_at_target(TierType.UNKNOWN, TierType.ARCHIVE)
        False
    """
    return state.is_known and state is target


def is_eligible(state: TierType, target: TierType) -> bool:
    """Check whether a listed blob qualifies for the warm listing.

    Only blobs with a known tier different from the target qualify.
    """
    return state.is_known and state is not target
