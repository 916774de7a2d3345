"""Offline-first merge engine for phrase collections.

Stage flow:
1) normalize records of both sides (ids, timestamps, tombstones, content keys)
2) optionally collapse duplicates inside each side
3) match local records against the remote index (id first, content key second)
4) reconcile matched pairs, carry unmatched records over, sort
5) after human review, overlay the chosen resolutions
"""

from __future__ import annotations

from .apply import apply_resolutions
from .contracts import (
    Conflict,
    DeleteVsEditConflict,
    FieldConflict,
    FieldDifference,
    FieldResolution,
    MergeResult,
    MergeStats,
    PairResult,
    PickResolution,
    Resolution,
    ResolutionsByKey,
)
from .engine import MergeEngine
from .merge import merge_collections
from .normalize import normalize_record
from .pair import reconcile_pair
from .policy import DEFAULT_POLICY, MergePolicy

__all__ = [
    "DEFAULT_POLICY",
    "Conflict",
    "DeleteVsEditConflict",
    "FieldConflict",
    "FieldDifference",
    "FieldResolution",
    "MergeEngine",
    "MergePolicy",
    "MergeResult",
    "MergeStats",
    "PairResult",
    "PickResolution",
    "Resolution",
    "ResolutionsByKey",
    "apply_resolutions",
    "merge_collections",
    "normalize_record",
    "reconcile_pair",
]
