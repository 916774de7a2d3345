"""Merge a local and a remote phrase collection.

Matching policy:
- a local record first looks for a remote record with the same ``id``
- failing that, for a remote record with the same non-empty content key; when several
  remote records share a key, the most recently edited one represents it
- each remote record is consumed at most once
- matched pairs are reconciled by :func:`reconcile_pair`; unmatched records on either side
  pass through unchanged

The result is ordered live-before-deleted, newest edit first, with ties kept in input order.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from .contracts import MergeResult, MergeStats
from .deduplicate import collapse_duplicates, count_key_collisions
from .normalize import normalize_collection
from .pair import reconcile_pair
from .policy import DEFAULT_POLICY

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable, Sequence

    from phrasemerge.domain.model import PhraseRecord

    from .contracts import Conflict
    from .policy import MergePolicy

log = logging.getLogger(__name__)


def merge_collections(
    local_records: Iterable[PhraseRecord],
    remote_records: Iterable[PhraseRecord],
    *,
    policy: MergePolicy = DEFAULT_POLICY,
) -> MergeResult:
    """Merge two collections into one, plus conflicts and diagnostics."""

    local = normalize_collection(local_records, side="local")
    remote = normalize_collection(remote_records, side="remote")
    stats = MergeStats(
        local_count=len(local),
        remote_count=len(remote),
        local_key_collisions=count_key_collisions(local),
        remote_key_collisions=count_key_collisions(remote),
    )
    conflicts: list[Conflict] = []

    if policy.collapse_duplicates:
        local_dedup = collapse_duplicates(local, side="local", policy=policy)
        remote_dedup = collapse_duplicates(remote, side="remote", policy=policy)
        local, remote = local_dedup.records, remote_dedup.records
        conflicts.extend(local_dedup.conflicts)
        conflicts.extend(remote_dedup.conflicts)
        stats.collapsed_duplicates = local_dedup.collapsed + remote_dedup.collapsed

    remote_by_id = _index_newest(remote, key_of=lambda record: record.id or "")
    remote_by_key = _index_newest(remote, key_of=lambda record: record.content_key)
    consumed: set[int] = set()
    merged: list[PhraseRecord] = []

    for record in local:
        position = _lookup(record.id or "", remote_by_id, consumed)
        if position is not None:
            stats.matched_by_id += 1
        else:
            position = _lookup(record.content_key, remote_by_key, consumed)
            if position is not None:
                stats.matched_by_content_key += 1

        if position is None:
            merged.append(record)
            stats.created_from_local += 1
            continue

        consumed.add(position)
        result = reconcile_pair(record, remote[position], policy=policy)
        merged.append(result.merged)
        if result.conflict is not None:
            conflicts.append(result.conflict)

    for position, record in enumerate(remote):
        if position in consumed:
            continue
        merged.append(record)
        stats.created_from_remote += 1

    ordered = sorted(merged, key=lambda record: (record.deleted, -record.edited_at))
    stats.deletions = sum(1 for record in ordered if record.deleted)
    stats.conflicts = len(conflicts)
    stats.merged_count = len(ordered)

    log.debug(
        "Merged local=%s remote=%s -> merged=%s conflicts=%s (by_id=%s, by_key=%s)",
        stats.local_count,
        stats.remote_count,
        stats.merged_count,
        stats.conflicts,
        stats.matched_by_id,
        stats.matched_by_content_key,
    )
    return MergeResult(merged=tuple(ordered), conflicts=tuple(conflicts), stats=stats)


def _index_newest(
    records: Sequence[PhraseRecord],
    *,
    key_of: Callable[[PhraseRecord], str],
) -> dict[str, int]:
    """Map each non-empty key to the position of its most recently edited record."""

    index: dict[str, int] = {}
    for position, record in enumerate(records):
        key = key_of(record)
        if not key:
            continue
        current = index.get(key)
        if current is None or record.edited_at > records[current].edited_at:
            index[key] = position
    return index


def _lookup(key: str, index: dict[str, int], consumed: set[int]) -> int | None:
    if not key:
        return None
    position = index.get(key)
    if position is None or position in consumed:
        return None
    return position
