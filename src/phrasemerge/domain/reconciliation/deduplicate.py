"""Intra-collection duplicate handling.

Responsibilities of this stage:
- count content-key collisions inside one collection (always)
- optionally collapse records sharing an ``id`` or a non-empty content key into one record,
  reusing the pairwise reconciler so no meaningful value is dropped silently

When two records of the same collection are collapsed, the earlier record plays the
``local`` role and the later one the ``remote`` role in any conflict the collapse raises.
"""

from __future__ import annotations

import logging
from collections import Counter
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from .pair import reconcile_pair
from .policy import DEFAULT_POLICY

if TYPE_CHECKING:
    from collections.abc import Sequence

    from phrasemerge.domain.model import PhraseRecord

    from .contracts import Conflict
    from .policy import MergePolicy

log = logging.getLogger(__name__)


@dataclass(slots=True)
class DeduplicationResult:
    records: list[PhraseRecord]
    conflicts: list[Conflict] = field(default_factory=list["Conflict"])
    collapsed: int = 0


def count_key_collisions(records: Sequence[PhraseRecord]) -> int:
    """Return how many distinct content keys occur more than once."""

    counts = Counter(record.content_key for record in records if record.content_key)
    return sum(1 for occurrences in counts.values() if occurrences > 1)


def collapse_duplicates(
    records: Sequence[PhraseRecord],
    *,
    side: str,
    policy: MergePolicy = DEFAULT_POLICY,
) -> DeduplicationResult:
    """Pre-merge records of one normalized collection that describe the same entity."""

    kept: list[PhraseRecord] = []
    conflicts: list[Conflict] = []
    position_by_id: dict[str, int] = {}
    position_by_key: dict[str, int] = {}
    collapsed = 0

    for record in records:
        position = _find_position(
            record,
            position_by_id=position_by_id,
            position_by_key=position_by_key,
        )
        if position is None:
            position = len(kept)
            kept.append(record)
        else:
            result = reconcile_pair(kept[position], record, policy=policy)
            log.debug(
                "Collapsed %s duplicate id=%s into id=%s",
                side,
                record.id,
                result.merged.id,
            )
            kept[position] = result.merged
            collapsed += 1
            if result.conflict is not None:
                conflicts.append(result.conflict)

        for record_id in (record.id, kept[position].id):
            if record_id:
                position_by_id.setdefault(record_id, position)
        for key in (record.content_key, kept[position].content_key):
            if key:
                position_by_key.setdefault(key, position)

    if collapsed:
        log.info("Collapsed %s duplicate %s record(s)", collapsed, side)
    return DeduplicationResult(records=kept, conflicts=conflicts, collapsed=collapsed)


def _find_position(
    record: PhraseRecord,
    *,
    position_by_id: dict[str, int],
    position_by_key: dict[str, int],
) -> int | None:
    if record.id and record.id in position_by_id:
        return position_by_id[record.id]
    if record.content_key and record.content_key in position_by_key:
        return position_by_key[record.content_key]
    return None
