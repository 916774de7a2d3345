"""Overlay a user's conflict choices onto a merged collection.

Responsibilities of this stage:
- locate the merged record each conflict refers to (by ``id``, then by content key)
- rewrite only what the user decided, using values already present in the conflict
- leave everything else, including unresolved conflicts, exactly as the merge produced it

The pass is deterministic and idempotent: applying the same resolutions twice gives the
same records as applying them once.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import TYPE_CHECKING

from phrasemerge.domain.identity import derive_content_key, is_meaningful
from phrasemerge.domain.model import FieldChoice, Side

from .contracts import (
    DeleteVsEditConflict,
    FieldConflict,
    FieldResolution,
    PickResolution,
)

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping, Sequence

    from phrasemerge.domain.model import PhraseField, PhraseRecord

    from .contracts import Conflict, FieldDifference, ResolutionsByKey

log = logging.getLogger(__name__)


def apply_resolutions(
    merged: Iterable[PhraseRecord],
    conflicts: Iterable[Conflict],
    resolutions: ResolutionsByKey,
) -> list[PhraseRecord]:
    """Return ``merged`` with the chosen side of each resolved conflict applied."""

    records = list(merged)
    positions_by_id: dict[str, list[int]] = {}
    position_by_key: dict[str, int] = {}
    for position, record in enumerate(records):
        if record.id:
            positions_by_id.setdefault(record.id, []).append(position)
        if record.content_key:
            position_by_key.setdefault(record.content_key, position)

    for conflict in conflicts:
        resolution = resolutions.get(conflict.key)
        if resolution is None:
            continue
        position = _locate(
            conflict,
            records,
            positions_by_id=positions_by_id,
            position_by_key=position_by_key,
        )
        if position is None:
            log.debug("No merged record for conflict key=%s; skipping", conflict.key)
            continue

        target = records[position]
        match conflict, resolution:
            case DeleteVsEditConflict(), PickResolution(pick=pick):
                records[position] = _overlay_side(target, conflict, pick)
            case FieldConflict(), FieldResolution(fields=choices):
                records[position] = _overlay_fields(target, conflict, choices)
            case _:
                log.warning(
                    "Resolution %s does not fit %s conflict key=%s; skipping",
                    type(resolution).__name__,
                    conflict.kind.value,
                    conflict.key,
                )
    return records


def _locate(
    conflict: Conflict,
    records: Sequence[PhraseRecord],
    *,
    positions_by_id: dict[str, list[int]],
    position_by_key: dict[str, int],
) -> int | None:
    conflict_keys = (conflict.local.content_key, conflict.remote.content_key)
    candidates = positions_by_id.get(conflict.key, [])
    # a collection may carry unrelated records under the same id
    for position in candidates:
        if records[position].content_key in conflict_keys:
            return position
    if candidates:
        return candidates[0]
    for key in conflict_keys:
        if key and key in position_by_key:
            return position_by_key[key]
    return None


def _overlay_side(
    target: PhraseRecord,
    conflict: DeleteVsEditConflict,
    pick: Side,
) -> PhraseRecord:
    picked = conflict.local if pick is Side.LOCAL else conflict.remote
    return replace(
        picked,
        id=target.id or picked.id,
        content_key=target.content_key or picked.content_key,
        updated_at=max(target.edited_at, picked.edited_at),
    )


def _overlay_fields(
    target: PhraseRecord,
    conflict: FieldConflict,
    choices: Mapping[PhraseField, FieldChoice],
) -> PhraseRecord:
    values: dict[PhraseField, str | None] = {}
    for name, choice in choices.items():
        difference = conflict.difference_for(name)
        if difference is None:
            continue
        value = _value_for(difference, choice)
        if is_meaningful(value):
            values[name] = value
    if not values:
        return target

    updated = target.with_content(values)
    # keys are only ever taken from records the conflict already knows about
    derived = derive_content_key(updated)
    known_keys = {target.content_key, conflict.local.content_key, conflict.remote.content_key}
    if derived in known_keys:
        return replace(updated, content_key=derived)
    return updated


def _value_for(difference: FieldDifference, choice: FieldChoice) -> str:
    if choice is FieldChoice.LOCAL:
        return difference.local
    if choice is FieldChoice.REMOTE:
        return difference.remote
    return difference.chosen
