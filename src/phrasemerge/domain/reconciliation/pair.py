"""Reconcile one local record with the remote record believed to be the same entity.

The outcome depends on the tombstone state of both sides:

- one side deleted, the other live: the deletion wins when it happened at or after the
  other side's last edit. A newer edit wins instead, but the pair is flagged with a
  ``DeleteVsEditConflict`` because resurrecting a deleted record needs a human's consent.
- both deleted: the later deletion time is kept on top of the richer payload.
- both live: fields are merged one by one, filling blanks from either side and flagging
  every field where both sides hold different meaningful values.

Every function here is total: malformed records are normalized rather than rejected.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import TYPE_CHECKING

from phrasemerge.domain.identity import derive_content_key, meaningful_text
from phrasemerge.domain.model import PhraseField
from phrasemerge.domain.scoring import completeness_score, richer_of

from .contracts import DeleteVsEditConflict, FieldConflict, FieldDifference, PairResult
from .normalize import normalize_record
from .policy import DEFAULT_POLICY

if TYPE_CHECKING:
    from phrasemerge.domain.model import PhraseRecord

    from .policy import MergePolicy

log = logging.getLogger(__name__)


def reconcile_pair(
    local: PhraseRecord,
    remote: PhraseRecord,
    *,
    policy: MergePolicy = DEFAULT_POLICY,
) -> PairResult:
    """Merge ``local`` and ``remote`` into one record plus an optional conflict."""

    local = normalize_record(local, salt="local")
    remote = normalize_record(remote, salt="remote")

    if local.deleted and not remote.deleted:
        return _deleted_vs_live(local, remote, deleted_side="local")
    if remote.deleted and not local.deleted:
        return _deleted_vs_live(local, remote, deleted_side="remote")
    if local.deleted and remote.deleted:
        return PairResult(merged=_merge_tombstones(local, remote))
    return _merge_live(local, remote, policy=policy)


def _deleted_vs_live(
    local: PhraseRecord,
    remote: PhraseRecord,
    *,
    deleted_side: str,
) -> PairResult:
    deleted, live = (local, remote) if deleted_side == "local" else (remote, local)

    if deleted.removed_at >= live.edited_at:
        log.debug(
            "Deletion on %s side supersedes edit: id=%s deleted_at=%s edited_at=%s",
            deleted_side,
            deleted.id,
            deleted.removed_at,
            live.edited_at,
        )
        tombstone = replace(
            deleted.with_content(_layered_content(deleted, live)),
            updated_at=max(deleted.edited_at, live.edited_at),
        )
        return PairResult(merged=replace(tombstone, content_key=derive_content_key(tombstone)))

    live_side = "remote" if deleted_side == "local" else "local"
    reason = (
        f"{deleted_side.capitalize()} copy was deleted, "
        f"but the {live_side} copy has newer edits."
    )
    log.debug("Delete-vs-edit conflict: id=%s reason=%s", live.id, reason)
    conflict = DeleteVsEditConflict(
        key=live.id or "",
        local=local,
        remote=remote,
        reason=reason,
    )
    return PairResult(merged=live, conflict=conflict)


def _merge_tombstones(local: PhraseRecord, remote: PhraseRecord) -> PhraseRecord:
    base = richer_of(local, remote)
    return replace(
        base,
        deleted=True,
        deleted_at=max(local.removed_at, remote.removed_at),
        updated_at=max(local.edited_at, remote.edited_at),
    )


def _merge_live(
    local: PhraseRecord,
    remote: PhraseRecord,
    *,
    policy: MergePolicy,
) -> PairResult:
    base = _pick_base(local, remote, policy=policy)
    other = remote if base is local else local

    values: dict[PhraseField, str | None] = {}
    differences: list[FieldDifference] = []
    for field in PhraseField:
        base_value = meaningful_text(base.value_of(field))
        other_value = meaningful_text(other.value_of(field))

        if not base_value and other_value:
            values[field] = other_value
        elif base_value and base_value == other_value:
            values[field] = base_value
        elif base_value and other_value:
            local_value = meaningful_text(local.value_of(field))
            remote_value = meaningful_text(remote.value_of(field))
            chosen = _choose_text(local_value, remote_value, local=local, remote=remote)
            values[field] = chosen
            differences.append(
                FieldDifference(field=field, local=local_value, remote=remote_value, chosen=chosen)
            )

    merged = replace(
        base.with_content(values),
        id=base.id or other.id,
        updated_at=max(local.edited_at, remote.edited_at),
        deleted=False,
        deleted_at=None,
        quiz_stats=base.quiz_stats or other.quiz_stats,
    )
    merged = replace(merged, content_key=derive_content_key(merged))

    if not differences:
        return PairResult(merged=merged)

    log.debug(
        "Field conflict: id=%s fields=%s",
        merged.id,
        ",".join(difference.field.value for difference in differences),
    )
    conflict = FieldConflict(
        key=merged.id or "",
        local=local,
        remote=remote,
        fields=tuple(differences),
    )
    return PairResult(merged=merged, conflict=conflict)


def _pick_base(local: PhraseRecord, remote: PhraseRecord, *, policy: MergePolicy) -> PhraseRecord:
    if policy.is_clearly_newer(local.edited_at, remote.edited_at):
        return local
    if policy.is_clearly_newer(remote.edited_at, local.edited_at):
        return remote
    if completeness_score(local) >= completeness_score(remote):
        return local
    return remote


def _choose_text(
    local_value: str,
    remote_value: str,
    *,
    local: PhraseRecord,
    remote: PhraseRecord,
) -> str:
    if local.edited_at != remote.edited_at:
        return local_value if local.edited_at > remote.edited_at else remote_value
    # equal edit times: longer text wins, local on equal length
    return local_value if len(local_value) >= len(remote_value) else remote_value


def _layered_content(top: PhraseRecord, bottom: PhraseRecord) -> dict[PhraseField, str | None]:
    """Content of ``top``, with blanks filled from ``bottom``."""

    layered: dict[PhraseField, str | None] = {}
    for field in PhraseField:
        value = top.value_of(field)
        layered[field] = value if meaningful_text(value) else bottom.value_of(field)
    return layered
