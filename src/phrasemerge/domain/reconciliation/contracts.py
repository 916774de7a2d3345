"""Value types exchanged between the merge stages and their callers."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Literal

from phrasemerge.domain.model import (
    ConflictKind,
    FieldChoice,
    PhraseField,
    PhraseRecord,
    Side,
)


@dataclass(frozen=True, slots=True, kw_only=True)
class FieldDifference:
    """Both sides hold different meaningful values for ``field``."""

    field: PhraseField
    local: str
    remote: str
    chosen: str


@dataclass(frozen=True, slots=True, kw_only=True)
class DeleteVsEditConflict:
    """One side deleted the record while the other edited it later."""

    key: str
    local: PhraseRecord
    remote: PhraseRecord
    reason: str
    kind: Literal[ConflictKind.DELETE_VS_EDIT] = ConflictKind.DELETE_VS_EDIT


@dataclass(frozen=True, slots=True, kw_only=True)
class FieldConflict:
    """Both sides edited one or more fields to different meaningful values."""

    key: str
    local: PhraseRecord
    remote: PhraseRecord
    fields: tuple[FieldDifference, ...]
    reason: str = "Both sides have meaningful differences in one or more fields."
    kind: Literal[ConflictKind.FIELD_CONFLICT] = ConflictKind.FIELD_CONFLICT

    def __post_init__(self) -> None:
        if not self.fields:
            raise ValueError("Field conflict must list at least one field")

    def difference_for(self, name: PhraseField) -> FieldDifference | None:
        for difference in self.fields:
            if difference.field is name:
                return difference
        return None


type Conflict = DeleteVsEditConflict | FieldConflict


@dataclass(frozen=True, slots=True)
class PairResult:
    merged: PhraseRecord
    conflict: Conflict | None = None


@dataclass(slots=True)
class MergeStats:
    """Counters describing one collection merge, for diagnostics."""

    local_count: int = 0
    remote_count: int = 0
    matched_by_id: int = 0
    matched_by_content_key: int = 0
    created_from_local: int = 0
    created_from_remote: int = 0
    deletions: int = 0
    conflicts: int = 0
    merged_count: int = 0
    local_key_collisions: int = 0
    remote_key_collisions: int = 0
    collapsed_duplicates: int = 0


@dataclass(frozen=True, slots=True)
class MergeResult:
    merged: tuple[PhraseRecord, ...]
    conflicts: tuple[Conflict, ...] = ()
    stats: MergeStats = field(default_factory=MergeStats)


@dataclass(frozen=True, slots=True)
class PickResolution:
    """Resolve a delete-vs-edit conflict by taking one side wholesale."""

    pick: Side


@dataclass(frozen=True, slots=True)
class FieldResolution:
    """Resolve a field conflict field by field."""

    fields: Mapping[PhraseField, FieldChoice]


type Resolution = PickResolution | FieldResolution
type ResolutionsByKey = Mapping[str, Resolution]
