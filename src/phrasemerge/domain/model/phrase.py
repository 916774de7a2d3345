"""Canonical phrase record shape seen by the merge engine."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import TYPE_CHECKING, Any

from phrasemerge.domain.model.enums import PhraseField

if TYPE_CHECKING:
    from collections.abc import Mapping

PRIMARY_FIELD = PhraseField.PHRASE
GROUPING_FIELD = PhraseField.SHEET


@dataclass(frozen=True, slots=True, kw_only=True)
class PhraseRecord:
    """One entry of a user's phrase library.

    Records are immutable values: every merge step builds a new record with
    :func:`dataclasses.replace` instead of mutating an existing one. ``id`` and the
    timestamps are optional here because payloads arriving from a collaborator may lack
    them; :func:`phrasemerge.domain.reconciliation.normalize.normalize_record` fills them in.
    """

    id: str | None = None

    phrase: str | None = None
    translation: str | None = None
    phonetic: str | None = None
    category: str | None = None
    usage: str | None = None
    notes: str | None = None
    status: str | None = None
    sheet: str | None = None

    updated_at: int | None = None
    deleted: bool = False
    deleted_at: int | None = None

    # cached, always re-derivable from ``phrase`` and ``sheet``
    content_key: str = ""

    quiz_stats: Mapping[str, Any] | None = None

    def value_of(self, field: PhraseField) -> str | None:
        return getattr(self, field.value)

    def content(self) -> dict[PhraseField, str | None]:
        return {field: self.value_of(field) for field in PhraseField}

    def with_content(self, values: Mapping[PhraseField, str | None]) -> PhraseRecord:
        return replace(self, **{field.value: value for field, value in values.items()})

    @property
    def edited_at(self) -> int:
        return self.updated_at or 0

    @property
    def removed_at(self) -> int:
        return self.deleted_at or 0
