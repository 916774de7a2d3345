"""Public domain model surface."""

from __future__ import annotations

from phrasemerge.domain.model.enums import ConflictKind, FieldChoice, PhraseField, Side
from phrasemerge.domain.model.phrase import GROUPING_FIELD, PRIMARY_FIELD, PhraseRecord

__all__ = [
    "GROUPING_FIELD",
    "PRIMARY_FIELD",
    "ConflictKind",
    "FieldChoice",
    "PhraseField",
    "PhraseRecord",
    "Side",
]
