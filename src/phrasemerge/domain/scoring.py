"""Completeness ranking used to break ties between concurrent edits."""

from __future__ import annotations

from typing import TYPE_CHECKING, Final

from phrasemerge.domain.identity import is_meaningful
from phrasemerge.domain.model import PhraseField

if TYPE_CHECKING:
    from phrasemerge.domain.model import PhraseRecord

FIELD_WEIGHTS: Final[dict[PhraseField, int]] = {
    PhraseField.PHRASE: 3,
    PhraseField.USAGE: 2,
    PhraseField.NOTES: 2,
    PhraseField.TRANSLATION: 1,
    PhraseField.PHONETIC: 1,
    PhraseField.CATEGORY: 1,
    PhraseField.SHEET: 1,
    PhraseField.STATUS: 1,
}


def completeness_score(record: PhraseRecord) -> int:
    """Sum the weights of every meaningful content field of ``record``."""

    return sum(
        weight for field, weight in FIELD_WEIGHTS.items() if is_meaningful(record.value_of(field))
    )


def richer_of(first: PhraseRecord, second: PhraseRecord) -> PhraseRecord:
    """Return the more complete record, ``first`` on ties."""

    if completeness_score(first) >= completeness_score(second):
        return first
    return second
