"""Content-based identity for phrase records.

Two devices can create the "same" phrase independently, each with its own ``id``. The
content key recognises such pairs: it is derived from the primary-language text alone
(plus the grouping tag), ignoring case, diacritics, punctuation and spacing, so
``"Labas!"``, ``"labas"`` and ``"lãbas"`` all collapse to ``"labas"``.
"""

from __future__ import annotations

import unicodedata
from dataclasses import replace
from typing import TYPE_CHECKING, Final

from phrasemerge.domain.model import GROUPING_FIELD, PRIMARY_FIELD

if TYPE_CHECKING:
    from phrasemerge.domain.model import PhraseRecord

PLACEHOLDER_TOKENS: Final[frozenset[str]] = frozenset(
    {"", "n/a", "na", "null", "nul", "none", "nan"}
)
KEY_SEPARATOR: Final[str] = "|"

# base-letter folding for letters NFKD may leave composed
_LETTER_FALLBACKS: Final[dict[int, str]] = str.maketrans(
    {
        "ą": "a",
        "č": "c",
        "ę": "e",
        "ė": "e",
        "į": "i",
        "š": "s",
        "ų": "u",
        "ū": "u",
        "ž": "z",
        "ł": "l",
        "ø": "o",
        "đ": "d",
        "ħ": "h",
        "ı": "i",
        "æ": "ae",
        "œ": "oe",
        "ß": "ss",
    }
)


def is_meaningful(value: object) -> bool:
    """Return whether ``value`` carries user content (not blank, not a placeholder)."""

    if value is None:
        return False
    text = str(value).strip()
    return text.lower() not in PLACEHOLDER_TOKENS


def meaningful_text(value: object) -> str:
    """Return the stripped text of ``value``, or ``""`` when it is not meaningful."""

    if not is_meaningful(value):
        return ""
    return str(value).strip()


def normalize_for_key(text: str) -> str:
    lowered = text.strip().lower()
    if not lowered:
        return ""
    decomposed = unicodedata.normalize("NFKD", lowered)
    unmarked = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    substituted = unmarked.translate(_LETTER_FALLBACKS)
    return "".join(ch for ch in substituted if ch.isalnum())


def derive_content_key(record: PhraseRecord) -> str:
    """Derive the content key of ``record``.

    Returns ``""`` exactly when the primary field is not meaningful. Primary text made only
    of punctuation or symbols (``"?!"``) still gets a key: its case-folded, space-collapsed
    form, so that meaningful records never lose their identity.
    """

    primary = meaningful_text(record.value_of(PRIMARY_FIELD))
    if not primary:
        return ""
    key = normalize_for_key(primary) or _symbol_key(primary)

    group = normalize_for_key(meaningful_text(record.value_of(GROUPING_FIELD)))
    if group:
        key = f"{key}{KEY_SEPARATOR}{group}"
    return key


def with_content_key(record: PhraseRecord) -> PhraseRecord:
    key = derive_content_key(record)
    if key == record.content_key:
        return record
    return replace(record, content_key=key)


def _symbol_key(text: str) -> str:
    folded = unicodedata.normalize("NFKC", text).casefold()
    return "".join(folded.split())
