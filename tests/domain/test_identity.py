from __future__ import annotations

import pytest

from phrasemerge.domain.identity import (
    derive_content_key,
    is_meaningful,
    meaningful_text,
    normalize_for_key,
    with_content_key,
)
from phrasemerge.domain.model import PhraseRecord


@pytest.mark.parametrize("value", [None, "", "   ", "n/a", "N/A", "null", "None", "NaN", "nul"])
def test_placeholders_are_not_meaningful(value: object) -> None:
    assert not is_meaningful(value)
    assert meaningful_text(value) == ""


def test_meaningful_text_strips_whitespace() -> None:
    assert meaningful_text("  Labas rytas ") == "Labas rytas"
    assert meaningful_text(42) == "42"


def test_case_and_diacritics_collapse_to_one_key() -> None:
    keys = {
        derive_content_key(PhraseRecord(phrase=text)) for text in ("Labas", "labas", "lãbas")
    }

    assert keys == {"labas"}


def test_lithuanian_letters_and_punctuation_are_folded() -> None:
    assert normalize_for_key("Ačiū, gražiai!") == "aciugraziai"
    assert normalize_for_key("Šeštadienį ėjau į turgų") == "sestadieniejauiturgu"


def test_non_decomposing_letters_use_fallbacks() -> None:
    assert normalize_for_key("Łódź") == "lodz"
    assert normalize_for_key("Straße") == "strasse"


def test_key_is_empty_only_when_primary_field_is_not_meaningful() -> None:
    assert derive_content_key(PhraseRecord(phrase=None, translation="Hello")) == ""
    assert derive_content_key(PhraseRecord(phrase="n/a")) == ""
    assert derive_content_key(PhraseRecord(phrase="?!")) == "?!"


def test_grouping_tag_is_appended_behind_separator() -> None:
    phrase = derive_content_key(PhraseRecord(phrase="Labas", sheet="Phrases"))
    word = derive_content_key(PhraseRecord(phrase="Labas", sheet="Words"))

    assert phrase == "labas|phrases"
    assert word == "labas|words"
    assert derive_content_key(PhraseRecord(phrase="Labas", sheet="none")) == "labas"


def test_key_derivation_is_idempotent() -> None:
    record = PhraseRecord(phrase="Kiek tai kainuoja?", sheet="Questions")
    key = derive_content_key(record)

    assert normalize_for_key(normalize_for_key("Kiek tai kainuoja?")) == normalize_for_key(
        "Kiek tai kainuoja?"
    )
    assert derive_content_key(with_content_key(record)) == key
    assert with_content_key(with_content_key(record)) == with_content_key(record)


def test_with_content_key_refreshes_stale_cache() -> None:
    stale = PhraseRecord(phrase="Sveiki", content_key="labas")

    assert with_content_key(stale).content_key == "sveiki"
