from __future__ import annotations

import json

import pytest
from pydantic import ValidationError

from phrasemerge.adapters.payload import PhrasePayload, ResolutionPayload, records_from_payload


def test_legacy_storage_keys_are_accepted() -> None:
    payload = PhrasePayload.model_validate(
        {
            "_id": "a1",
            "Lithuanian": "Labas",
            "English": "Hello",
            "Phonetic": "LAH-bahs",
            "RAG Icon": "🟢",
            "Sheet": "Phrases",
            "_ts": "1700",
            "_deleted": "true",
            "_deleted_ts": 1800.0,
            "contentKey": "labas|phrases",
            "_qstat": {"red": 1},
        }
    )

    assert payload.id == "a1"
    assert payload.phrase == "Labas"
    assert payload.translation == "Hello"
    assert payload.phonetic == "LAH-bahs"
    assert payload.status == "🟢"
    assert payload.sheet == "Phrases"
    assert payload.updated_at == 1700
    assert payload.deleted is True
    assert payload.deleted_at == 1800
    assert payload.content_key == "labas|phrases"
    assert payload.quiz_stats == {"red": 1}


def test_canonical_keys_are_accepted() -> None:
    payload = PhrasePayload.model_validate(
        {"id": "a1", "phrase": "Labas", "updatedAt": 5, "deletedAt": 6, "deleted": True}
    )

    assert payload.phrase == "Labas"
    assert payload.updated_at == 5
    assert payload.deleted_at == 6


def test_lenient_values_are_coerced_instead_of_rejected() -> None:
    payload = PhrasePayload.model_validate(
        {
            "_id": 7,
            "Lithuanian": 42,
            "_ts": "yesterday",
            "_deleted": 1,
            "contentKey": "  ",
            "_qstat": [1, 2],
            "unknown": "ignored",
        }
    )

    assert payload.id == "7"
    assert payload.phrase == "42"
    assert payload.updated_at is None
    assert payload.deleted is False
    assert payload.content_key is None
    assert payload.quiz_stats is None


def test_blank_id_becomes_none() -> None:
    assert PhrasePayload.model_validate({"_id": "   "}).id is None


@pytest.mark.parametrize(
    "raw",
    [
        {},
        {"pick": "local", "fields": {"English": "remote"}},
        {"pick": "sideways"},
        {"fields": {"English": "maybe"}},
    ],
)
def test_resolution_payload_rejects_malformed_shapes(raw: dict[str, object]) -> None:
    with pytest.raises(ValidationError):
        ResolutionPayload.model_validate(raw)


@pytest.mark.parametrize("raw", [float("inf"), float("-inf"), float("nan"), "1e999", "NaN"])
def test_non_finite_timestamps_count_as_missing(raw: object) -> None:
    payload = PhrasePayload.model_validate({"_id": "a", "_ts": raw, "_deleted_ts": raw})

    assert payload.updated_at is None
    assert payload.deleted_at is None


def test_non_finite_json_literals_still_yield_records() -> None:
    items = json.loads('[{"_id": "a", "_ts": Infinity}, {"_id": "b", "_ts": NaN}]')

    records = records_from_payload(items)

    assert [record.updated_at for record in records] == [None, None]
