from __future__ import annotations

import pytest

from phrasemerge.adapters.payload import (
    PayloadError,
    ResolutionFormatError,
    conflict_to_payload,
    record_to_payload,
    records_from_payload,
    resolutions_from_payload,
    stats_to_payload,
)
from phrasemerge.domain.model import FieldChoice, PhraseField, Side
from phrasemerge.domain.reconciliation import (
    FieldResolution,
    MergeStats,
    PickResolution,
    merge_collections,
)
from tests.helpers.phrases import make_phrase


def test_records_from_payload_builds_phrase_records() -> None:
    records = records_from_payload(
        [
            {"_id": "a", "Lithuanian": "Labas", "_ts": 100, "contentKey": "labas"},
            {"Lithuanian": "Ačiū", "_deleted": False, "_deleted_ts": 50},
        ]
    )

    assert records[0].id == "a"
    assert records[0].updated_at == 100
    assert records[0].content_key == "labas"
    assert records[1].id is None
    assert records[1].content_key == ""
    # deletion time without a tombstone is dropped
    assert records[1].deleted_at is None


def test_records_from_payload_reports_failing_index() -> None:
    with pytest.raises(PayloadError) as excinfo:
        records_from_payload([{"_id": "a"}, "not a record"])

    assert excinfo.value.index == 1


def test_record_to_payload_uses_storage_keys() -> None:
    record = make_phrase(id="a", phrase="Labas", translation="Hello", updated_at=5)

    payload = record_to_payload(record)

    assert payload["_id"] == "a"
    assert payload["Lithuanian"] == "Labas"
    assert payload["English"] == "Hello"
    assert payload["Notes"] == ""
    assert payload["_ts"] == 5
    assert payload["_deleted"] is False
    assert payload["_deleted_ts"] is None
    assert payload["contentKey"] == "labas"
    assert "_qstat" not in payload


def test_conflict_to_payload_lists_field_differences() -> None:
    result = merge_collections(
        [make_phrase(id="a", phrase="Labas", category="Travel", updated_at=10)],
        [make_phrase(id="a", phrase="Labas", category="Food", updated_at=20)],
    )

    payload = conflict_to_payload(result.conflicts[0])

    assert payload["type"] == "field_conflict"
    assert payload["key"] == "a"
    assert payload["local"]["Category"] == "Travel"
    assert payload["fields"] == [
        {"field": "category", "local": "Travel", "remote": "Food", "chosen": "Food"}
    ]


def test_delete_conflict_payload_has_no_fields() -> None:
    result = merge_collections(
        [make_phrase(id="a", phrase="Labas", deleted=True, deleted_at=1)],
        [make_phrase(id="a", phrase="Labas", updated_at=20)],
    )

    payload = conflict_to_payload(result.conflicts[0])

    assert payload["type"] == "delete_vs_edit"
    assert "fields" not in payload


def test_stats_to_payload_is_a_plain_mapping() -> None:
    stats = MergeStats(local_count=2, conflicts=1)

    payload = stats_to_payload(stats)

    assert payload["local_count"] == 2
    assert payload["conflicts"] == 1
    assert payload["collapsed_duplicates"] == 0


def test_resolutions_accept_canonical_and_legacy_words() -> None:
    resolutions = resolutions_from_payload(
        {
            "a": {"type": "delete_vs_edit", "pick": "cloud"},
            "b": {"type": "field_conflict", "fields": {"English": "local", "category": "chosen"}},
            "c": {"pick": "local"},
        }
    )

    assert resolutions["a"] == PickResolution(pick=Side.REMOTE)
    assert resolutions["b"] == FieldResolution(
        fields={PhraseField.TRANSLATION: FieldChoice.LOCAL, PhraseField.CATEGORY: FieldChoice.AUTO}
    )
    assert resolutions["c"] == PickResolution(pick=Side.LOCAL)


def test_resolutions_reject_unknown_fields() -> None:
    with pytest.raises(ResolutionFormatError, match="Unknown field"):
        resolutions_from_payload({"a": {"fields": {"Colour": "local"}}})


def test_resolutions_reject_malformed_entries() -> None:
    with pytest.raises(ResolutionFormatError, match="'a'"):
        resolutions_from_payload({"a": "local"})
