"""Translate between JSON payloads and the canonical merge engine types."""

from __future__ import annotations

from dataclasses import asdict
from typing import TYPE_CHECKING, Any, Final

from pydantic import ValidationError

from phrasemerge.adapters.payload.schema import PhrasePayload, ResolutionPayload
from phrasemerge.domain.model import FieldChoice, PhraseField, PhraseRecord, Side
from phrasemerge.domain.reconciliation import (
    FieldConflict,
    FieldResolution,
    PickResolution,
)

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping

    from phrasemerge.domain.reconciliation import Conflict, MergeStats, Resolution

LEGACY_FIELD_NAMES: Final[dict[PhraseField, str]] = {
    PhraseField.TRANSLATION: "English",
    PhraseField.PHRASE: "Lithuanian",
    PhraseField.PHONETIC: "Phonetic",
    PhraseField.CATEGORY: "Category",
    PhraseField.USAGE: "Usage",
    PhraseField.NOTES: "Notes",
    PhraseField.STATUS: "RAG Icon",
    PhraseField.SHEET: "Sheet",
}
_FIELD_BY_NAME: Final[dict[str, PhraseField]] = {
    **{field.value: field for field in PhraseField},
    **{name: field for field, name in LEGACY_FIELD_NAMES.items()},
}
_SIDE_WORDS: Final[dict[str, Side]] = {
    "local": Side.LOCAL,
    "remote": Side.REMOTE,
    "cloud": Side.REMOTE,
}
_CHOICE_WORDS: Final[dict[str, FieldChoice]] = {
    "local": FieldChoice.LOCAL,
    "remote": FieldChoice.REMOTE,
    "cloud": FieldChoice.REMOTE,
    "auto": FieldChoice.AUTO,
    "chosen": FieldChoice.AUTO,
}


class PayloadError(ValueError):
    """Raised when a payload item cannot be read as a phrase record."""

    def __init__(self, *, index: int, error: ValidationError) -> None:
        self.index = index
        self.error = error
        super().__init__(f"Invalid phrase payload at index {index}: {error}")


class ResolutionFormatError(ValueError):
    """Raised when a resolution map entry has an unknown shape or field name."""


def record_from_payload(payload: PhrasePayload) -> PhraseRecord:
    return PhraseRecord(
        id=payload.id,
        phrase=payload.phrase,
        translation=payload.translation,
        phonetic=payload.phonetic,
        category=payload.category,
        usage=payload.usage,
        notes=payload.notes,
        status=payload.status,
        sheet=payload.sheet,
        updated_at=payload.updated_at,
        deleted=payload.deleted,
        deleted_at=payload.deleted_at if payload.deleted else None,
        content_key=payload.content_key or "",
        quiz_stats=payload.quiz_stats,
    )


def records_from_payload(items: Iterable[object]) -> list[PhraseRecord]:
    """Validate raw JSON items and convert them into phrase records."""

    records: list[PhraseRecord] = []
    for index, item in enumerate(items):
        try:
            payload = PhrasePayload.model_validate(item)
        except ValidationError as exc:
            raise PayloadError(index=index, error=exc) from exc
        records.append(record_from_payload(payload))
    return records


def record_to_payload(record: PhraseRecord) -> dict[str, Any]:
    """Render ``record`` in the phrase app's storage shape."""

    payload: dict[str, Any] = {"_id": record.id}
    for field, name in LEGACY_FIELD_NAMES.items():
        payload[name] = record.value_of(field) or ""
    payload.update(
        {
            "_ts": record.edited_at,
            "_deleted": record.deleted,
            "_deleted_ts": record.deleted_at,
            "contentKey": record.content_key,
        }
    )
    if record.quiz_stats is not None:
        payload["_qstat"] = dict(record.quiz_stats)
    return payload


def conflict_to_payload(conflict: Conflict) -> dict[str, Any]:
    payload: dict[str, Any] = {
        "type": conflict.kind.value,
        "key": conflict.key,
        "reason": conflict.reason,
        "local": record_to_payload(conflict.local),
        "remote": record_to_payload(conflict.remote),
    }
    if isinstance(conflict, FieldConflict):
        payload["fields"] = [
            {
                "field": difference.field.value,
                "local": difference.local,
                "remote": difference.remote,
                "chosen": difference.chosen,
            }
            for difference in conflict.fields
        ]
    return payload


def stats_to_payload(stats: MergeStats) -> dict[str, int]:
    return asdict(stats)


def resolutions_from_payload(raw: Mapping[str, object]) -> dict[str, Resolution]:
    """Parse a ``{conflict key: choice}`` map produced by a review surface."""

    resolutions: dict[str, Resolution] = {}
    for key, value in raw.items():
        try:
            payload = ResolutionPayload.model_validate(value)
        except ValidationError as exc:
            raise ResolutionFormatError(f"Invalid resolution for key {key!r}: {exc}") from exc

        if payload.pick is not None:
            resolutions[key] = PickResolution(pick=_SIDE_WORDS[payload.pick])
            continue

        choices: dict[PhraseField, FieldChoice] = {}
        for name, word in (payload.fields or {}).items():
            field = _FIELD_BY_NAME.get(name)
            if field is None:
                raise ResolutionFormatError(
                    f"Unknown field {name!r} in resolution for key {key!r}"
                )
            choices[field] = _CHOICE_WORDS[word]
        resolutions[key] = FieldResolution(fields=choices)
    return resolutions
