"""Pydantic models describing phrase-library JSON payloads.

The phrase app has stored records under several spellings over time (``_id`` / ``id``,
``Lithuanian`` / ``phrase``, ``_ts`` / ``updatedAt`` ...). These models accept all of them
and are the only place that knows about the aliases.
"""

from __future__ import annotations

import math
from typing import Any, Literal

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator, model_validator

SideWord = Literal["local", "remote", "cloud"]
ChoiceWord = Literal["local", "remote", "cloud", "auto", "chosen"]


def _blank_to_none(value: object) -> object:
    if isinstance(value, str):
        stripped = value.strip()
        return stripped or None
    return value


def _number_to_text(value: object) -> object:
    if isinstance(value, bool):
        return str(value).lower()
    if isinstance(value, int | float):
        return str(value)
    return value


def _lenient_timestamp(value: object) -> int | None:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            value = float(value.strip())
        except ValueError:
            return None
    if isinstance(value, float):
        # NaN and infinities (json accepts both) count as missing
        return int(value) if math.isfinite(value) else None
    return None


class PayloadModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class PhrasePayload(PayloadModel):
    id: str | None = Field(default=None, validation_alias=AliasChoices("id", "_id"))

    phrase: str | None = Field(default=None, validation_alias=AliasChoices("phrase", "Lithuanian"))
    translation: str | None = Field(
        default=None, validation_alias=AliasChoices("translation", "English")
    )
    phonetic: str | None = Field(
        default=None, validation_alias=AliasChoices("phonetic", "Phonetic")
    )
    category: str | None = Field(
        default=None, validation_alias=AliasChoices("category", "Category")
    )
    usage: str | None = Field(default=None, validation_alias=AliasChoices("usage", "Usage"))
    notes: str | None = Field(default=None, validation_alias=AliasChoices("notes", "Notes"))
    status: str | None = Field(default=None, validation_alias=AliasChoices("status", "RAG Icon"))
    sheet: str | None = Field(default=None, validation_alias=AliasChoices("sheet", "Sheet"))

    updated_at: int | None = Field(
        default=None, validation_alias=AliasChoices("updated_at", "updatedAt", "_ts")
    )
    deleted: bool = Field(default=False, validation_alias=AliasChoices("deleted", "_deleted"))
    deleted_at: int | None = Field(
        default=None, validation_alias=AliasChoices("deleted_at", "deletedAt", "_deleted_ts")
    )
    content_key: str | None = Field(
        default=None, validation_alias=AliasChoices("content_key", "contentKey")
    )
    quiz_stats: dict[str, Any] | None = Field(
        default=None, validation_alias=AliasChoices("quiz_stats", "_qstat")
    )

    _normalize_id = field_validator("id", "content_key", mode="before")(_blank_to_none)
    _coerce_text = field_validator(
        "id",
        "phrase",
        "translation",
        "phonetic",
        "category",
        "usage",
        "notes",
        "status",
        "sheet",
        mode="before",
    )(_number_to_text)

    @field_validator("updated_at", "deleted_at", mode="before")
    @classmethod
    def _parse_timestamp(cls, value: object) -> int | None:
        return _lenient_timestamp(value)

    @field_validator("deleted", mode="before")
    @classmethod
    def _parse_tombstone(cls, value: object) -> bool:
        # only an explicit "true" marks a tombstone
        if isinstance(value, str):
            return value.strip().lower() == "true"
        return value is True

    @field_validator("quiz_stats", mode="before")
    @classmethod
    def _drop_non_mapping_stats(cls, value: object) -> object:
        return value if isinstance(value, dict) else None


class ResolutionPayload(PayloadModel):
    type: str | None = None
    pick: SideWord | None = None
    fields: dict[str, ChoiceWord] | None = None

    @model_validator(mode="after")
    def _require_one_shape(self) -> ResolutionPayload:
        if (self.pick is None) == (self.fields is None):
            raise ValueError("Resolution needs exactly one of 'pick' or 'fields'")
        return self
