"""Domain enums (pure, dependency-light)."""

from __future__ import annotations

from enum import StrEnum


class PhraseField(StrEnum):
    """Content attributes of a phrase record, in reconciliation order."""

    TRANSLATION = "translation"
    PHRASE = "phrase"
    PHONETIC = "phonetic"
    CATEGORY = "category"
    USAGE = "usage"
    NOTES = "notes"
    STATUS = "status"
    SHEET = "sheet"


class Side(StrEnum):
    LOCAL = "local"
    REMOTE = "remote"


class FieldChoice(StrEnum):
    """Per-field user decision; ``AUTO`` keeps the engine's own pick."""

    LOCAL = "local"
    REMOTE = "remote"
    AUTO = "auto"


class ConflictKind(StrEnum):
    DELETE_VS_EDIT = "delete_vs_edit"
    FIELD_CONFLICT = "field_conflict"
