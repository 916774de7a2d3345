"""SQLAlchemy table metadata for the local phrase library."""

from __future__ import annotations

from typing import Any

from sqlalchemy import (
    JSON,
    BigInteger,
    Boolean,
    Column,
    Index,
    Integer,
    MetaData,
    String,
    Table,
    Text,
)

from phrasemerge.domain.model import PhraseField, PhraseRecord

metadata = MetaData()

# ``row_id`` is a surrogate key: collections may legitimately hold duplicate record ids
phrase_table = Table(
    "phrases",
    metadata,
    Column("row_id", Integer, primary_key=True, autoincrement=True),
    Column("position", Integer, nullable=False),
    Column("id", String(64), nullable=False),
    *(Column(field.value, Text, nullable=True) for field in PhraseField),
    Column("updated_at", BigInteger, nullable=False, default=0),
    Column("deleted", Boolean, nullable=False, default=False),
    Column("deleted_at", BigInteger, nullable=True),
    Column("content_key", String(512), nullable=False, default=""),
    Column("quiz_stats", JSON, nullable=True),
    Index("ix_phrases_id", "id"),
    Index("ix_phrases_content_key", "content_key"),
)


def record_to_row(record: PhraseRecord, *, position: int) -> dict[str, Any]:
    row: dict[str, Any] = {field.value: record.value_of(field) for field in PhraseField}
    row.update(
        position=position,
        id=record.id,
        updated_at=record.edited_at,
        deleted=record.deleted,
        deleted_at=record.deleted_at,
        content_key=record.content_key,
        quiz_stats=dict(record.quiz_stats) if record.quiz_stats is not None else None,
    )
    return row


def row_to_record(row: Any) -> PhraseRecord:
    mapping = row._mapping  # noqa: SLF001
    return PhraseRecord(
        id=mapping["id"],
        updated_at=mapping["updated_at"],
        deleted=bool(mapping["deleted"]),
        deleted_at=mapping["deleted_at"],
        content_key=mapping["content_key"] or "",
        quiz_stats=mapping["quiz_stats"],
        **{field.value: mapping[field.value] for field in PhraseField},
    )
