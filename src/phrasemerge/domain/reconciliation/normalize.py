"""Bring records into the shape the merge stages rely on.

Responsibilities of this stage:
- synthesise a deterministic ``id`` when a record arrives without one
- default missing timestamps to ``0`` (the oldest possible edit)
- enforce the tombstone invariants (``deleted_at`` set iff ``deleted``)
- refresh the cached content key

Text fields are left untouched; meaningfulness is judged where values are compared.
"""

from __future__ import annotations

import logging
import uuid
from dataclasses import replace
from typing import TYPE_CHECKING, Final

from phrasemerge.domain.identity import with_content_key
from phrasemerge.domain.model import PhraseField

if TYPE_CHECKING:
    from collections.abc import Iterable

    from phrasemerge.domain.model import PhraseRecord

_SYNTHETIC_ID_NAMESPACE: Final[uuid.UUID] = uuid.UUID("4f0d3c8e-7a51-5b7e-9a41-2f7f1c0b6d3a")
log = logging.getLogger(__name__)


def normalize_record(record: PhraseRecord, *, salt: str = "") -> PhraseRecord:
    """Return ``record`` with identity, timestamp and tombstone defaults applied.

    ``salt`` distinguishes otherwise identical id-less records (for example their position
    in a collection); it only influences synthesised ids.
    """

    record_id = _clean_id(record.id)
    if record_id is None:
        record_id = synthesize_id(record, salt=salt)
        log.debug("Synthesised id=%s for record without id (salt=%s)", record_id, salt)

    updated_at = _clean_timestamp(record.updated_at)
    deleted = record.deleted is True
    deleted_at: int | None = None
    if deleted:
        deleted_at = _clean_timestamp(record.deleted_at, default=updated_at)

    normalized = replace(
        record,
        id=record_id,
        updated_at=updated_at,
        deleted=deleted,
        deleted_at=deleted_at,
    )
    return with_content_key(normalized)


def normalize_collection(records: Iterable[PhraseRecord], *, side: str) -> list[PhraseRecord]:
    return [
        normalize_record(record, salt=f"{side}:{index}") for index, record in enumerate(records)
    ]


def synthesize_id(record: PhraseRecord, *, salt: str = "") -> str:
    """Derive a stable id from the record content so repeated runs agree."""

    parts = [salt, str(record.updated_at), str(record.deleted_at)]
    parts.extend(str(record.value_of(field) or "") for field in PhraseField)
    return str(uuid.uuid5(_SYNTHETIC_ID_NAMESPACE, "\x1f".join(parts)))


def _clean_id(value: object) -> str | None:
    if not isinstance(value, str):
        return None
    stripped = value.strip()
    return stripped or None


def _clean_timestamp(value: object, *, default: int = 0) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        return default
    return value
