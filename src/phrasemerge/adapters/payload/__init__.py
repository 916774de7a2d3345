"""JSON payload adapter for phrase collections."""

from __future__ import annotations

from .io import dump_json, load_records, load_resolutions
from .schema import PhrasePayload, ResolutionPayload
from .translator import (
    PayloadError,
    ResolutionFormatError,
    conflict_to_payload,
    record_from_payload,
    record_to_payload,
    records_from_payload,
    resolutions_from_payload,
    stats_to_payload,
)

__all__ = [
    "PayloadError",
    "PhrasePayload",
    "ResolutionFormatError",
    "ResolutionPayload",
    "conflict_to_payload",
    "dump_json",
    "load_records",
    "load_resolutions",
    "record_from_payload",
    "record_to_payload",
    "records_from_payload",
    "resolutions_from_payload",
    "stats_to_payload",
]
