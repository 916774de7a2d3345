"""JSON file helpers for phrase collections and resolution maps."""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING, Any

from phrasemerge.adapters.payload.translator import (
    records_from_payload,
    resolutions_from_payload,
)

if TYPE_CHECKING:
    from pathlib import Path

    from phrasemerge.domain.model import PhraseRecord
    from phrasemerge.domain.reconciliation import Resolution

log = logging.getLogger(__name__)

# wrapper keys used by exports of the phrase app
_COLLECTION_KEYS = ("phrases", "rows", "records")


def load_json(path: Path) -> Any:
    with path.open(encoding="utf-8") as handle:
        return json.load(handle)


def load_records(path: Path) -> list[PhraseRecord]:
    """Read a phrase collection from a JSON list or a ``{"phrases": [...]}`` wrapper."""

    document = load_json(path)
    if isinstance(document, dict):
        for key in _COLLECTION_KEYS:
            if isinstance(document.get(key), list):
                document = document[key]
                break
    if not isinstance(document, list):
        raise ValueError(f"{path} does not contain a list of phrase records")
    records = records_from_payload(document)
    log.debug("Loaded %s records from %s", len(records), path)
    return records


def load_resolutions(path: Path) -> dict[str, Resolution]:
    document = load_json(path)
    if not isinstance(document, dict):
        raise ValueError(f"{path} does not contain a resolution map")
    return resolutions_from_payload(document)


def dump_json(document: Any, path: Path) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8") as handle:
        json.dump(document, handle, ensure_ascii=False, indent=2)
        handle.write("\n")
