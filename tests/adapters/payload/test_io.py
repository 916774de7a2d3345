from __future__ import annotations

import json
from typing import TYPE_CHECKING

import pytest

from phrasemerge.adapters.payload import dump_json, load_records, load_resolutions
from phrasemerge.domain.model import Side
from phrasemerge.domain.reconciliation import PickResolution

if TYPE_CHECKING:
    from pathlib import Path


def _write(path: Path, document: object) -> Path:
    path.write_text(json.dumps(document), encoding="utf-8")
    return path


def test_load_records_reads_plain_list(tmp_path: Path) -> None:
    path = _write(tmp_path / "local.json", [{"_id": "a", "Lithuanian": "Labas"}])

    records = load_records(path)

    assert [record.phrase for record in records] == ["Labas"]


@pytest.mark.parametrize("wrapper", ["phrases", "rows", "records"])
def test_load_records_unwraps_exports(tmp_path: Path, wrapper: str) -> None:
    path = _write(tmp_path / "export.json", {wrapper: [{"_id": "a"}, {"_id": "b"}]})

    records = load_records(path)

    assert [record.id for record in records] == ["a", "b"]


def test_load_records_rejects_non_collections(tmp_path: Path) -> None:
    path = _write(tmp_path / "broken.json", {"something": "else"})

    with pytest.raises(ValueError, match="list of phrase records"):
        load_records(path)


def test_load_resolutions(tmp_path: Path) -> None:
    path = _write(tmp_path / "resolutions.json", {"a": {"pick": "local"}})

    assert load_resolutions(path) == {"a": PickResolution(pick=Side.LOCAL)}


def test_load_resolutions_rejects_lists(tmp_path: Path) -> None:
    path = _write(tmp_path / "resolutions.json", [])

    with pytest.raises(ValueError, match="resolution map"):
        load_resolutions(path)


def test_dump_json_creates_parents_and_keeps_unicode(tmp_path: Path) -> None:
    path = tmp_path / "out" / "merged.json"

    dump_json([{"Lithuanian": "Ačiū"}], path)

    text = path.read_text(encoding="utf-8")
    assert "Ačiū" in text
    assert json.loads(text) == [{"Lithuanian": "Ačiū"}]
