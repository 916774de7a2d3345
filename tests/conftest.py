from __future__ import annotations

import os
from typing import TYPE_CHECKING

import pytest
from sqlalchemy import create_engine

from phrasemerge.adapters.sqlalchemy import SqlAlchemyUnitOfWork, shutdown, startup

os.environ.setdefault("DATABASE_URI", "sqlite+pysqlite:///:memory:")

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator
    from pathlib import Path

    from sqlalchemy.engine import Engine


@pytest.fixture(autouse=True)
def _clean_merge_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("PHRASEMERGE_CONCURRENCY_WINDOW_MS", raising=False)
    monkeypatch.delenv("PHRASEMERGE_COLLAPSE_DUPLICATES", raising=False)
    monkeypatch.delenv("PHRASEMERGE_DB_FILENAME", raising=False)
    monkeypatch.delenv("PHRASEMERGE_LOG_LEVEL", raising=False)


@pytest.fixture
def sqlite_engine(tmp_path: Path) -> Iterator[Engine]:
    engine = create_engine(f"sqlite+pysqlite:///{tmp_path / 'library.db'}", future=True)
    try:
        yield engine
    finally:
        engine.dispose()


@pytest.fixture
def sqlite_unit_of_work(
    sqlite_engine: Engine,
) -> Iterator[Callable[[], SqlAlchemyUnitOfWork]]:
    startup(engine=sqlite_engine, force=True)

    def factory() -> SqlAlchemyUnitOfWork:
        return SqlAlchemyUnitOfWork()

    try:
        yield factory
    finally:
        shutdown()
