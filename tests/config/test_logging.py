from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import pytest

from phrasemerge.config import ConfigurationError, configure_logging
from phrasemerge.config.logging import log_level_from_env

if TYPE_CHECKING:
    from collections.abc import Iterator


@pytest.fixture(autouse=True)
def restore_logger_levels() -> Iterator[None]:
    root = logging.getLogger()
    engine_logger = logging.getLogger("sqlalchemy.engine")
    previous = (root.level, engine_logger.level)
    yield
    root.setLevel(previous[0])
    engine_logger.setLevel(previous[1])


def test_log_level_defaults_to_info(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("PHRASEMERGE_LOG_LEVEL", raising=False)

    assert log_level_from_env() == logging.INFO


def test_log_level_reads_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("PHRASEMERGE_LOG_LEVEL", "Warning")

    assert log_level_from_env() == logging.WARNING


def test_unknown_log_level_raises(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("PHRASEMERGE_LOG_LEVEL", "loud")

    with pytest.raises(ConfigurationError, match="PHRASEMERGE_LOG_LEVEL"):
        log_level_from_env()


def test_sql_echo_only_at_debug(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("PHRASEMERGE_LOG_LEVEL", raising=False)

    configure_logging()
    assert logging.getLogger("sqlalchemy.engine").level == logging.WARNING

    configure_logging(level=logging.DEBUG)
    assert logging.getLogger("sqlalchemy.engine").level == logging.INFO
