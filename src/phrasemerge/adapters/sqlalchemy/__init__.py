"""SQLAlchemy persistence for the local phrase library."""

from __future__ import annotations

from .mappings import metadata, phrase_table
from .repositories import SqlAlchemyPhraseRepository
from .unit_of_work import (
    SqlAlchemyUnitOfWork,
    StartupError,
    is_started,
    shutdown,
    startup,
)

__all__ = [
    "SqlAlchemyPhraseRepository",
    "SqlAlchemyUnitOfWork",
    "StartupError",
    "is_started",
    "metadata",
    "phrase_table",
    "shutdown",
    "startup",
]
