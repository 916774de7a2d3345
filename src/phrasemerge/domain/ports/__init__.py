"""Ports the application layer uses to reach persistence."""

from __future__ import annotations

from .persistence import PhraseRepository
from .unit_of_work import PhraseUnitOfWork

__all__ = ["PhraseRepository", "PhraseUnitOfWork"]
