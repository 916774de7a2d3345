"""Ports for persisting the local phrase library."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Sequence

    from phrasemerge.domain.model import PhraseRecord


@runtime_checkable
class PhraseRepository(Protocol):
    """Persistence contract for the device-local phrase collection."""

    def list_all(self) -> list[PhraseRecord]: ...

    def get(self, record_id: str) -> PhraseRecord | None: ...

    def replace_all(self, records: Sequence[PhraseRecord]) -> None: ...
