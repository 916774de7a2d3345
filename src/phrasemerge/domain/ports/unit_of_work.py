"""Unit-of-work abstraction around the phrase repository."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from types import TracebackType

    from phrasemerge.domain.ports.persistence import PhraseRepository


@runtime_checkable
class PhraseUnitOfWork(Protocol):
    """Transactional boundary: nothing is visible to other readers before ``commit``."""

    @property
    def phrases(self) -> PhraseRepository: ...

    def __enter__(self) -> PhraseUnitOfWork: ...

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_value: BaseException | None,
        traceback: TracebackType | None,
    ) -> bool: ...

    def commit(self) -> None: ...

    def rollback(self) -> None: ...
