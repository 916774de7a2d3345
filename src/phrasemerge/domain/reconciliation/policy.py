"""Tunable knobs of the merge engine."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Final

DEFAULT_CONCURRENCY_WINDOW_MS: Final[int] = 10_000


@dataclass(frozen=True, slots=True, kw_only=True)
class MergePolicy:
    """Merge tuning passed explicitly into every engine call.

    ``concurrency_window``: edits whose timestamps differ by at most this many time units are
    treated as concurrent and the base record is picked by completeness instead of recency.

    ``collapse_duplicates``: pre-merge records that share an ``id`` or content key inside one
    collection before matching the two sides against each other.
    """

    concurrency_window: int = DEFAULT_CONCURRENCY_WINDOW_MS
    collapse_duplicates: bool = False

    def is_clearly_newer(self, first: int, second: int) -> bool:
        return first - second > self.concurrency_window


DEFAULT_POLICY: Final[MergePolicy] = MergePolicy()
