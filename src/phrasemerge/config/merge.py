"""Merge engine tuning loaded from the environment."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Final

from phrasemerge.domain.reconciliation.policy import DEFAULT_CONCURRENCY_WINDOW_MS, MergePolicy

from .env import env_flag, env_int

WINDOW_ENV_VAR: Final[str] = "PHRASEMERGE_CONCURRENCY_WINDOW_MS"
COLLAPSE_ENV_VAR: Final[str] = "PHRASEMERGE_COLLAPSE_DUPLICATES"


@dataclass(frozen=True, slots=True)
class MergeConfig:
    concurrency_window_ms: int = DEFAULT_CONCURRENCY_WINDOW_MS
    collapse_duplicates: bool = False

    def to_policy(self) -> MergePolicy:
        return MergePolicy(
            concurrency_window=self.concurrency_window_ms,
            collapse_duplicates=self.collapse_duplicates,
        )


def get_merge_config() -> MergeConfig:
    return MergeConfig(
        concurrency_window_ms=env_int(
            WINDOW_ENV_VAR, default=DEFAULT_CONCURRENCY_WINDOW_MS, minimum=0
        ),
        collapse_duplicates=env_flag(COLLAPSE_ENV_VAR),
    )
