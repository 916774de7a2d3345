"""Facade composing the merge stages under one policy.

The engine holds no state besides its policy, so one instance can be shared freely.
Stages are injectable to let callers (and tests) swap a stage without re-wiring the rest.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from .apply import apply_resolutions
from .merge import merge_collections
from .policy import DEFAULT_POLICY, MergePolicy

if TYPE_CHECKING:
    from phrasemerge.domain.model import PhraseRecord

    from .contracts import Conflict, MergeResult, ResolutionsByKey

type MergeStage = Callable[..., MergeResult]
type ApplyStage = Callable[
    [Iterable[PhraseRecord], Iterable[Conflict], ResolutionsByKey], list[PhraseRecord]
]


@dataclass(frozen=True, slots=True)
class MergeEngine:
    """Run a merge and, optionally, the resolution pass that follows review."""

    policy: MergePolicy = DEFAULT_POLICY
    merge_stage: MergeStage = field(default=merge_collections)
    apply_stage: ApplyStage = field(default=apply_resolutions)

    def merge(
        self,
        local: Iterable[PhraseRecord],
        remote: Iterable[PhraseRecord],
    ) -> MergeResult:
        return self.merge_stage(local, remote, policy=self.policy)

    def resolve(
        self,
        result: MergeResult,
        resolutions: ResolutionsByKey,
    ) -> list[PhraseRecord]:
        if not result.conflicts or not resolutions:
            return list(result.merged)
        return self.apply_stage(result.merged, result.conflicts, resolutions)

    def run(
        self,
        local: Iterable[PhraseRecord],
        remote: Iterable[PhraseRecord],
        resolutions: ResolutionsByKey | None = None,
    ) -> tuple[MergeResult, list[PhraseRecord]]:
        """Merge both sides and apply ``resolutions`` (if any) to the result."""

        result = self.merge(local, remote)
        return result, self.resolve(result, resolutions or {})
