from __future__ import annotations

from phrasemerge.domain.model import FieldChoice, PhraseField
from phrasemerge.domain.reconciliation import (
    FieldResolution,
    MergeEngine,
    MergePolicy,
    merge_collections,
)
from tests.helpers.phrases import make_phrase


def test_run_without_resolutions_returns_merged_records() -> None:
    engine = MergeEngine()
    local = [make_phrase(id="a", phrase="Labas", category="Travel", updated_at=10)]
    remote = [make_phrase(id="a", phrase="Labas", category="Food", updated_at=20)]

    result, records = engine.run(local, remote)

    assert records == list(result.merged)
    assert len(result.conflicts) == 1


def test_run_applies_resolutions() -> None:
    engine = MergeEngine()
    local = [make_phrase(id="a", phrase="Labas", category="Travel", updated_at=10)]
    remote = [make_phrase(id="a", phrase="Labas", category="Food", updated_at=20)]

    _, records = engine.run(
        local,
        remote,
        {"a": FieldResolution(fields={PhraseField.CATEGORY: FieldChoice.LOCAL})},
    )

    assert records[0].category == "Travel"


def test_engine_passes_its_policy_to_the_merge_stage() -> None:
    seen: list[MergePolicy] = []

    def recording_merge(local, remote, *, policy):
        seen.append(policy)
        return merge_collections(local, remote, policy=policy)

    policy = MergePolicy(concurrency_window=0, collapse_duplicates=True)
    engine = MergeEngine(policy=policy, merge_stage=recording_merge)

    engine.merge([make_phrase(id="a", phrase="Labas")], [])

    assert seen == [policy]


def test_resolve_skips_apply_stage_without_conflicts() -> None:
    calls: list[object] = []

    def recording_apply(merged, conflicts, resolutions):
        calls.append(resolutions)
        return list(merged)

    engine = MergeEngine(apply_stage=recording_apply)
    result = engine.merge([make_phrase(id="a", phrase="Labas")], [])

    records = engine.resolve(
        result, {"a": FieldResolution(fields={PhraseField.PHRASE: FieldChoice.LOCAL})}
    )

    assert records == list(result.merged)
    assert calls == []
