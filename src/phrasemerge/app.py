"""Application orchestration entry points."""

from __future__ import annotations

import threading
from collections.abc import Callable
from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING

from phrasemerge.adapters.payload import load_records, load_resolutions
from phrasemerge.adapters.sqlalchemy import SqlAlchemyUnitOfWork, is_started, startup
from phrasemerge.config import get_merge_config
from phrasemerge.domain.reconciliation import MergeEngine
from phrasemerge.domain.reconciliation.normalize import normalize_collection

if TYPE_CHECKING:
    from collections.abc import Iterable
    from pathlib import Path

    from phrasemerge.domain.model import PhraseRecord
    from phrasemerge.domain.ports import PhraseUnitOfWork
    from phrasemerge.domain.reconciliation import MergePolicy, MergeResult, ResolutionsByKey

type UnitOfWorkFactory = Callable[[], PhraseUnitOfWork]


log = getLogger(__name__)

# one merge-review-persist cycle at a time per process
_SYNC_LOCK = threading.Lock()


@dataclass(slots=True)
class SyncOutcome:
    """Merge result plus the records that were (or would be) persisted."""

    result: MergeResult
    records: list[PhraseRecord] = field(default_factory=list["PhraseRecord"])
    resolved: bool = False
    persisted: bool = False


def merge_records(
    local: Iterable[PhraseRecord],
    remote: Iterable[PhraseRecord],
    *,
    resolutions: ResolutionsByKey | None = None,
    policy: MergePolicy | None = None,
) -> SyncOutcome:
    """Merge two in-memory collections and apply ``resolutions`` when supplied."""

    engine = MergeEngine(policy=policy or get_merge_config().to_policy())
    result, records = engine.run(local, remote, resolutions)
    return SyncOutcome(result=result, records=records, resolved=bool(resolutions))


def merge_files(
    local_path: Path,
    remote_path: Path,
    *,
    resolutions_path: Path | None = None,
    policy: MergePolicy | None = None,
) -> SyncOutcome:
    """Merge two JSON phrase exports without touching the local library."""

    resolutions = load_resolutions(resolutions_path) if resolutions_path else None
    outcome = merge_records(
        load_records(local_path),
        load_records(remote_path),
        resolutions=resolutions,
        policy=policy,
    )
    _log_outcome("File merge", outcome)
    return outcome


def sync_library(
    remote: Iterable[PhraseRecord],
    *,
    resolutions: ResolutionsByKey | None = None,
    policy: MergePolicy | None = None,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
    dry_run: bool = False,
) -> SyncOutcome:
    """Merge ``remote`` into the local library and persist the result atomically.

    The stored library is replaced inside a single transaction; when anything fails before
    the commit, the previous local state stays untouched.
    """

    effective_uow = unit_of_work_factory or _default_unit_of_work_factory()
    with _SYNC_LOCK, effective_uow() as uow:
        local = uow.phrases.list_all()
        log.info("Starting library sync: local=%s, dry_run=%s", len(local), dry_run)
        outcome = merge_records(local, remote, resolutions=resolutions, policy=policy)

        if dry_run:
            uow.rollback()
        else:
            uow.phrases.replace_all(outcome.records)
            uow.commit()
            outcome.persisted = True

    _log_outcome("Library sync", outcome)
    return outcome


def restore_library(
    records: Iterable[PhraseRecord],
    *,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
) -> int:
    """Replace the local library with ``records`` (for example a backup export)."""

    normalized = normalize_collection(records, side="import")
    effective_uow = unit_of_work_factory or _default_unit_of_work_factory()
    with _SYNC_LOCK, effective_uow() as uow:
        uow.phrases.replace_all(normalized)
        uow.commit()
    log.info("Restored local library with %s records", len(normalized))
    return len(normalized)


def export_library(*, unit_of_work_factory: UnitOfWorkFactory | None = None) -> list[PhraseRecord]:
    effective_uow = unit_of_work_factory or _default_unit_of_work_factory()
    with effective_uow() as uow:
        return uow.phrases.list_all()


def _default_unit_of_work_factory() -> UnitOfWorkFactory:
    if not is_started():
        startup()
    return SqlAlchemyUnitOfWork


def _log_outcome(label: str, outcome: SyncOutcome) -> None:
    stats = outcome.result.stats
    log.info(
        f"Finished {label.lower()}: merged={stats.merged_count}, conflicts={stats.conflicts}, "
        f"by_id={stats.matched_by_id}, by_key={stats.matched_by_content_key}, "
        f"local_only={stats.created_from_local}, remote_only={stats.created_from_remote}, "
        f"tombstones={stats.deletions}, resolved={outcome.resolved}, "
        f"persisted={outcome.persisted}"
    )
