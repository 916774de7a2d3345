from __future__ import annotations

import argparse
import json
import logging
import sys
from dataclasses import replace
from pathlib import Path
from signal import SIGINT, signal
from typing import TYPE_CHECKING, Any

from dotenv import load_dotenv

from phrasemerge.adapters.payload import (
    conflict_to_payload,
    dump_json,
    load_records,
    load_resolutions,
    record_to_payload,
    stats_to_payload,
)
from phrasemerge.app import (
    SyncOutcome,
    export_library,
    merge_files,
    restore_library,
    sync_library,
)
from phrasemerge.config import ConfigurationError, configure_logging, get_merge_config

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence
    from types import FrameType

    from phrasemerge.domain.reconciliation import Conflict, MergePolicy, ResolutionsByKey

log = logging.getLogger(__name__)


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Merge offline phrase libraries")
    parser.add_argument(
        "--window-ms",
        type=int,
        default=None,
        help="Edits closer than this are treated as concurrent (defaults to config)",
    )
    parser.add_argument(
        "--collapse-duplicates",
        action="store_true",
        help="Pre-merge records sharing an id or content key within one collection",
    )
    parser.add_argument("--verbose", action="store_true", help="Log merge decisions")
    subparsers = parser.add_subparsers(dest="command", required=True)

    merge = subparsers.add_parser("merge", help="Merge two JSON phrase exports")
    merge.add_argument("local", type=Path, help="Local collection (JSON)")
    merge.add_argument("remote", type=Path, help="Remote collection (JSON)")
    merge.add_argument("--resolutions", type=Path, help="Resolution map (JSON)")
    merge.add_argument("--output", type=Path, help="Write the result here instead of stdout")

    sync = subparsers.add_parser("sync", help="Merge a remote export into the local library")
    sync.add_argument("remote", type=Path, help="Remote collection (JSON)")
    sync.add_argument("--resolutions", type=Path, help="Resolution map (JSON)")
    sync.add_argument(
        "--conflicts-output",
        type=Path,
        help="Write unresolved conflicts here for review",
    )
    sync.add_argument(
        "--dry-run",
        action="store_true",
        help="Report what would change without persisting",
    )

    restore = subparsers.add_parser("import", help="Replace the local library with a JSON file")
    restore.add_argument("source", type=Path, help="Collection to import (JSON)")

    export = subparsers.add_parser("export", help="Dump the local library as JSON")
    export.add_argument("--output", type=Path, help="Write here instead of stdout")

    return parser.parse_args(list(argv))


def _resolve_policy(args: argparse.Namespace) -> MergePolicy:
    policy = get_merge_config().to_policy()
    if args.window_ms is not None:
        if args.window_ms < 0:
            raise ValueError("--window-ms must be non-negative")
        policy = replace(policy, concurrency_window=args.window_ms)
    if args.collapse_duplicates:
        policy = replace(policy, collapse_duplicates=True)
    return policy


def _outcome_document(outcome: SyncOutcome) -> dict[str, Any]:
    return {
        "merged": [record_to_payload(record) for record in outcome.records],
        "conflicts": [conflict_to_payload(conflict) for conflict in outcome.result.conflicts],
        "stats": stats_to_payload(outcome.result.stats),
    }


def _unresolved_conflicts(
    conflicts: Iterable[Conflict],
    resolutions: ResolutionsByKey,
) -> list[Conflict]:
    return [conflict for conflict in conflicts if conflict.key not in resolutions]


def _emit(document: object, output: Path | None) -> None:
    if output is not None:
        dump_json(document, output)
        log.info("Wrote %s", output)
        return
    print(json.dumps(document, ensure_ascii=False, indent=2))  # noqa: T201


def main(argv: Sequence[str] | None = None) -> None:
    """Main application entry point."""
    args_list = list(argv) if argv is not None else list(sys.argv[1:])
    try:
        configure_logging()
        parsed_args = _parse_args(args_list)
        policy = _resolve_policy(parsed_args)
    except (ValueError, ConfigurationError):
        log.exception("CLI validation error")
        sys.exit(2)

    if parsed_args.verbose:
        configure_logging(level=logging.DEBUG, force=True)

    try:
        if parsed_args.command == "merge":
            outcome = merge_files(
                parsed_args.local,
                parsed_args.remote,
                resolutions_path=parsed_args.resolutions,
                policy=policy,
            )
            _emit(_outcome_document(outcome), parsed_args.output)
        elif parsed_args.command == "sync":
            resolutions = (
                load_resolutions(parsed_args.resolutions) if parsed_args.resolutions else None
            )
            outcome = sync_library(
                load_records(parsed_args.remote),
                resolutions=resolutions,
                policy=policy,
                dry_run=parsed_args.dry_run,
            )
            if parsed_args.conflicts_output is not None:
                pending = _unresolved_conflicts(outcome.result.conflicts, resolutions or {})
                dump_json(
                    [conflict_to_payload(conflict) for conflict in pending],
                    parsed_args.conflicts_output,
                )
                log.info(
                    "Wrote %s unresolved conflict(s) to %s",
                    len(pending),
                    parsed_args.conflicts_output,
                )
            log.info("Sync stats: %s", stats_to_payload(outcome.result.stats))
        elif parsed_args.command == "import":
            count = restore_library(load_records(parsed_args.source))
            log.info("Imported %s records", count)
        elif parsed_args.command == "export":
            records = export_library()
            _emit([record_to_payload(record) for record in records], parsed_args.output)
        else:
            raise ValueError(f"Unsupported command: {parsed_args.command}")  # noqa: TRY301

    except Exception:
        log.exception("Fatal error during %s", parsed_args.command)
        sys.exit(1)


def sigint_handler(_signal_received: int, _frame: FrameType | None) -> None:
    """Handle SIGINT (Ctrl+C) gracefully."""
    log.info("Closed by user (Ctrl+C)")
    sys.exit(0)


def run() -> None:
    """Console-script entry point: load ``.env`` and install the SIGINT handler."""
    load_dotenv()
    signal(SIGINT, sigint_handler)
    main()


if __name__ == "__main__":
    run()
