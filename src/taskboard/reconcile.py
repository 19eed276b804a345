"""Command-line repair pass for assignment inconsistencies.

Usage::

    taskboard-reconcile            # report only
    taskboard-reconcile --apply    # write the repairs
"""

import argparse
import asyncio
import logging

from taskboard.application.services import AssignmentSynchronizer, ReconcileReport
from taskboard.application.settings import Settings, app_settings, configure_logging
from taskboard.infrastructure import TASKS_COLLECTION, USERS_COLLECTION, close_db, connect_db, get_collection

log = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="taskboard-reconcile",
        description="Repair mismatches between task assignments and users' pendingTasks.",
    )
    parser.add_argument("--apply", action="store_true", help="write the repairs (default: dry run)")
    parser.add_argument("--database", default=None, help="database name (default: DATABASE_NAME setting)")
    parser.add_argument("--log-level", default=None, help="logging level (default: LOG_LEVEL setting)")
    return parser


async def run_async(settings: Settings, apply: bool) -> ReconcileReport:
    await connect_db(settings)
    try:
        synchronizer = AssignmentSynchronizer(get_collection(USERS_COLLECTION), get_collection(TASKS_COLLECTION))
        return await synchronizer.reconcile_async(dry_run=not apply)
    finally:
        await close_db()


def format_report(report: ReconcileReport) -> str:
    mode = "dry run" if report.dry_run else "applied"
    lines = [
        f"Reconciliation ({mode}): scanned {report.users_scanned} user(s), {report.tasks_scanned} task(s)",
        f"  stale pendingTasks entries removed: {report.stale_pending_removed}",
        f"  missing pendingTasks entries added: {report.missing_pending_added}",
        f"  orphaned tasks unassigned:          {report.orphaned_tasks_unassigned}",
        f"  stale assignee names refreshed:     {report.stale_names_refreshed}",
        f"  total:                              {report.total_repairs}",
    ]
    return "\n".join(lines)


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    overrides = {"database_name": args.database} if args.database else {}
    settings = app_settings.model_copy(update=overrides)
    configure_logging(args.log_level or settings.log_level)

    report = asyncio.run(run_async(settings, args.apply))
    print(format_report(report))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
