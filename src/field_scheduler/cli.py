"""Command-line entry point: schedule a task store for one day."""

from __future__ import annotations

import argparse
import logging
import os
import sys
from datetime import date, datetime

from field_scheduler.config import SchedulerConfig, load_config
from field_scheduler.debug import show_schedules
from field_scheduler.loaders import load_resources, load_task_store, save_tasks
from field_scheduler.resolution import resolve_tz
from field_scheduler.runner import schedule_all

logger = logging.getLogger("field_scheduler")


def _parse_date(value: str) -> date:
    try:
        return date.fromisoformat(value)
    except ValueError as e:
        raise argparse.ArgumentTypeError(f"invalid date {value!r}, expected YYYY-MM-DD") from e


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="field-scheduler",
        description="Place floating tasks around fixed appointments for each resource.",
    )
    ap.add_argument("--tasks", required=True, help="Task store JSON (read, and written back unless --out)")
    ap.add_argument("--resources", required=True, help="Resource JSON with shifts and home locations")
    ap.add_argument("--date", type=_parse_date, default=None, help="Scheduling day YYYY-MM-DD (default: today in --tz)")
    ap.add_argument("--config", default=None, help="Scheduler config JSON")
    ap.add_argument(
        "--tz",
        default=os.getenv("FIELD_SCHEDULER_TZ"),
        help="Scheduling timezone, overrides config (default: env FIELD_SCHEDULER_TZ)",
    )
    ap.add_argument("--status", default=None, help="Eligible taskStatus, overrides config")
    ap.add_argument("--out", default=None, help="Write scheduled tasks here instead of --tasks")
    ap.add_argument("--workers", type=int, default=None, help="Schedule resources on N threads")
    ap.add_argument("--show", action="store_true", help="Print an ASCII timeline per resource")
    ap.add_argument("--dry-run", action="store_true", help="Compute but do not write the task store")
    ap.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return ap


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        config = load_config(args.config) if args.config else SchedulerConfig()
        config = config.with_overrides(timezone=args.tz, eligible_status=args.status)
        tz = resolve_tz(config.timezone)
        day = args.date or datetime.now(tz).date()

        resources = load_resources(args.resources)
        store, tasks = load_task_store(args.tasks)
    except (OSError, ValueError) as e:
        print(f"field-scheduler: {e}", file=sys.stderr)
        return 2

    schedules = schedule_all(
        resources, tasks, day, config,
        max_workers=args.workers, write=not args.dry_run,
    )

    if args.show:
        show_schedules(schedules)

    if args.dry_run:
        logger.info("Dry run: %s not written", args.out or args.tasks)
        return 0

    save_tasks(args.out or args.tasks, tasks, store)
    logger.info("Tasks scheduled, written to %s", args.out or args.tasks)
    return 0


if __name__ == "__main__":
    sys.exit(main())
