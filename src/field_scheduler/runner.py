"""Batch run: every resource scheduled independently, then written."""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from datetime import date
from typing import Any, Iterable

from field_scheduler.classify import is_eligible
from field_scheduler.config import SchedulerConfig
from field_scheduler.greedy import schedule_resource
from field_scheduler.resolution import SchedulingDay, format_clock
from field_scheduler.schema import duplicate_resource_ids
from field_scheduler.types import Resource, ResourceSchedule, ScheduleInputError
from field_scheduler.writer import write_schedule

logger = logging.getLogger(__name__)


def partition_by_resource(
    records: Iterable[dict[str, Any]],
    status: str,
) -> dict[str, list[dict[str, Any]]]:
    """Group eligible records by employeeId, keeping input order."""
    groups: dict[str, list[dict[str, Any]]] = {}
    for record in records:
        if not is_eligible(record, status):
            continue
        owner = record.get("employeeId")
        if owner is None:
            continue
        groups.setdefault(str(owner), []).append(record)
    return groups


def schedule_all(
    resources: list[Resource],
    records: list[dict[str, Any]],
    day: date,
    config: SchedulerConfig | None = None,
    max_workers: int | None = None,
    write: bool = True,
) -> list[ResourceSchedule]:
    """Schedule every resource and (unless write=False) write results back.

    Resources share no state, so with max_workers > 1 they run on a thread
    pool. All runs are joined before any record is written. Results are
    returned in resource order; resources with no eligible task are skipped.

    Raises ScheduleInputError if two resources share a resourceId, since
    both would schedule and write the same records.
    """
    errors = duplicate_resource_ids(r.resource_id for r in resources)
    if errors:
        raise ScheduleInputError("resources", errors)

    if config is None:
        config = SchedulerConfig()
    sched_day = SchedulingDay(day, config.tz)
    groups = partition_by_resource(records, config.eligible_status)

    known = {r.resource_id for r in resources}
    for owner in groups:
        if owner not in known:
            logger.warning(
                "%d eligible task(s) reference unknown resource %s, left untouched",
                len(groups[owner]), owner,
            )

    def run(resource: Resource) -> ResourceSchedule | None:
        return schedule_resource(
            resource, groups.get(resource.resource_id, []), sched_day, config
        )

    if max_workers is not None and max_workers > 1:
        with ThreadPoolExecutor(max_workers=max_workers) as pool:
            outcomes = list(pool.map(run, resources))
    else:
        outcomes = [run(r) for r in resources]

    schedules: list[ResourceSchedule] = []
    for resource, schedule in zip(resources, outcomes):
        if schedule is None:
            logger.debug("Resource %s: no eligible tasks, skipped", resource.resource_id)
            continue
        if schedule.overflowed:
            logger.warning(
                "Resource %s overloaded: %d task(s) overflow, finishing %.0f min "
                "after shift end %s",
                resource.resource_id, len(schedule.overflow_slots),
                schedule.overrun_minutes, format_clock(resource.shift_end_minutes),
            )
        schedules.append(schedule)

    if write:
        total = sum(write_schedule(s) for s in schedules)
        logger.info(
            "Scheduled %d task(s) across %d resource(s) for %s",
            total, len(schedules), day.isoformat(),
        )
    return schedules
