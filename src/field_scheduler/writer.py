"""Commit computed start/finish timestamps onto task records."""

from __future__ import annotations

from datetime import datetime

from field_scheduler.types import ResourceSchedule

START_FIELD = "expectedStartDate"
FINISH_FIELD = "expectedFinishDate"


def format_timestamp(dt: datetime) -> str:
    """ISO-8601 with seconds precision, e.g. '2025-01-06T08:00:00+00:00'."""
    return dt.isoformat(timespec="seconds")


def write_schedule(schedule: ResourceSchedule) -> int:
    """Write expectedStartDate / expectedFinishDate onto each slot's record.

    Overwrites previous values, so writing the same schedule twice leaves
    the records unchanged. Returns the number of records written.
    """
    written = 0
    for slot in schedule.slots:
        if slot.record is None:
            continue
        slot.record[START_FIELD] = format_timestamp(slot.start)
        slot.record[FINISH_FIELD] = format_timestamp(slot.finish)
        written += 1
    return written
