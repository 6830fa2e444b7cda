"""Per-resource scheduler: greedy window filling plus overflow sequencing.

Floating tasks are taken strictly in input order. Each window is filled
from the front of the queue until the head task no longer fits; the head
then blocks the window and waits for the next one. Whatever is left after
the last window is sequenced back-to-back with no upper bound.

This is not an optimiser. Nothing is re-ordered and no travel distance
is minimised.
"""

from __future__ import annotations

import logging
from collections import deque
from dataclasses import dataclass
from typing import Any, Iterable

from field_scheduler.classify import is_eligible, split_tasks
from field_scheduler.config import SchedulerConfig
from field_scheduler.geo import travel_minutes
from field_scheduler.resolution import SchedulingDay, format_clock
from field_scheduler.types import (
    AppointmentEvent,
    FloatingTask,
    Resource,
    ResourceSchedule,
    ScheduledSlot,
    SlotKind,
    Window,
)
from field_scheduler.windows import build_windows

logger = logging.getLogger(__name__)


@dataclass
class ScheduleCursor:
    """Next available time and last known location for one resource run."""

    minutes: float
    lat: float | None = None
    lng: float | None = None

    def move_to(self, minutes: float, lat: float | None, lng: float | None) -> None:
        """Advance time. Location changes only when both coordinates are known."""
        self.minutes = minutes
        if lat is not None and lng is not None:
            self.lat = lat
            self.lng = lng


def _tentative(
    task: FloatingTask,
    cursor: ScheduleCursor,
    shift_start: float,
    config: SchedulerConfig,
) -> tuple[float, float, float]:
    """(travel, start, end) if task were placed at the cursor."""
    travel = travel_minutes(
        cursor.lat, cursor.lng, task.lat, task.lng, config.average_speed_kmh
    )
    start = max(cursor.minutes + travel, shift_start)
    return travel, start, start + task.duration_minutes


def _commit(
    task: FloatingTask,
    cursor: ScheduleCursor,
    travel: float,
    start: float,
    end: float,
    day: SchedulingDay,
    kind: SlotKind,
    window_index: int | None,
) -> ScheduledSlot:
    cursor.move_to(end, task.lat, task.lng)
    logger.debug(
        "  %s %s-%s (%s, travel %.1f min)",
        task.task_id, format_clock(start), format_clock(end), kind, travel,
    )
    return ScheduledSlot(
        task_id=task.task_id,
        kind=kind,
        start_minutes=start,
        finish_minutes=end,
        start=day.to_datetime(start),
        finish=day.to_datetime(end),
        travel_minutes=travel,
        window_index=window_index,
        record=task.record,
    )


def fill_window(
    window: Window,
    queue: deque[FloatingTask],
    cursor: ScheduleCursor,
    shift_start: float,
    day: SchedulingDay,
    config: SchedulerConfig,
) -> list[ScheduledSlot]:
    """Commit queued tasks into one window, front first, until the head blocks.

    Mutates queue (pops committed tasks) and cursor. A window of zero or
    negative length commits nothing.
    """
    slots: list[ScheduledSlot] = []
    if not window.is_open:
        return slots

    while queue:
        task = queue[0]
        travel, start, end = _tentative(task, cursor, shift_start, config)
        if end > window.end:
            break
        queue.popleft()
        slots.append(
            _commit(task, cursor, travel, start, end, day, "window", window.index)
        )
    return slots


def pin_appointment(
    appt: AppointmentEvent,
    window_index: int,
    cursor: ScheduleCursor,
) -> ScheduledSlot:
    """Fix an appointment at its original bounds and move the cursor past it."""
    cursor.move_to(appt.end_minutes, appt.lat, appt.lng)
    return ScheduledSlot(
        task_id=appt.task_id,
        kind="appointment",
        start_minutes=appt.start_minutes,
        finish_minutes=appt.end_minutes,
        start=appt.start,
        finish=appt.end,
        window_index=window_index,
        record=appt.record,
    )


def sequence_overflow(
    queue: deque[FloatingTask],
    cursor: ScheduleCursor,
    shift_start: float,
    day: SchedulingDay,
    config: SchedulerConfig,
) -> list[ScheduledSlot]:
    """Drain the queue back-to-back with travel. No end bound: may pass shift end."""
    slots: list[ScheduledSlot] = []
    while queue:
        task = queue.popleft()
        travel, start, end = _tentative(task, cursor, shift_start, config)
        slots.append(_commit(task, cursor, travel, start, end, day, "overflow", None))
    return slots


def fill_windows(
    windows: list[Window],
    floating: Iterable[FloatingTask],
    cursor: ScheduleCursor,
    shift_start: float,
    day: SchedulingDay,
    config: SchedulerConfig,
) -> list[ScheduledSlot]:
    """Visit windows in order, filling each and then pinning its appointment.

    Returns every slot in commit order, overflow included.
    """
    queue: deque[FloatingTask] = deque(floating)
    slots: list[ScheduledSlot] = []

    for window in windows:
        slots.extend(fill_window(window, queue, cursor, shift_start, day, config))
        if window.appointment is not None:
            slots.append(pin_appointment(window.appointment, window.index, cursor))

    slots.extend(sequence_overflow(queue, cursor, shift_start, day, config))
    return slots


def schedule_resource(
    resource: Resource,
    records: Iterable[dict[str, Any]],
    day: SchedulingDay,
    config: SchedulerConfig | None = None,
) -> ResourceSchedule | None:
    """Compute one resource's schedule for one day.

    Only records with the eligible status are considered; records are not
    mutated (see writer.write_schedule). Returns None when the resource has
    no eligible task.

    Args:
        resource: The resource whose shift and home location apply.
        records: Task records already partitioned to this resource.
        day: The scheduling day and timezone.
        config: Scheduler knobs; defaults to SchedulerConfig().
    """
    if config is None:
        config = SchedulerConfig()

    eligible = [r for r in records if is_eligible(r, config.eligible_status)]
    if not eligible:
        return None

    shift_start = resource.shift_start_minutes
    shift_end = resource.shift_end_minutes
    appointments, floating = split_tasks(eligible, day, config)
    windows = build_windows(shift_start, shift_end, appointments)

    logger.debug(
        "Resource %s: %d appointment(s), %d floating task(s), shift %s-%s",
        resource.resource_id, len(appointments), len(floating),
        format_clock(shift_start), format_clock(shift_end),
    )

    cursor = ScheduleCursor(shift_start, resource.home_lat, resource.home_lng)
    slots = fill_windows(windows, floating, cursor, shift_start, day, config)
    return ResourceSchedule(resource=resource, day=day, windows=windows, slots=slots)
