"""Task classification: eligibility, appointment vs floating, field coercion."""

from __future__ import annotations

import logging
import math
from datetime import timedelta
from typing import Any, Iterable

from field_scheduler.config import SchedulerConfig
from field_scheduler.resolution import SchedulingDay, parse_iso
from field_scheduler.types import AppointmentEvent, ClassifiedTask, FloatingTask

logger = logging.getLogger(__name__)

# Input fields that may carry an appointment's start, in order of preference.
APPOINTMENT_START_FIELDS = ("appointmentStartDate", "startDate")


def is_eligible(record: dict[str, Any], status: str) -> bool:
    return record.get("taskStatus") == status


def coerce_duration(value: Any, default: float = 60) -> float:
    """Minutes from a raw duration. Absent, non-numeric or non-positive -> default."""
    if value is None or isinstance(value, bool):
        return default
    try:
        minutes = float(value)
    except (TypeError, ValueError):
        return default
    if not math.isfinite(minutes) or minutes <= 0:
        return default
    return minutes


def coerce_coordinate(value: Any) -> float | None:
    """Float coordinate, or None when missing, zero or unparseable."""
    if value is None or isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(number) or number == 0:
        return None
    return number


def is_appointment_record(record: dict[str, Any]) -> bool:
    """Flagged as a fixed appointment by commitmentType or appointmentStartDate."""
    commitment = str(record.get("commitmentType") or "").lower()
    return commitment == "appointment" or bool(record.get("appointmentStartDate"))


def _raw_appointment_start(record: dict[str, Any]) -> Any:
    for key in APPOINTMENT_START_FIELDS:
        if record.get(key):
            return record[key]
    return None


def classify_task(
    record: dict[str, Any],
    day: SchedulingDay,
    config: SchedulerConfig,
) -> ClassifiedTask:
    """Classify one eligible record as AppointmentEvent or FloatingTask.

    An appointment-flagged record whose start cannot be parsed falls back
    to FloatingTask with fallback_reason set. It is still scheduled, but
    wherever there is room rather than at a fixed time.
    """
    task_id = str(record.get("taskId"))
    duration = coerce_duration(
        record.get("estimatedDuration"), config.default_duration_minutes
    )
    lat = coerce_coordinate(record.get("lat"))
    lng = coerce_coordinate(record.get("lng"))

    if not is_appointment_record(record):
        return FloatingTask(task_id, duration, lat, lng, record)

    raw_start = _raw_appointment_start(record)
    parsed = parse_iso(raw_start)
    if parsed is None:
        reason = f"unparseable appointment start {raw_start!r}"
        logger.warning(
            "Task %s: %s, scheduling as floating task", task_id, reason
        )
        return FloatingTask(task_id, duration, lat, lng, record, fallback_reason=reason)

    start = day.localize(parsed)
    if not day.is_same_day(start):
        logger.warning(
            "Task %s: appointment on %s anchored by time of day on %s",
            task_id, start.date().isoformat(), day.day.isoformat(),
        )
    start_minutes = day.minutes_of_day(start)
    return AppointmentEvent(
        task_id=task_id,
        start=start,
        end=start + timedelta(minutes=duration),
        start_minutes=start_minutes,
        end_minutes=start_minutes + duration,
        duration_minutes=duration,
        lat=lat,
        lng=lng,
        record=record,
    )


def split_tasks(
    records: Iterable[dict[str, Any]],
    day: SchedulingDay,
    config: SchedulerConfig,
) -> tuple[list[AppointmentEvent], list[FloatingTask]]:
    """Classify records. Appointments sorted by start, floating tasks in input order."""
    appointments: list[AppointmentEvent] = []
    floating: list[FloatingTask] = []
    for record in records:
        classified = classify_task(record, day, config)
        if isinstance(classified, AppointmentEvent):
            appointments.append(classified)
        else:
            floating.append(classified)
    return sorted_appointments(appointments), floating


def sorted_appointments(events: Iterable[AppointmentEvent]) -> list[AppointmentEvent]:
    """Ascending by start datetime. Stable for equal starts."""
    return sorted(events, key=lambda e: e.start)
