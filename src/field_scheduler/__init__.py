"""field-scheduler: per-resource day scheduling of field tasks around fixed appointments."""

from field_scheduler.classify import classify_task
from field_scheduler.config import SchedulerConfig, load_config
from field_scheduler.geo import haversine_km, travel_minutes
from field_scheduler.greedy import (
    ScheduleCursor,
    fill_window,
    fill_windows,
    pin_appointment,
    schedule_resource,
    sequence_overflow,
)
from field_scheduler.resolution import SchedulingDay, parse_clock
from field_scheduler.runner import partition_by_resource, schedule_all
from field_scheduler.types import (
    AppointmentEvent,
    FloatingTask,
    Resource,
    ResourceSchedule,
    ScheduledSlot,
    ScheduleInputError,
    Window,
)
from field_scheduler.windows import build_windows
from field_scheduler.writer import write_schedule

__all__ = [
    "AppointmentEvent",
    "FloatingTask",
    "Resource",
    "ResourceSchedule",
    "ScheduleCursor",
    "ScheduleInputError",
    "ScheduledSlot",
    "SchedulerConfig",
    "SchedulingDay",
    "Window",
    "build_windows",
    "classify_task",
    "fill_window",
    "fill_windows",
    "haversine_km",
    "load_config",
    "parse_clock",
    "partition_by_resource",
    "pin_appointment",
    "schedule_all",
    "schedule_resource",
    "sequence_overflow",
    "travel_minutes",
    "write_schedule",
]
