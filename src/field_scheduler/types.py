"""Shared types: resources, classified tasks, windows and schedule records."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Literal, Union

from field_scheduler.resolution import SchedulingDay, parse_clock

SlotKind = Literal["appointment", "window", "overflow"]


@dataclass(frozen=True)
class Resource:
    """A schedulable agent. Read-only input to the scheduler."""

    resource_id: str
    shift_start: str
    shift_end: str
    home_lat: float | None = None
    home_lng: float | None = None

    @property
    def shift_start_minutes(self) -> int:
        return parse_clock(self.shift_start)

    @property
    def shift_end_minutes(self) -> int:
        return parse_clock(self.shift_end)

    @classmethod
    def from_record(cls, record: dict[str, Any]) -> Resource:
        """Build from a store record ('resourceId', 'shiftStart', ...)."""
        from field_scheduler.classify import coerce_coordinate

        return cls(
            resource_id=str(record["resourceId"]),
            shift_start=record["shiftStart"],
            shift_end=record["shiftEnd"],
            home_lat=coerce_coordinate(record.get("homeLat")),
            home_lng=coerce_coordinate(record.get("homeLng")),
        )


@dataclass
class FloatingTask:
    """A task with no fixed time, placed wherever it fits.

    fallback_reason is set when the record was flagged as an appointment
    but its start time could not be parsed.
    """

    task_id: str
    duration_minutes: float
    lat: float | None
    lng: float | None
    record: dict[str, Any] = field(repr=False)
    fallback_reason: str | None = None


@dataclass(frozen=True)
class AppointmentEvent:
    """A fixed appointment with a parsed, localized start.

    start_minutes / end_minutes are the time-of-day on the scheduling day.
    """

    task_id: str
    start: datetime
    end: datetime
    start_minutes: float
    end_minutes: float
    duration_minutes: float
    lat: float | None
    lng: float | None
    record: dict[str, Any] = field(repr=False, compare=False)


ClassifiedTask = Union[AppointmentEvent, FloatingTask]


@dataclass(frozen=True)
class Window:
    """Free time [start, end) in minutes from midnight, closed by an appointment.

    The trailing window (closed by shift end) has appointment=None.
    Overlapping appointments produce windows with start > end.
    """

    index: int
    start: float
    end: float
    appointment: AppointmentEvent | None = None

    @property
    def length(self) -> float:
        return self.end - self.start

    @property
    def is_open(self) -> bool:
        """Whether any positive-length task could fit at all."""
        return self.length > 0

    @property
    def is_trailing(self) -> bool:
        return self.appointment is None


@dataclass(frozen=True)
class ScheduledSlot:
    """Immutable record of one committed placement.

    Invariants:
        - finish_minutes - start_minutes == duration_minutes
        - kind == "window" implies window_index is not None
    """

    task_id: str
    kind: SlotKind
    start_minutes: float
    finish_minutes: float
    start: datetime
    finish: datetime
    travel_minutes: float = 0.0
    window_index: int | None = None
    record: dict[str, Any] | None = field(default=None, repr=False, compare=False)

    @property
    def duration_minutes(self) -> float:
        return self.finish_minutes - self.start_minutes


@dataclass
class ResourceSchedule:
    """Outcome of one resource's run. Nothing is written until the writer runs."""

    resource: Resource
    day: SchedulingDay
    windows: list[Window]
    slots: list[ScheduledSlot] = field(default_factory=list)

    @property
    def resource_id(self) -> str:
        return self.resource.resource_id

    @property
    def overflow_slots(self) -> list[ScheduledSlot]:
        return [s for s in self.slots if s.kind == "overflow"]

    @property
    def overrun_minutes(self) -> float:
        """Minutes the latest finish runs past shift end (0 if none)."""
        finishes = [s.finish_minutes for s in self.slots if s.kind != "appointment"]
        if not finishes:
            return 0.0
        return max(0.0, max(finishes) - self.resource.shift_end_minutes)

    @property
    def overflowed(self) -> bool:
        """Whether any floating task finishes after shift end."""
        return self.overrun_minutes > 0

    def slot_for(self, task_id: str) -> ScheduledSlot | None:
        for slot in self.slots:
            if slot.task_id == task_id:
                return slot
        return None


class ScheduleInputError(ValueError):
    """Raised when task, resource or config records fail validation."""

    def __init__(self, source: str, errors: list[str]) -> None:
        self.source = source
        self.errors = errors
        super().__init__(
            f"Validation errors in {source}:\n"
            + "\n".join(f"  - {e}" for e in errors)
        )
