"""Boundary: clock strings, ISO dates and minutes-from-midnight."""

from __future__ import annotations

import math
import re
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta, tzinfo
from zoneinfo import ZoneInfo

_CLOCK_RE = re.compile(r"^\s*(\d{1,2}):(\d{2})\s*([AaPp][Mm])\s*$")

MINUTES_PER_DAY = 24 * 60


def parse_clock(s: str) -> int:
    """Parse 'H:MM AM/PM' to minutes since midnight.

    '12:00 AM' is midnight, '12:30 PM' is 750.
    Raises ValueError if the string is not a 12-hour clock time.
    """
    match = _CLOCK_RE.match(s) if isinstance(s, str) else None
    if match is None:
        raise ValueError(f"invalid clock time {s!r}, expected 'H:MM AM/PM'")

    hour = int(match.group(1))
    minute = int(match.group(2))
    period = match.group(3).upper()
    if not 1 <= hour <= 12 or minute > 59:
        raise ValueError(f"invalid clock time {s!r}, out of range")

    if period == "PM" and hour != 12:
        hour += 12
    if period == "AM" and hour == 12:
        hour = 0
    return hour * 60 + minute


def format_clock(minutes: float) -> str:
    """Render minutes since midnight as 'HH:MM' (24h). Used in logs and debug output."""
    whole = round_minutes(minutes)
    sign = "-" if whole < 0 else ""
    whole = abs(whole)
    return f"{sign}{whole // 60:02d}:{whole % 60:02d}"


def round_minutes(minutes: float) -> int:
    """Round half-up to a whole minute."""
    return int(math.floor(minutes + 0.5))


def parse_iso(value: object) -> datetime | None:
    """Parse an ISO-8601 date or datetime string. Returns None if unparseable.

    A trailing 'Z' is accepted as UTC.
    """
    if isinstance(value, datetime):
        return value
    if not isinstance(value, str) or not value.strip():
        return None
    text = value.strip()
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    try:
        return datetime.fromisoformat(text)
    except ValueError:
        return None


def resolve_tz(name: str) -> tzinfo:
    """Resolve an IANA zone name. Raises ValueError for unknown zones."""
    try:
        return ZoneInfo(name)
    except (KeyError, ValueError) as e:
        raise ValueError(f"unknown timezone {name!r}") from e


@dataclass(frozen=True)
class SchedulingDay:
    """One calendar day in one timezone. Converts minutes <-> datetimes.

    All scheduler arithmetic is in float minutes from local midnight.
    Datetimes leave and enter only through this class.
    """

    day: date
    tz: tzinfo

    @property
    def midnight(self) -> datetime:
        return datetime.combine(self.day, time(0, 0), tzinfo=self.tz)

    def to_datetime(self, minutes: float) -> datetime:
        """Wall-clock datetime for minutes from midnight, rounded to the minute."""
        return self.midnight + timedelta(minutes=round_minutes(minutes))

    def localize(self, dt: datetime) -> datetime:
        """Aware datetime in this day's timezone. Naive input is taken as local."""
        if dt.tzinfo is None:
            return dt.replace(tzinfo=self.tz)
        return dt.astimezone(self.tz)

    def minutes_of_day(self, dt: datetime) -> float:
        """Time-of-day of dt (in this timezone) as minutes from its own midnight.

        The calendar date is discarded: the scheduler works inside one day.
        """
        local = self.localize(dt)
        return local.hour * 60 + local.minute + local.second / 60

    def is_same_day(self, dt: datetime) -> bool:
        return self.localize(dt).date() == self.day
