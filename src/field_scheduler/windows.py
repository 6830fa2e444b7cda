"""Free-time windows between shift boundaries and fixed appointments."""

from __future__ import annotations

from field_scheduler.types import AppointmentEvent, Window


def build_windows(
    shift_start: float,
    shift_end: float,
    appointments: list[AppointmentEvent],
) -> list[Window]:
    """Build N+1 windows for N appointments sorted by start.

    [shift_start, a1.start), [a1.end, a2.start), ..., [aN.end, shift_end].
    Window i is closed by appointment i; the last one by shift end.
    Overlapping appointments give a window with start > end, which is
    kept as-is and simply fits nothing.
    """
    windows: list[Window] = []
    start = shift_start
    for i, appt in enumerate(appointments):
        windows.append(Window(i, start, appt.start_minutes, appt))
        start = appt.end_minutes
    windows.append(Window(len(appointments), start, shift_end, None))
    return windows
