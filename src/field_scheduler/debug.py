"""ASCII timeline for checking schedules by eye.

Used by the CLI's --show flag and in tests; not needed for scheduling.
"""

from __future__ import annotations

from field_scheduler.resolution import MINUTES_PER_DAY
from field_scheduler.types import ResourceSchedule

_LABEL_CHARS = "ABCDEFGHIJKLMNOPQRSTUVWXYZ0123456789"


def _check_resolution(minutes_per_char: int) -> None:
    if minutes_per_char <= 0 or 60 % minutes_per_char:
        raise ValueError(
            f"minutes_per_char must divide 60 evenly, got {minutes_per_char}"
        )


def _header(minutes_per_char: int) -> str:
    chars_per_hour = 60 // minutes_per_char
    return "".join(
        f"{h:02d}".ljust(chars_per_hour) if h % 3 == 0 else " " * chars_per_hour
        for h in range(24)
    )


def render_schedule(
    schedule: ResourceSchedule,
    minutes_per_char: int = 30,
) -> tuple[str, dict[str, str]]:
    """Build one timeline row. Returns (row, task_id -> label).

    '.' = off shift, '-' = free shift time, 'A'.. = task in shift,
    'a'.. = task running outside the shift (overflow or early appointment).
    Labels cycle after 36 tasks; the returned mapping is keyed by task id
    so every task stays in the legend.

    Raises ValueError unless minutes_per_char divides 60.
    """
    _check_resolution(minutes_per_char)
    chars = MINUTES_PER_DAY // minutes_per_char
    row = ["."] * chars
    shift_start = schedule.resource.shift_start_minutes
    shift_end = schedule.resource.shift_end_minutes

    for i in range(chars):
        cell_start = i * minutes_per_char
        if shift_start <= cell_start < shift_end:
            row[i] = "-"

    labels: dict[str, str] = {}
    for slot in schedule.slots:
        label = _LABEL_CHARS[len(labels) % len(_LABEL_CHARS)]
        labels[slot.task_id] = label
        first = max(0, int(slot.start_minutes // minutes_per_char))
        last = min(chars, int(-(-slot.finish_minutes // minutes_per_char)))
        for i in range(first, last):
            cell_start = i * minutes_per_char
            in_shift = shift_start <= cell_start < shift_end
            row[i] = label if in_shift else label.lower()

    return "".join(row), labels


def show_schedule(schedule: ResourceSchedule, minutes_per_char: int = 30) -> str:
    """Print the ASCII timeline for one resource, with a legend.

    Returns the string and also prints to stdout.
    """
    result = _format([schedule], minutes_per_char)
    print(result)
    return result


def show_schedules(
    schedules: list[ResourceSchedule],
    minutes_per_char: int = 30,
) -> str:
    """Print one timeline row per resource, each followed by its legend."""
    result = _format(schedules, minutes_per_char)
    print(result)
    return result


def _format(schedules: list[ResourceSchedule], minutes_per_char: int) -> str:
    _check_resolution(minutes_per_char)
    lines: list[str] = [f"{'':>16s}  {_header(minutes_per_char)}"]
    for schedule in schedules:
        row, labels = render_schedule(schedule, minutes_per_char)
        lines.append(f"{schedule.resource_id:>16s}  {row}")
        if labels:
            legend = ", ".join(f"{v}={k}" for k, v in labels.items())
            lines.append(f"{'':>16s}  {legend}")
    return "\n".join(lines)
