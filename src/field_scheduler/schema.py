"""Input validation for resource, task and config records."""

from __future__ import annotations

import math
from collections import Counter
from typing import Any, Iterable

from field_scheduler.resolution import parse_clock, resolve_tz

_CONFIG_FIELDS = {
    "eligible_status": str,
    "default_duration_minutes": (int, float),
    "average_speed_kmh": (int, float),
    "timezone": str,
}


def _is_number_or_blank(value: Any) -> bool:
    if value is None or value == "":
        return True
    if isinstance(value, bool):
        return False
    try:
        return math.isfinite(float(value))
    except (TypeError, ValueError):
        return False


def validate_resource(record: Any, index: int = 0) -> list[str]:
    """Validate one resource record. Returns list of error messages (empty = valid).

    Checks:
    - resourceId is present
    - shiftStart / shiftEnd parse as 'H:MM AM/PM'
    - homeLat / homeLng are numeric when given
    """
    if not isinstance(record, dict):
        return [f"Resource {index}: expected an object, got {type(record).__name__}"]

    errors: list[str] = []
    label = f"Resource {record.get('resourceId', index)!s}"

    if record.get("resourceId") in (None, ""):
        errors.append(f"Resource {index}: missing 'resourceId'")

    for key in ("shiftStart", "shiftEnd"):
        if key not in record:
            errors.append(f"{label}: missing '{key}'")
            continue
        try:
            parse_clock(record[key])
        except ValueError as e:
            errors.append(f"{label}: {key} - {e}")

    for key in ("homeLat", "homeLng"):
        if not _is_number_or_blank(record.get(key)):
            errors.append(f"{label}: {key} must be numeric, got {record[key]!r}")

    return errors


def validate_task(record: Any, index: int = 0) -> list[str]:
    """Validate one task record.

    Only structural problems are errors. Bad durations, coordinates and
    appointment dates degrade at scheduling time instead.
    """
    if not isinstance(record, dict):
        return [f"Task {index}: expected an object, got {type(record).__name__}"]

    errors: list[str] = []
    if record.get("taskId") in (None, ""):
        errors.append(f"Task {index}: missing 'taskId'")
    return errors


def validate_config(data: dict[str, Any]) -> list[str]:
    """Validate a config mapping against SchedulerConfig fields."""
    errors: list[str] = []

    for key, value in data.items():
        expected = _CONFIG_FIELDS.get(key)
        if expected is None:
            errors.append(f"Unknown config key: {key}")
            continue
        if isinstance(value, bool) or not isinstance(value, expected):
            errors.append(f"{key}: wrong type {type(value).__name__}")

    for key in ("default_duration_minutes", "average_speed_kmh"):
        value = data.get(key)
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            if not math.isfinite(value) or value <= 0:
                errors.append(f"{key}: must be a positive number, got {value}")

    tz_name = data.get("timezone")
    if isinstance(tz_name, str):
        try:
            resolve_tz(tz_name)
        except ValueError as e:
            errors.append(f"timezone: {e}")

    return errors


def duplicate_resource_ids(resource_ids: Iterable[str]) -> list[str]:
    """One message per resourceId that appears more than once."""
    counts = Counter(resource_ids)
    return [
        f"Resource {rid}: duplicate resourceId ({n} entries)"
        for rid, n in counts.items()
        if n > 1
    ]
