"""Scheduler configuration."""

from __future__ import annotations

import json
from dataclasses import asdict, dataclass, replace
from pathlib import Path
from typing import Any

from field_scheduler.resolution import resolve_tz

DEFAULT_ELIGIBLE_STATUS = "Assigned (ACT)"


@dataclass(frozen=True)
class SchedulerConfig:
    """Knobs owned by the caller. Immutable; use with_overrides() to derive."""

    eligible_status: str = DEFAULT_ELIGIBLE_STATUS
    default_duration_minutes: float = 60
    average_speed_kmh: float = 40.0
    timezone: str = "UTC"

    @property
    def tz(self):
        return resolve_tz(self.timezone)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> SchedulerConfig:
        """Build from a mapping. Raises ScheduleInputError on invalid values."""
        from field_scheduler.schema import validate_config
        from field_scheduler.types import ScheduleInputError

        errors = validate_config(data)
        if errors:
            raise ScheduleInputError("config", errors)
        known = {k: data[k] for k in asdict(cls()) if k in data}
        return cls(**known)

    def with_overrides(self, **changes: Any) -> SchedulerConfig:
        """Copy with the non-None changes applied."""
        return replace(self, **{k: v for k, v in changes.items() if v is not None})


def load_config(path: str | Path) -> SchedulerConfig:
    """Load a SchedulerConfig from a JSON file.

    Keys match the dataclass field names; unknown keys are rejected.
    """
    path = Path(path)
    with open(path) as f:
        data = json.load(f)
    if not isinstance(data, dict):
        from field_scheduler.types import ScheduleInputError

        raise ScheduleInputError(path.name, ["config must be a JSON object"])
    return SchedulerConfig.from_dict(data)
