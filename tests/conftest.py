"""Shared test fixtures and data loading for field-scheduler.

All test data lives in data/fixtures/ as JSON files.  This module loads
that data and exposes helper functions + pytest fixtures for the tests.

Reference day: Mon 2025-01-06, UTC.
"""

from __future__ import annotations

import copy
import json
from datetime import date
from pathlib import Path

import pytest

# ---------------------------------------------------------------------------
# Paths
# ---------------------------------------------------------------------------
FIXTURES_DIR = Path(__file__).resolve().parent.parent / "data" / "fixtures"
SCENARIOS_DIR = FIXTURES_DIR / "scenarios"
STORE_DIR = FIXTURES_DIR / "store"


# ---------------------------------------------------------------------------
# Data loaders
# ---------------------------------------------------------------------------
def _load_json(path: Path):
    with open(path) as f:
        return json.load(f)


_reference = _load_json(FIXTURES_DIR / "reference.json")


# ---------------------------------------------------------------------------
# Reference constants derived from reference.json
# ---------------------------------------------------------------------------
DAY = date.fromisoformat(_reference["day"])
TIMEZONE = _reference["timezone"]
ELIGIBLE = _reference["eligible_status"]


# ---------------------------------------------------------------------------
# Convenience helpers (importable by test modules)
# ---------------------------------------------------------------------------
def minutes(label: str) -> int:
    """Minutes from midnight for an 'HH:MM' label.

    >>> minutes("08:30")
    510
    """
    h, m = label.split(":")
    return int(h) * 60 + int(m)


def iso(label: str) -> str:
    """ISO timestamp the writer produces for 'HH:MM' on the reference day.

    >>> iso("08:00")
    '2025-01-06T08:00:00+00:00'
    """
    return f"{DAY.isoformat()}T{label}:00+00:00"


def make_config(**overrides):
    from field_scheduler.config import SchedulerConfig

    return SchedulerConfig(eligible_status=ELIGIBLE, timezone=TIMEZONE).with_overrides(
        **overrides
    )


def make_day():
    from field_scheduler.resolution import SchedulingDay, resolve_tz

    return SchedulingDay(DAY, resolve_tz(TIMEZONE))


def make_resource(
    resource_id: str = "R1",
    shift_start: str = "08:00 AM",
    shift_end: str = "05:00 PM",
    home_lat: float | None = None,
    home_lng: float | None = None,
):
    from field_scheduler.types import Resource

    return Resource(resource_id, shift_start, shift_end, home_lat, home_lng)


def task(task_id: str, employee_id: str = "R1", **fields) -> dict:
    """Eligible task record for employee_id with the given extra fields."""
    record = {"taskId": task_id, "employeeId": employee_id, "taskStatus": ELIGIBLE}
    record.update(fields)
    return record


def appointment(task_id: str, at: str, duration: int = 60, **fields) -> dict:
    """Eligible appointment record starting at 'HH:MM' on the reference day."""
    return task(
        task_id,
        appointmentStartDate=f"{DAY.isoformat()}T{at}:00",
        estimatedDuration=duration,
        **fields,
    )


# ---------------------------------------------------------------------------
# Scenario loader
# ---------------------------------------------------------------------------
def load_scenarios(name: str):
    """Load a scenario file from data/fixtures/scenarios/{name}.json."""
    return _load_json(SCENARIOS_DIR / f"{name}.json")


def scenario_records(spec: dict) -> list[dict]:
    """Fresh task records for a scenario, defaulting owner and status."""
    records = copy.deepcopy(spec["tasks"])
    for record in records:
        record.setdefault("employeeId", spec["resource"]["resourceId"])
        record.setdefault("taskStatus", ELIGIBLE)
    return records


def load_store(name: str):
    """Deep copy of a store file from data/fixtures/store/{name}.json."""
    return copy.deepcopy(_load_json(STORE_DIR / f"{name}.json"))


# ---------------------------------------------------------------------------
# pytest fixtures
# ---------------------------------------------------------------------------
@pytest.fixture
def config():
    return make_config()


@pytest.fixture
def day():
    return make_day()


@pytest.fixture
def resource():
    return make_resource()


@pytest.fixture
def store_files(tmp_path):
    """Writable copies of the sample task and resource stores."""
    tasks_path = tmp_path / "tasks.json"
    resources_path = tmp_path / "resources.json"
    tasks_path.write_text(json.dumps(load_store("tasks"), indent=2))
    resources_path.write_text(json.dumps(load_store("resources"), indent=2))
    return tasks_path, resources_path
