"""JSON store for task and resource records."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from field_scheduler.schema import duplicate_resource_ids, validate_resource, validate_task
from field_scheduler.types import Resource, ScheduleInputError

TASKS_KEY = "tasks"
RESOURCES_KEY = "resources"


def _read_json(path: Path) -> Any:
    with open(path, encoding="utf-8") as f:
        return json.load(f)


def _unwrap(data: Any, key: str | None, source: str) -> list[dict[str, Any]]:
    if isinstance(data, dict) and key is not None and key in data:
        data = data[key]
    if not isinstance(data, list):
        raise ScheduleInputError(source, ["expected a JSON list of records"])
    return data


def load_records(path: str | Path, key: str | None = None) -> list[dict[str, Any]]:
    """Load a JSON list of records.

    The file may hold the list itself or an object wrapping it under `key`:
    [ {...}, ... ]  or  { "tasks": [ {...}, ... ] }
    """
    path = Path(path)
    return _unwrap(_read_json(path), key, path.name)


def load_resources(path: str | Path) -> list[Resource]:
    """Load and validate resource records. Raises ScheduleInputError."""
    path = Path(path)
    records = load_records(path, key=RESOURCES_KEY)

    errors: list[str] = []
    for i, record in enumerate(records):
        errors.extend(validate_resource(record, i))
    if errors:
        raise ScheduleInputError(path.name, errors)

    resources = [Resource.from_record(r) for r in records]
    errors = duplicate_resource_ids(r.resource_id for r in resources)
    if errors:
        raise ScheduleInputError(path.name, errors)
    return resources


def load_task_store(path: str | Path) -> tuple[Any, list[dict[str, Any]]]:
    """Load the task store as (document, records).

    document is the parsed file as-is. For a wrapped store the records list
    is the same object as document["tasks"], so edits to the records show up
    in the document. Pass the document back to save_tasks to keep any
    sibling keys.
    """
    path = Path(path)
    document = _read_json(path)
    records = _unwrap(document, TASKS_KEY, path.name)

    errors: list[str] = []
    for i, record in enumerate(records):
        errors.extend(validate_task(record, i))
    if errors:
        raise ScheduleInputError(path.name, errors)
    return document, records


def load_tasks(path: str | Path) -> list[dict[str, Any]]:
    """Load and validate task records. Records stay plain dicts so that
    unknown fields survive the write-back untouched."""
    return load_task_store(path)[1]


def save_tasks(
    path: str | Path,
    records: list[dict[str, Any]],
    document: Any = None,
) -> None:
    """Write task records back as 2-space indented JSON.

    With a wrapped document from load_task_store, the records replace its
    "tasks" entry and every other key is written back unchanged. Otherwise
    the bare list is written.
    """
    path = Path(path)
    data: Any = records
    if isinstance(document, dict):
        data = dict(document)
        data[TASKS_KEY] = records

    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(data, f, indent=2)
        f.write("\n")
