"""Adapters from backend records to the canonical models.

The backend is not consistent about record shape: a time entry may embed its
project as ``project`` or ``projects`` (or only carry ``project_id``) and may
report its duration as ``minutes`` or as ``hours``. Everything above this
module works with ``Project`` and ``TimeEntry`` only.
"""

import datetime as dt
import logging
from decimal import Decimal, InvalidOperation
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, TypeVar

from pydantic import ValidationError

from timebudget.calculators.time_utils import hours_to_minutes
from timebudget.models.project import Project
from timebudget.models.time_entry import TimeEntry

logger = logging.getLogger(__name__)

T = TypeVar("T")

_PROJECT_FIELDS = (
    "id",
    "name",
    "city",
    "client_name",
    "billing_type",
    "default_rate_cents",
    "phase_budgets",
    "archived",
    "archived_at",
)


def _as_id(value: Any) -> Optional[str]:
    if value is None or value == "":
        return None
    return str(value)


def _embedded_project(record: Mapping[str, Any]) -> Optional[Mapping[str, Any]]:
    for key in ("project", "projects"):
        nested = record.get(key)
        if isinstance(nested, Mapping):
            return nested
        # one-to-many joins come back as a single-element list
        if isinstance(nested, list) and nested and isinstance(nested[0], Mapping):
            return nested[0]
    return None


def _coerce_budgets(raw: Any) -> Dict[str, int]:
    if not isinstance(raw, Mapping):
        return {}
    budgets: Dict[str, int] = {}
    for code, value in raw.items():
        if value is None or value == "":
            continue
        try:
            budgets[str(code)] = int(Decimal(str(value)))
        except (InvalidOperation, ValueError, OverflowError):
            logger.warning(f"Ignoring unusable budget {value!r} for phase {code}")
    return budgets


def project_from_record(record: Mapping[str, Any]) -> Project:
    """Build a ``Project`` from a backend record.

    Unknown keys are dropped; ``billing_type`` defaults to hourly and
    ``archived`` is derived from ``archived_at`` when absent.

    Raises:
        ValidationError: If required fields are missing or invalid
    """
    data = {key: record[key] for key in _PROJECT_FIELDS if key in record}
    data["id"] = _as_id(data.get("id"))

    if data.get("billing_type") not in ("hourly", "fixed"):
        data["billing_type"] = "hourly"
    if data.get("default_rate_cents") is None:
        data["default_rate_cents"] = 0
    data["phase_budgets"] = _coerce_budgets(data.get("phase_budgets"))
    if data.get("archived") is None:
        data["archived"] = data.get("archived_at") is not None

    return Project.model_validate(data)


def _entry_minutes(record: Mapping[str, Any]) -> Any:
    minutes = record.get("minutes")
    if minutes is not None and minutes != "":
        return minutes
    hours = record.get("hours")
    if hours is not None and hours != "":
        return hours_to_minutes(hours)
    return None


def _entry_date(value: Any) -> Any:
    # timestamps like "2024-09-20T00:00:00+00:00" keep their calendar day
    if isinstance(value, str) and len(value) > 10 and value[10] in "T ":
        return value[:10]
    if isinstance(value, dt.datetime):
        return value.date()
    return value


def time_entry_from_record(record: Mapping[str, Any]) -> TimeEntry:
    """Build a ``TimeEntry`` from a backend record.

    Raises:
        ValidationError: If required fields are missing or invalid
    """
    project_id = _as_id(record.get("project_id"))
    if project_id is None:
        nested = _embedded_project(record)
        if nested is not None:
            project_id = _as_id(nested.get("id"))

    phase_code = record.get("phase_code")
    if not phase_code and isinstance(record.get("phase"), Mapping):
        phase_code = record["phase"].get("code")

    return TimeEntry.model_validate(
        {
            "id": _as_id(record.get("id")),
            "project_id": project_id,
            "phase_code": phase_code,
            "occurred_on": _entry_date(record.get("occurred_on")),
            "minutes": _entry_minutes(record),
            "notes": record.get("notes"),
        }
    )


def _adapt_all(
    records: Iterable[Mapping[str, Any]],
    adapter: Callable[[Mapping[str, Any]], T],
    kind: str,
) -> List[T]:
    adapted: List[T] = []
    skipped = 0
    for record in records:
        try:
            adapted.append(adapter(record))
        except ValidationError as e:
            skipped += 1
            logger.warning(
                f"Skipping invalid {kind} record {record.get('id')!r}: "
                f"{e.error_count()} validation error(s)"
            )
    if skipped:
        logger.info(f"Adapted {len(adapted)} {kind} record(s), skipped {skipped}")
    return adapted


def projects_from_records(records: Iterable[Mapping[str, Any]]) -> List[Project]:
    """Adapt project records, skipping invalid ones."""
    return _adapt_all(records, project_from_record, "project")


def time_entries_from_records(
    records: Iterable[Mapping[str, Any]],
) -> List[TimeEntry]:
    """Adapt time-entry records, skipping invalid ones."""
    return _adapt_all(records, time_entry_from_record, "time entry")
