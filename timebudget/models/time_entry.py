"""Time entry data models.

``TimeEntry`` is a stored entry as read from the backend; ``NewTimeEntry``
is the payload sent to the entry-creation endpoint.
"""

import datetime as dt
from typing import Any, Dict, Optional

from pydantic import Field, field_validator

from timebudget.models.base import BaseDataModel


class TimeEntry(BaseDataModel):
    """Represents a logged block of time on a project phase.

    Attributes:
        id: Backend identifier (absent for unsaved entries)
        project_id: Project the time was spent on
        phase_code: Canonical phase code
        occurred_on: Calendar day, no time-of-day
        minutes: Duration in whole minutes
        notes: Optional free text

    Example:
        >>> entry = TimeEntry(
        ...     project_id="p-1",
        ...     phase_code="schetsontwerp",
        ...     occurred_on=dt.date(2024, 9, 20),
        ...     minutes=270,
        ... )
        >>> entry.minutes
        270
    """

    id: Optional[str] = Field(None, description="Entry identifier")
    project_id: str = Field(..., min_length=1, description="Project identifier")
    phase_code: str = Field(..., min_length=1, description="Phase code")
    occurred_on: dt.date = Field(..., description="Day of work")
    minutes: int = Field(..., gt=0, description="Duration in minutes")
    notes: Optional[str] = Field(None, description="Optional notes")


class NewTimeEntry(BaseDataModel):
    """Payload for the entry-creation collaborator."""

    project_id: str = Field(..., min_length=1)
    phase_code: str = Field(..., min_length=1)
    occurred_on: str = Field(..., pattern=r"^\d{4}-\d{2}-\d{2}$")
    minutes: int = Field(..., gt=0)
    notes: Optional[str] = None

    @field_validator("notes")
    @classmethod
    def blank_notes_to_none(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return None
        v = v.strip()
        return v or None

    def to_payload(self) -> Dict[str, Any]:
        return self.model_dump()
