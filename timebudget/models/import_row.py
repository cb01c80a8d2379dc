"""Import row model.

An ``ImportRow`` lives only for the duration of an import session. It keeps
the raw cell values next to the canonical values derived from them, so an
inline edit can be re-normalized and re-validated from the raw side.
"""

from typing import Any, List, Optional

from pydantic import Field

from timebudget.models.base import BaseDataModel
from timebudget.models.time_entry import NewTimeEntry

# Fields a user may edit inline; everything else is derived.
RAW_FIELDS = ("project_name", "phase_name", "date_value", "hours_value", "notes")


class ImportRow(BaseDataModel):
    """A single spreadsheet or calendar row under review.

    Attributes:
        row_number: 1-based position in the source file
        project_name: Project name text as found in the file
        phase_name: Phase label as found in the file
        date_value: Raw date cell (text, serial number or date)
        hours_value: Raw hours cell (text or number)
        notes: Free-text description
        chosen_project_id: Project picked by the caller (calendar imports);
            when set, it is used instead of matching ``project_name``
        project_id: Id of the matched project, if any
        matched_project_name: Name of the matched project, if any
        phase_code: Canonical phase code
        occurred_on: ISO date, empty when unparseable
        hours: Decimal hours, 0 when unparseable
        minutes: Whole minutes derived from hours
        is_valid: True iff ``errors`` is empty after validation
        errors: Human-readable reasons, in check order
        warnings: Non-blocking remarks (e.g. phase not in the catalog)
    """

    row_number: int = Field(..., ge=1)
    project_name: str = ""
    phase_name: str = ""
    date_value: Any = None
    hours_value: Any = None
    notes: str = ""
    chosen_project_id: Optional[str] = None

    project_id: Optional[str] = None
    matched_project_name: Optional[str] = None
    phase_code: str = ""
    occurred_on: str = ""
    hours: float = 0.0
    minutes: int = Field(0, ge=0)
    is_valid: bool = False
    errors: List[str] = Field(default_factory=list)
    warnings: List[str] = Field(default_factory=list)

    def to_new_entry(self) -> NewTimeEntry:
        """Build the creation payload for a validated row.

        Raises:
            ValueError: If the row has not passed validation
        """
        if not self.is_valid or self.project_id is None:
            raise ValueError(f"Row {self.row_number} is not valid for import")
        return NewTimeEntry(
            project_id=self.project_id,
            phase_code=self.phase_code,
            occurred_on=self.occurred_on,
            minutes=self.minutes,
            notes=self.notes,
        )
