"""Import session state and the pure operations on it.

An ``ImportSession`` is an immutable snapshot of the rows under review plus
the active project filter. Every operation returns a new session; nothing
here talks to the backend.
"""

from dataclasses import dataclass, field, replace
from typing import Any, Dict, List, Mapping, Optional, Tuple

from timebudget.models.import_row import RAW_FIELDS, ImportRow
from timebudget.models.phase import PhaseCatalog
from timebudget.normalizers.row_normalizer import normalize_row
from timebudget.validators.row_validator import ImportRowValidator


class ImportSessionError(Exception):
    """Raised for invalid operations on an import session."""


class UnknownRowError(ImportSessionError):
    """Raised when an edit refers to a row number the session doesn't have."""

    def __init__(self, row_number: int):
        super().__init__(f"Row {row_number} is not part of this import")
        self.row_number = row_number


@dataclass(frozen=True)
class ImportSession:
    """Rows under review and the active project filter.

    Attributes:
        rows: All rows from the source, in source order
        project_filter: Matched project name to narrow the view to, if any
        source_name: File name the rows came from
    """

    rows: Tuple[ImportRow, ...] = ()
    project_filter: Optional[str] = None
    source_name: str = ""

    @property
    def valid_count(self) -> int:
        return sum(1 for row in self.rows if row.is_valid)

    @property
    def invalid_count(self) -> int:
        return len(self.rows) - self.valid_count

    def row(self, row_number: int) -> ImportRow:
        for candidate in self.rows:
            if candidate.row_number == row_number:
                return candidate
        raise UnknownRowError(row_number)


@dataclass
class ImportSummary:
    """Outcome of committing an import session.

    Attributes:
        total: Rows submitted
        successful: Rows the backend accepted
        failed: Rows the backend rejected
        errors: One ``"Rij <n>: <message>"`` line per failed row
    """

    total: int = 0
    successful: int = 0
    failed: int = 0
    errors: List[str] = field(default_factory=list)

    @property
    def message(self) -> str:
        return f"{self.successful} van {self.total} rijen geïmporteerd"


def build_rows(
    raw_rows: List[Mapping[str, Any]],
    validator: ImportRowValidator,
    catalog: Optional[PhaseCatalog] = None,
) -> Tuple[ImportRow, ...]:
    """Normalize and validate raw rows, numbering them from 1."""
    return tuple(
        validator.validate_row(normalize_row(raw, number, catalog))
        for number, raw in enumerate(raw_rows, start=1)
    )


def visible_rows(session: ImportSession) -> List[ImportRow]:
    """Rows shown under the current project filter.

    Without a filter every row is visible. With one, only rows matched to a
    project of that name (case-insensitive) are.
    """
    if not session.project_filter:
        return list(session.rows)
    wanted = session.project_filter.casefold()
    return [
        row
        for row in session.rows
        if row.matched_project_name and row.matched_project_name.casefold() == wanted
    ]


def importable_rows(session: ImportSession) -> List[ImportRow]:
    """Visible rows that currently pass validation, in source order."""
    return [row for row in visible_rows(session) if row.is_valid]


def with_filter(session: ImportSession, project_name: Optional[str]) -> ImportSession:
    """Session with the project filter set (or cleared with None/"")."""
    return replace(session, project_filter=project_name or None)


def raw_fields(row: ImportRow) -> Dict[str, Any]:
    return {name: getattr(row, name) for name in RAW_FIELDS}


def apply_edit(
    session: ImportSession,
    row_number: int,
    changes: Mapping[str, Any],
    validator: ImportRowValidator,
    catalog: Optional[PhaseCatalog] = None,
) -> ImportSession:
    """Session with one row edited, re-normalized and re-validated.

    Only raw fields may be edited; the other rows are returned unchanged.
    A chosen project stays bound unless ``project_name`` is edited.

    Raises:
        UnknownRowError: If the session has no row with that number
        ValueError: If ``changes`` names a field that isn't editable
    """
    unknown = set(changes) - set(RAW_FIELDS)
    if unknown:
        raise ValueError(
            f"Cannot edit {', '.join(sorted(unknown))}; "
            f"editable fields are {', '.join(RAW_FIELDS)}"
        )

    current = session.row(row_number)
    raw = raw_fields(current)
    if "project_name" not in changes:
        raw["chosen_project_id"] = current.chosen_project_id
    raw.update(changes)
    edited = validator.validate_row(normalize_row(raw, row_number, catalog))

    rows = tuple(edited if r.row_number == row_number else r for r in session.rows)
    return replace(session, rows=rows)
