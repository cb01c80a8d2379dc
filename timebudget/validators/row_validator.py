"""Row validator for import sessions.

This module provides the ImportRowValidator, which decides whether a
normalized import row can be submitted and explains why not when it can't.
"""

import logging
from typing import List, Optional, Sequence

from timebudget.models.import_row import ImportRow
from timebudget.models.phase import PhaseCatalog
from timebudget.models.project import Project
from timebudget.validators.field_validators import (
    INVALID_HOURS,
    MISSING_PHASE,
    MISSING_PROJECT,
    PROJECT_NOT_FOUND,
    FieldValidators,
)
from timebudget.validators.project_matcher import (
    DEFAULT_MATCHERS,
    ProjectMatcher,
    find_project,
)
from timebudget.validators.validation_report import ValidationReport

logger = logging.getLogger(__name__)


class ImportRowValidator:
    """Validates normalized import rows against the known projects.

    Checks run in a fixed order and each failing check contributes exactly
    one message: project name present, project found, phase present, date
    readable, hours positive. A row is valid iff no error was recorded.
    Rows carrying ``chosen_project_id`` are bound to that project by id
    instead of being matched by name.

    Validation never mutates its input; it returns a new row, so running it
    again on the same row and projects gives the same result.

    Example:
        >>> validator = ImportRowValidator(projects)
        >>> checked = validator.validate_row(row)
        >>> checked.is_valid, checked.errors
        (False, ['Ongeldige of ontbrekende uren'])
    """

    def __init__(
        self,
        projects: Sequence[Project],
        catalog: Optional[PhaseCatalog] = None,
        matchers: Sequence[ProjectMatcher] = DEFAULT_MATCHERS,
    ) -> None:
        """Initialize the validator.

        Args:
            projects: Projects rows may refer to
            catalog: Phase catalog, used to warn about unknown phase codes
            matchers: Project-name match stages, strictest first
        """
        self.projects = list(projects)
        self.catalog = catalog
        self.matchers = matchers

    def _project_by_id(self, project_id: str) -> Optional[Project]:
        for project in self.projects:
            if project.id == project_id:
                return project
        return None

    def validate_row(self, row: ImportRow) -> ImportRow:
        """Validate one row.

        Args:
            row: A row produced by the normalizer (or an edited copy)

        Returns:
            Copy of the row with match result, errors, warnings and validity
        """
        report = ValidationReport(context={"row": row.row_number})

        matched: Optional[Project] = None
        if FieldValidators.validate_required_text(
            row.project_name, "project_name", MISSING_PROJECT, report
        ):
            if row.chosen_project_id:
                matched = self._project_by_id(row.chosen_project_id)
            else:
                matched = find_project(row.project_name, self.projects, self.matchers)
            if matched is None:
                report.add_error(
                    "project_name",
                    PROJECT_NOT_FOUND.format(name=row.project_name),
                    row.project_name,
                )

        if FieldValidators.validate_required_text(
            row.phase_name, "phase_name", MISSING_PHASE, report
        ):
            FieldValidators.validate_known_phase(
                row.phase_code, "phase_code", self.catalog, report
            )

        FieldValidators.validate_iso_date(row.occurred_on, "occurred_on", report)
        FieldValidators.validate_positive_hours(row.hours, "hours", report)
        # Hours that round to zero minutes cannot be stored.
        if row.hours > 0 and row.minutes <= 0:
            report.add_error("minutes", INVALID_HOURS, row.minutes)

        if not report.is_valid():
            logger.debug(f"Row {row.row_number} invalid: {report.summary()}")

        return row.model_copy(
            update={
                "project_id": matched.id if matched else None,
                "matched_project_name": matched.name if matched else None,
                "errors": report.error_messages(),
                "warnings": [issue.message for issue in report.get_warnings()],
                "is_valid": report.is_valid(),
            }
        )

    def validate_rows(self, rows: Sequence[ImportRow]) -> List[ImportRow]:
        """Validate a batch of rows independently of each other."""
        return [self.validate_row(row) for row in rows]
