"""Field-level validators for import rows.

Each validator inspects one normalized field and records at most one issue
on the report. Messages are Dutch because they are shown to the user as is.
"""

import datetime as dt
from typing import Optional, Union

from timebudget.models.phase import PhaseCatalog
from timebudget.validators.validation_report import ValidationReport

MISSING_PROJECT = "Project naam ontbreekt"
PROJECT_NOT_FOUND = 'Project "{name}" niet gevonden'
MISSING_PHASE = "Fase ontbreekt"
INVALID_DATE = "Ongeldige of ontbrekende datum"
INVALID_HOURS = "Ongeldige of ontbrekende uren"
UNKNOWN_PHASE = 'Fase "{code}" staat niet in de fasenlijst'


class FieldValidators:
    """Collection of field-level validation methods."""

    @staticmethod
    def validate_required_text(
        value: Optional[str],
        field_name: str,
        message: str,
        report: ValidationReport,
    ) -> bool:
        """Record ``message`` when the text is missing or blank.

        Returns:
            True when the value is present
        """
        if value is None or not str(value).strip():
            report.add_error(field_name, message, value)
            return False
        return True

    @staticmethod
    def validate_iso_date(
        value: Optional[str],
        field_name: str,
        report: ValidationReport,
    ) -> None:
        """Validate a normalized ISO date; empty means the raw cell was unreadable."""
        try:
            dt.date.fromisoformat(value or "")
        except ValueError:
            report.add_error(field_name, INVALID_DATE, value)

    @staticmethod
    def validate_positive_hours(
        value: Optional[Union[int, float]],
        field_name: str,
        report: ValidationReport,
    ) -> None:
        """Hours must be strictly positive; 0 is how unparseable hours arrive."""
        if value is None or value <= 0:
            report.add_error(field_name, INVALID_HOURS, value)

    @staticmethod
    def validate_known_phase(
        code: str,
        field_name: str,
        catalog: Optional[PhaseCatalog],
        report: ValidationReport,
    ) -> None:
        """Warn when a phase code was only slugified, not found in the catalog."""
        if catalog is not None and code and code not in catalog:
            report.add_warning(field_name, UNKNOWN_PHASE.format(code=code), code)
