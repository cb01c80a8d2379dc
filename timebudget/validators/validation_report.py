"""Validation report for collecting row-scoped validation issues."""

from dataclasses import dataclass
from enum import IntEnum
from typing import Any, Dict, List, Optional


class ValidationSeverity(IntEnum):
    """Severity levels for validation issues."""

    WARNING = 2
    ERROR = 3


@dataclass
class ValidationIssue:
    """Represents a single validation issue.

    Attributes:
        severity: The severity level of the issue
        field: The import field that has the issue
        message: Human-readable (Dutch) description shown to the user
        value: The value that caused the issue
        context: Optional context information (e.g. row number)
    """

    severity: ValidationSeverity
    field: str
    message: str
    value: Any
    context: Optional[Dict[str, Any]] = None

    def __str__(self) -> str:
        context_str = ""
        if self.context:
            context_parts = [f"{k}={v}" for k, v in self.context.items()]
            context_str = f" ({', '.join(context_parts)})"
        return f"[{self.severity.name}] {self.field}: {self.message}{context_str}"


class ValidationReport:
    """Collects validation issues in the order they are found.

    Only errors make a row invalid; warnings are informational.

    Example:
        >>> report = ValidationReport()
        >>> report.add_error("hours", "Ongeldige of ontbrekende uren", 0)
        >>> report.is_valid()
        False
        >>> report.error_messages()
        ['Ongeldige of ontbrekende uren']
    """

    def __init__(self, context: Optional[Dict[str, Any]] = None) -> None:
        self.issues: List[ValidationIssue] = []
        self.context = context

    @property
    def error_count(self) -> int:
        return len(self.get_errors())

    @property
    def warning_count(self) -> int:
        return len(self.get_warnings())

    def is_valid(self) -> bool:
        """True when no error-level issue was recorded."""
        return self.error_count == 0

    def _add(
        self, severity: ValidationSeverity, field: str, message: str, value: Any
    ) -> None:
        context = self.context.copy() if self.context else None
        self.issues.append(ValidationIssue(severity, field, message, value, context))

    def add_error(self, field: str, message: str, value: Any) -> None:
        self._add(ValidationSeverity.ERROR, field, message, value)

    def add_warning(self, field: str, message: str, value: Any) -> None:
        self._add(ValidationSeverity.WARNING, field, message, value)

    def get_errors(self) -> List[ValidationIssue]:
        return [i for i in self.issues if i.severity == ValidationSeverity.ERROR]

    def get_warnings(self) -> List[ValidationIssue]:
        return [i for i in self.issues if i.severity == ValidationSeverity.WARNING]

    def error_messages(self) -> List[str]:
        """Error messages in the order the checks ran."""
        return [issue.message for issue in self.get_errors()]

    def summary(self) -> str:
        """Short summary of the counts, e.g. "2 error(s), 1 warning(s)"."""
        parts = []
        if self.error_count:
            parts.append(f"{self.error_count} error(s)")
        if self.warning_count:
            parts.append(f"{self.warning_count} warning(s)")
        return ", ".join(parts) if parts else "No issues found"
