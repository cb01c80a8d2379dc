"""Validation layer for import rows."""

from timebudget.validators.field_validators import FieldValidators
from timebudget.validators.project_matcher import (
    DEFAULT_MATCHERS,
    ProjectMatcher,
    find_project,
    match_exact_name,
    match_name_substring,
)
from timebudget.validators.row_validator import ImportRowValidator
from timebudget.validators.validation_report import (
    ValidationIssue,
    ValidationReport,
    ValidationSeverity,
)

__all__ = [
    "DEFAULT_MATCHERS",
    "FieldValidators",
    "ImportRowValidator",
    "ProjectMatcher",
    "ValidationIssue",
    "ValidationReport",
    "ValidationSeverity",
    "find_project",
    "match_exact_name",
    "match_name_substring",
]
