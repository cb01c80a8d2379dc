"""CLI utility functions."""

from timebudget.cli.utils.formatters import (
    format_error,
    format_euros,
    format_hours,
    format_info,
    format_status,
    format_success,
    format_table,
    format_warning,
)
from timebudget.cli.utils.progress import ProgressTracker

__all__ = [
    "format_error",
    "format_euros",
    "format_hours",
    "format_info",
    "format_status",
    "format_success",
    "format_table",
    "format_warning",
    "ProgressTracker",
]
