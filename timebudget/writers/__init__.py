"""Writers module for export files.

This module provides functionality to generate time-entry and project
exports and the import template.
"""

from timebudget.writers.export_writer import (
    TEMPLATE_COLUMNS,
    TIME_ENTRY_COLUMNS,
    ExportData,
    ExportGenerator,
    default_export_name,
    template_frame,
    write_template,
    write_time_entries_csv,
    write_workbook,
)

__all__ = [
    "TEMPLATE_COLUMNS",
    "TIME_ENTRY_COLUMNS",
    "ExportData",
    "ExportGenerator",
    "default_export_name",
    "template_frame",
    "write_template",
    "write_time_entries_csv",
    "write_workbook",
]
