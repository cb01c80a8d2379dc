"""
Data readers for import files and backend reference data.
"""

from .calendar_reader import CalendarEvent, CalendarReader, parse_ics
from .reference_data_reader import ReferenceDataReader
from .spreadsheet_reader import SpreadsheetReader, UnsupportedFileError

__all__ = [
    "CalendarEvent",
    "CalendarReader",
    "ReferenceDataReader",
    "SpreadsheetReader",
    "UnsupportedFileError",
    "parse_ics",
]
