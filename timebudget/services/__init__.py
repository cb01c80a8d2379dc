"""
Backend services for the time-tracking system.

This package provides the REST API client and the adapters that turn its
records into the canonical models.
"""

from .api_client import ApiError, TimeTrackingApiClient
from .record_adapter import (
    project_from_record,
    projects_from_records,
    time_entries_from_records,
    time_entry_from_record,
)

__all__ = [
    "ApiError",
    "TimeTrackingApiClient",
    "project_from_record",
    "projects_from_records",
    "time_entry_from_record",
    "time_entries_from_records",
]
