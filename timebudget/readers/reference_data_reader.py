"""Reference data reader for projects, phases and time entries.

This module loads the backend data the import pipeline and the budget
overview depend on, degrading gracefully where a missing collaborator should
not stop the caller: the phase catalog falls back to the built-in list and
the project list falls back to empty.
"""

import logging
from typing import List

from pydantic import ValidationError

from timebudget.models.phase import PhaseCatalog
from timebudget.models.project import Project
from timebudget.models.time_entry import TimeEntry
from timebudget.services.api_client import ApiError, TimeTrackingApiClient
from timebudget.services.record_adapter import (
    projects_from_records,
    time_entries_from_records,
)

logger = logging.getLogger(__name__)


class ReferenceDataReader:
    """Reader for the backend's reference data.

    Attributes:
        client: API client used for all reads

    Example:
        >>> reader = ReferenceDataReader(TimeTrackingApiClient("https://api"))
        >>> catalog = reader.read_phase_catalog()
        >>> len(catalog)
        10
    """

    def __init__(self, client: TimeTrackingApiClient):
        self.client = client

    def read_phase_catalog(self) -> PhaseCatalog:
        """Load the phase catalog, or the built-in one when unavailable."""
        try:
            records = self.client.list_phases()
        except ApiError as e:
            logger.warning(f"Could not load phases, using built-in catalog: {e}")
            return PhaseCatalog.fallback()

        if not records:
            logger.warning("Backend returned no phases, using built-in catalog")
            return PhaseCatalog.fallback()

        try:
            catalog = PhaseCatalog.from_records(records)
        except ValidationError as e:
            logger.warning(
                f"Backend phases are invalid ({e.error_count()} error(s)), "
                f"using built-in catalog"
            )
            return PhaseCatalog.fallback()

        logger.debug(f"Loaded {len(catalog)} phases from backend")
        return catalog

    def read_projects(self) -> List[Project]:
        """Load all projects; an unavailable backend yields an empty list."""
        try:
            records = self.client.list_projects()
        except ApiError as e:
            logger.warning(f"Could not load projects: {e}")
            return []
        projects = projects_from_records(records)
        logger.info(f"Loaded {len(projects)} project(s)")
        return projects

    def read_time_entries(self) -> List[TimeEntry]:
        """Load all time entries.

        Raises:
            ApiError: If the backend is unavailable
        """
        entries = time_entries_from_records(self.client.list_time_entries())
        logger.info(f"Loaded {len(entries)} time entries")
        return entries
