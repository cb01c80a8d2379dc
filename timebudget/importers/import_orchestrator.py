"""Import orchestrator for spreadsheet and calendar imports.

This module drives one import from file to backend: read, normalize,
validate, let the caller review and edit, then submit the valid rows one by
one and report every outcome.
"""

import logging
from pathlib import Path
from typing import Any, Callable, List, Mapping, Optional, Sequence, Union

from timebudget.importers.import_session import (
    ImportSession,
    ImportSessionError,
    ImportSummary,
    apply_edit,
    build_rows,
    importable_rows,
    visible_rows,
    with_filter,
)
from timebudget.models.import_row import ImportRow
from timebudget.models.phase import PhaseCatalog
from timebudget.models.project import Project
from timebudget.models.time_entry import NewTimeEntry
from timebudget.readers.calendar_reader import CALENDAR_EXTENSIONS, CalendarReader
from timebudget.readers.spreadsheet_reader import (
    SPREADSHEET_EXTENSIONS,
    SpreadsheetReader,
    UnsupportedFileError,
    file_extension,
)
from timebudget.utils.logging_utils import LogContext, generate_session_id
from timebudget.validators.row_validator import ImportRowValidator

logger = logging.getLogger(__name__)

# Accepts a creation payload and returns the created record, or raises.
EntryCreator = Callable[[NewTimeEntry], Any]

Source = Union[str, Path, bytes]


def _source_name(source: Source, file_name: Optional[str]) -> str:
    if file_name:
        return file_name
    return "" if isinstance(source, bytes) else Path(str(source)).name


class ImportOrchestrator:
    """Runs a single import session.

    Construct one orchestrator per import. Rows are validated against the
    projects given at construction; ``commit`` submits the visible valid
    rows sequentially, waiting for each creation call before the next, and
    never stops on a failing row. A session can be committed once.

    Example:
        >>> orchestrator = ImportOrchestrator(projects, client.create_time_entry)
        >>> session = orchestrator.start_spreadsheet("uren.xlsx")
        >>> [row.errors for row in orchestrator.preview() if not row.is_valid]
        [['Project "Onbekend" niet gevonden']]
        >>> summary = orchestrator.commit()
        >>> summary.successful, summary.failed
        (2, 0)
    """

    def __init__(
        self,
        projects: Sequence[Project],
        entry_creator: EntryCreator,
        catalog: Optional[PhaseCatalog] = None,
        calendar_phase_code: str = "agenda",
        spreadsheet_reader: Optional[SpreadsheetReader] = None,
        calendar_reader: Optional[CalendarReader] = None,
    ):
        """Initialize the orchestrator.

        Args:
            projects: Projects rows are matched against
            entry_creator: Callable that creates one time entry
            catalog: Phase catalog (built-in list when None)
            calendar_phase_code: Phase assigned to calendar events
            spreadsheet_reader: Custom spreadsheet reader
            calendar_reader: Custom calendar reader
        """
        self.projects = list(projects)
        self.entry_creator = entry_creator
        self.catalog = catalog or PhaseCatalog.fallback()
        self.validator = ImportRowValidator(self.projects, self.catalog)
        self.spreadsheet_reader = spreadsheet_reader or SpreadsheetReader()
        self.calendar_reader = calendar_reader or CalendarReader(calendar_phase_code)

        self.session_id = generate_session_id()
        self.session: Optional[ImportSession] = None
        self._committed = False

    def _log_context(self) -> LogContext:
        source = self.session.source_name if self.session else ""
        return LogContext(session_id=self.session_id, file_name=source)

    def _require_session(self) -> ImportSession:
        if self.session is None:
            raise ImportSessionError("No import started")
        return self.session

    def start_rows(
        self, raw_rows: List[Mapping[str, Any]], source_name: str = ""
    ) -> ImportSession:
        """Start a session from rows keyed by the canonical field names."""
        if self.session is not None:
            raise ImportSessionError("This orchestrator already has an import")

        with LogContext(session_id=self.session_id, file_name=source_name):
            rows = build_rows(raw_rows, self.validator, self.catalog)
            self.session = ImportSession(rows=rows, source_name=source_name)
            logger.info(
                f"Import preview: {self.session.valid_count} valid, "
                f"{self.session.invalid_count} invalid of {len(rows)} row(s)"
            )
        return self.session

    def start_spreadsheet(
        self, source: Source, file_name: Optional[str] = None
    ) -> ImportSession:
        """Start a session from an ``.xlsx``/``.xlsm``/``.csv`` file.

        Raises:
            UnsupportedFileError: If the file is not a spreadsheet
        """
        name = _source_name(source, file_name)
        with LogContext(session_id=self.session_id, file_name=name):
            raw_rows = self.spreadsheet_reader.read(source, file_name=file_name)
        return self.start_rows(raw_rows, source_name=name)

    def start_calendar(
        self,
        source: Source,
        project: Union[Project, str],
        file_name: Optional[str] = None,
    ) -> ImportSession:
        """Start a session booking every event of an ``.ics`` file on one project.

        Args:
            source: Path to the calendar file, or its raw bytes
            project: Chosen project (rows are bound to its id), or its name
                (rows are matched by name)
            file_name: Original file name when ``source`` is bytes
        """
        if isinstance(project, Project):
            project_name, project_id = project.name, project.id
        else:
            project_name, project_id = project, None
        name = _source_name(source, file_name)
        with LogContext(session_id=self.session_id, file_name=name):
            raw_rows = self.calendar_reader.read(
                source, project_name=project_name, project_id=project_id
            )
        return self.start_rows(raw_rows, source_name=name)

    def start_file(
        self,
        source: Source,
        file_name: Optional[str] = None,
        project: Union[Project, str, None] = None,
    ) -> ImportSession:
        """Start a session, choosing the reader by file extension.

        Raises:
            UnsupportedFileError: If no reader handles the extension
            ImportSessionError: If a calendar file is given without a project
        """
        extension = file_extension(_source_name(source, file_name))
        if extension in SPREADSHEET_EXTENSIONS:
            return self.start_spreadsheet(source, file_name=file_name)
        if extension in CALENDAR_EXTENSIONS:
            if project is None:
                raise ImportSessionError("A calendar import needs a project")
            return self.start_calendar(source, project, file_name=file_name)
        supported = SPREADSHEET_EXTENSIONS + CALENDAR_EXTENSIONS
        raise UnsupportedFileError(
            f"Unsupported file type '{extension}'; expected one of {', '.join(supported)}"
        )

    def preview(self) -> List[ImportRow]:
        """Rows visible under the current filter, valid and invalid."""
        return visible_rows(self._require_session())

    def set_project_filter(self, project_name: Optional[str]) -> ImportSession:
        """Narrow the visible rows to one matched project (None clears)."""
        self.session = with_filter(self._require_session(), project_name)
        logger.debug(f"Project filter set to {project_name!r}")
        return self.session

    def edit_row(self, row_number: int, **changes) -> ImportRow:
        """Edit one row's raw fields and re-validate it.

        Raises:
            UnknownRowError: If the session has no such row
            ValueError: If a non-editable field is given
        """
        if self._committed:
            raise ImportSessionError("This import has already been committed")
        with self._log_context():
            self.session = apply_edit(
                self._require_session(), row_number, changes, self.validator, self.catalog
            )
            row = self.session.row(row_number)
            logger.debug(
                f"Row {row_number} edited ({', '.join(sorted(changes))}); "
                f"valid={row.is_valid}"
            )
        return row

    def commit(self) -> ImportSummary:
        """Submit the visible valid rows, one at a time.

        Each failure is recorded as ``"Rij <n>: <message>"`` with ``n`` the
        row number shown in the preview.

        Returns:
            ImportSummary with counts and failure messages

        Raises:
            ImportSessionError: If there is no session or it was committed
        """
        session = self._require_session()
        if self._committed:
            raise ImportSessionError("This import has already been committed")
        self._committed = True

        rows = importable_rows(session)
        summary = ImportSummary(total=len(rows))

        with self._log_context():
            logger.info(f"Committing {len(rows)} row(s)")
            for row in rows:
                try:
                    self.entry_creator(row.to_new_entry())
                except Exception as e:
                    summary.failed += 1
                    message = str(e) or type(e).__name__
                    summary.errors.append(f"Rij {row.row_number}: {message}")
                    logger.warning(
                        f"Row {row.row_number} failed to import: {message}"
                    )
                else:
                    summary.successful += 1

            logger.info(
                f"Import finished: {summary.successful} succeeded, "
                f"{summary.failed} failed"
            )
        return summary
