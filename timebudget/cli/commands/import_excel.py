"""Import spreadsheet command."""

from typing import Optional, Tuple

import click

from timebudget.cli.error_handlers import DataValidationError, with_error_handling
from timebudget.cli.utils.formatters import format_info
from timebudget.cli.utils.import_report import confirm_and_commit, echo_preview
from timebudget.cli.utils.progress import ProgressTracker
from timebudget.cli.utils.services import create_api_client
from timebudget.importers.import_orchestrator import ImportOrchestrator
from timebudget.importers.import_session import UnknownRowError
from timebudget.models.import_row import RAW_FIELDS
from timebudget.readers.reference_data_reader import ReferenceDataReader


def parse_assignment(assignment: str) -> Tuple[str, str]:
    """Split ``field=value`` into its parts.

    Raises:
        DataValidationError: If there is no ``=`` or the field isn't editable
    """
    field, sep, value = assignment.partition("=")
    field = field.strip()
    if not sep:
        raise DataValidationError(
            f"Invalid edit '{assignment}'", recovery_hint="Use FIELD=VALUE"
        )
    if field not in RAW_FIELDS:
        raise DataValidationError(
            f"Field '{field}' cannot be edited",
            recovery_hint=f"Editable fields: {', '.join(RAW_FIELDS)}",
        )
    return field, value


@click.command(name="import-excel")
@click.argument("file", type=click.Path(exists=True, dir_okay=False))
@click.option(
    "--project-filter",
    type=str,
    default=None,
    help="Only show and import rows matched to this project",
)
@click.option(
    "--set",
    "edits",
    type=(int, str),
    multiple=True,
    metavar="ROW FIELD=VALUE",
    help="Edit a row before importing, e.g. --set 2 project_name=Villa",
)
@click.option("--commit", is_flag=True, help="Import the valid rows (default: preview only)")
@click.option("--yes", "-y", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
def import_excel(
    ctx: click.Context,
    file: str,
    project_filter: Optional[str],
    edits: Tuple[Tuple[int, str], ...],
    commit: bool,
    yes: bool,
):
    """Import hours from an .xlsx, .xlsm or .csv file.

    Rows are matched to projects by name and validated; the preview shows
    every row with its problems. With --commit the valid rows are created
    one at a time and every failure is reported.

    Example:
        timebudget import-excel uren.xlsx
        timebudget import-excel uren.csv --set 2 project_name="Villa Amsterdam" --commit
    """
    settings = ctx.obj["settings"]
    with with_error_handling(ctx.obj["debug"]):
        tracker = ProgressTracker(
            ["Loading projects and phases", "Reading import file", "Reviewing rows"]
        )

        click.echo(tracker.get_current_message())
        client = create_api_client(settings)
        reader = ReferenceDataReader(client)
        projects = reader.read_projects()
        catalog = reader.read_phase_catalog()
        tracker.advance(f"{len(projects)} project(s), {len(catalog)} phases")

        click.echo(tracker.get_current_message())
        orchestrator = ImportOrchestrator(
            projects,
            client.create_time_entry,
            catalog=catalog,
            calendar_phase_code=settings.calendar_phase_code,
        )
        session = orchestrator.start_spreadsheet(file)
        tracker.advance(f"{len(session.rows)} row(s) read")

        click.echo(tracker.get_current_message())
        for row_number, assignment in edits:
            field, value = parse_assignment(assignment)
            try:
                orchestrator.edit_row(row_number, **{field: value})
            except UnknownRowError as e:
                raise DataValidationError(str(e)) from e
        if project_filter:
            orchestrator.set_project_filter(project_filter)
            click.echo(format_info(f"Filter: Project = {project_filter}"))
        tracker.advance()

        click.echo()
        echo_preview(orchestrator)
        confirm_and_commit(orchestrator, commit=commit, assume_yes=yes)
