"""Import calendar command."""

import click

from timebudget.cli.error_handlers import DataValidationError, with_error_handling
from timebudget.cli.utils.import_report import confirm_and_commit, echo_preview
from timebudget.cli.utils.progress import ProgressTracker
from timebudget.cli.utils.services import create_api_client
from timebudget.importers.import_orchestrator import ImportOrchestrator
from timebudget.readers.reference_data_reader import ReferenceDataReader
from timebudget.validators.project_matcher import find_project


@click.command(name="import-calendar")
@click.argument("file", type=click.Path(exists=True, dir_okay=False))
@click.option("--project", "project_name", required=True, help="Project to book all events on")
@click.option("--commit", is_flag=True, help="Import the events (default: preview only)")
@click.option("--yes", "-y", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
def import_calendar(
    ctx: click.Context, file: str, project_name: str, commit: bool, yes: bool
):
    """Import appointments from an .ics calendar export as hours.

    Every event becomes one entry on the chosen project, with the calendar
    phase from settings and "<summary> @ <location>" as description.

    Example:
        timebudget import-calendar agenda.ics --project "Villa Amsterdam" --commit
    """
    settings = ctx.obj["settings"]
    with with_error_handling(ctx.obj["debug"]):
        tracker = ProgressTracker(["Loading projects and phases", "Reading calendar"])

        click.echo(tracker.get_current_message())
        client = create_api_client(settings)
        reader = ReferenceDataReader(client)
        projects = [p for p in reader.read_projects() if not p.archived]
        catalog = reader.read_phase_catalog()
        project = find_project(project_name, projects)
        if project is None:
            raise DataValidationError(
                f'Project "{project_name}" niet gevonden',
                recovery_hint="Use the name of an active project",
            )
        tracker.advance(f"Booking events on {project.name}")

        click.echo(tracker.get_current_message())
        orchestrator = ImportOrchestrator(
            projects,
            client.create_time_entry,
            catalog=catalog,
            calendar_phase_code=settings.calendar_phase_code,
        )
        session = orchestrator.start_calendar(file, project)
        tracker.advance(f"{len(session.rows)} event(s) read")

        click.echo()
        echo_preview(orchestrator)
        confirm_and_commit(orchestrator, commit=commit, assume_yes=yes)
