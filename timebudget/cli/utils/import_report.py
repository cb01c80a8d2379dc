"""Preview and result output shared by the import commands."""

from typing import List

import click

from timebudget.cli.utils.formatters import (
    format_error,
    format_hours,
    format_info,
    format_success,
    format_table,
    format_warning,
)
from timebudget.importers.import_orchestrator import ImportOrchestrator
from timebudget.importers.import_session import ImportSummary
from timebudget.models.import_row import ImportRow

PREVIEW_HEADERS = ["Rij", "Project", "Fase", "Datum", "Uren", "Status", "Opmerkingen"]


def preview_rows(rows: List[ImportRow]) -> List[List[str]]:
    table = []
    for row in rows:
        status = (
            click.style("✓ geldig", fg="green")
            if row.is_valid
            else click.style("✗ ongeldig", fg="red")
        )
        table.append(
            [
                str(row.row_number),
                row.matched_project_name or row.project_name,
                row.phase_code,
                row.occurred_on,
                format_hours(row.hours),
                status,
                "; ".join(row.errors + row.warnings),
            ]
        )
    return table


def echo_preview(orchestrator: ImportOrchestrator) -> None:
    rows = orchestrator.preview()
    valid = sum(1 for row in rows if row.is_valid)
    click.echo(format_table(PREVIEW_HEADERS, preview_rows(rows)))
    click.echo()
    click.echo(format_info(f"{valid} geldig, {len(rows) - valid} ongeldig van {len(rows)} rij(en)"))


def echo_import_summary(summary: ImportSummary) -> None:
    click.echo()
    if summary.failed:
        click.echo(format_warning(summary.message))
    else:
        click.echo(format_success(summary.message))
    click.echo(f"  Geslaagd: {summary.successful}")
    click.echo(f"  Mislukt:  {summary.failed}")
    for error in summary.errors:
        click.echo(format_error(error))


def confirm_and_commit(
    orchestrator: ImportOrchestrator, commit: bool, assume_yes: bool
) -> None:
    """Commit the session when asked to, after an optional confirmation."""
    importable = sum(1 for row in orchestrator.preview() if row.is_valid)
    if not commit:
        click.echo(format_info("Dry run: nothing imported (use --commit to import)"))
        return
    if importable == 0:
        click.echo(format_warning("No valid rows to import"))
        return
    if not assume_yes:
        click.confirm(f"{importable} rij(en) importeren?", abort=True)
    echo_import_summary(orchestrator.commit())
