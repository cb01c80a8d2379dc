"""Export command."""

from typing import Optional

import click

from timebudget.cli.error_handlers import with_error_handling
from timebudget.cli.utils.formatters import format_info, format_success
from timebudget.cli.utils.services import create_reference_reader
from timebudget.writers.export_writer import (
    ExportGenerator,
    default_export_name,
    write_time_entries_csv,
    write_workbook,
)


@click.command(name="export")
@click.option(
    "--format",
    "export_format",
    type=click.Choice(["csv", "xlsx"]),
    default="csv",
    show_default=True,
    help="csv: time entries only; xlsx: projects and time entries",
)
@click.option(
    "--output",
    type=click.Path(dir_okay=False, writable=True),
    default=None,
    help="Output file (default: dated file in the current directory)",
)
@click.pass_context
def export_data(ctx: click.Context, export_format: str, output: Optional[str]):
    """Export time entries (CSV) or projects and time entries (Excel).

    Example:
        timebudget export
        timebudget export --format xlsx --output export.xlsx
    """
    settings = ctx.obj["settings"]
    with with_error_handling(ctx.obj["debug"]):
        click.echo(format_info("Loading projects and time entries..."))
        reader = create_reference_reader(settings)
        generator = ExportGenerator(
            reader.read_projects(),
            reader.read_time_entries(),
            reader.read_phase_catalog(),
        )

        if export_format == "csv":
            path = write_time_entries_csv(
                generator.time_entries_frame(),
                output or default_export_name("urenexport", "csv"),
            )
        else:
            path = write_workbook(
                generator.generate(),
                output or default_export_name("timebudget-export", "xlsx"),
            )

        click.echo(format_success(f"Exported {len(generator.entries)} time entries to {path}"))
