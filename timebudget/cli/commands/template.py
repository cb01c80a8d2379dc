"""Import template command."""

import click

from timebudget.cli.error_handlers import with_error_handling
from timebudget.cli.utils.formatters import format_success
from timebudget.writers.export_writer import TEMPLATE_COLUMNS, write_template


@click.command(name="template")
@click.option(
    "--output",
    type=click.Path(dir_okay=False, writable=True),
    default="uren_import_template.csv",
    show_default=True,
    help="Where to write the template",
)
@click.pass_context
def write_import_template(ctx: click.Context, output: str):
    """Write a CSV template for import-excel with example rows."""
    with with_error_handling(ctx.obj["debug"]):
        path = write_template(output)
        click.echo(format_success(f"Template written to {path}"))
        click.echo(f"  Columns: {', '.join(TEMPLATE_COLUMNS)}")
