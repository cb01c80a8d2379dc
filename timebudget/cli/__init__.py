"""Timebudget CLI.

This module provides a command-line interface for importing hours, viewing
project budgets and exporting time entries.
"""

import click

from timebudget import __version__
from timebudget.cli.commands.budgets import show_budgets
from timebudget.cli.commands.export import export_data
from timebudget.cli.commands.import_calendar import import_calendar
from timebudget.cli.commands.import_excel import import_excel
from timebudget.cli.commands.template import write_import_template
from timebudget.cli.error_handlers import with_error_handling
from timebudget.config.logging_config import LoggingConfig, configure_logging
from timebudget.config.settings import get_config


@click.group(help="Timebudget CLI - Import hours and track project budgets")
@click.version_option(version=__version__)
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
@click.option("--debug", is_flag=True, help="Show full stack traces on errors")
@click.pass_context
def cli(ctx: click.Context, verbose: bool, debug: bool):
    """Timebudget CLI main entry point."""
    ctx.ensure_object(dict)
    ctx.obj["debug"] = debug
    with with_error_handling(debug):
        settings = get_config()
        configure_logging(LoggingConfig.from_settings(settings, verbose=verbose))
    ctx.obj["settings"] = settings


# Register commands
cli.add_command(import_excel)
cli.add_command(import_calendar)
cli.add_command(show_budgets)
cli.add_command(export_data)
cli.add_command(write_import_template)


def main():
    """Main entry point for the CLI."""
    cli(obj={})


if __name__ == "__main__":
    main()
