"""CLI commands."""

from timebudget.cli.commands.budgets import show_budgets
from timebudget.cli.commands.export import export_data
from timebudget.cli.commands.import_calendar import import_calendar
from timebudget.cli.commands.import_excel import import_excel
from timebudget.cli.commands.template import write_import_template

__all__ = [
    "export_data",
    "import_calendar",
    "import_excel",
    "show_budgets",
    "write_import_template",
]
