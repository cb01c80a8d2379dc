"""Output formatting utilities for CLI."""

from decimal import ROUND_HALF_UP, Decimal
from typing import List, Union

import click

from timebudget.calculators.budget_calculator import BudgetStatus

STATUS_COLORS = {
    BudgetStatus.UNDER_BUDGET: "green",
    BudgetStatus.ON_TRACK: "blue",
    BudgetStatus.OVER_BUDGET: "yellow",
    BudgetStatus.BUDGET_EXCEEDED: "red",
}


def format_success(message: str) -> str:
    """Format a success message with green color.

    Args:
        message: The success message to format

    Returns:
        Formatted success message with color
    """
    return click.style(f"✓ {message}", fg="green", bold=True)


def format_error(message: str) -> str:
    """Format an error message with red color."""
    return click.style(f"✗ {message}", fg="red", bold=True)


def format_warning(message: str) -> str:
    """Format a warning message with yellow color."""
    return click.style(f"⚠ {message}", fg="yellow", bold=True)


def format_info(message: str) -> str:
    return click.style(f"ℹ {message}", fg="blue")


def format_euros(cents: Union[int, Decimal]) -> str:
    """Format an amount in cents as euros.

    Example:
        >>> format_euros(123450)
        '€ 1,234.50'
    """
    euros = (Decimal(cents) / 100).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)
    return f"€ {euros:,.2f}"


def format_hours(hours: Union[int, float, Decimal]) -> str:
    """Format hours with two decimals, e.g. ``2.50``."""
    value = Decimal(str(hours)).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)
    return f"{value:.2f}"


def format_status(status: BudgetStatus) -> str:
    """Dutch status label, colored by severity."""
    return click.style(status.label, fg=STATUS_COLORS[status])


def format_table(headers: List[str], rows: List[List[str]], max_width: int = 40) -> str:
    """Format data as a table.

    Cells are measured and truncated on their unstyled text, so colored
    cells line up with plain ones.

    Args:
        headers: List of column headers
        rows: List of data rows (each row is a list of cell values)
        max_width: Maximum width for each column (default: 40)

    Returns:
        Formatted table as a string
    """
    if not headers:
        return ""

    col_widths = [len(h) for h in headers]
    for row in rows:
        for i, cell in enumerate(row):
            if i < len(col_widths):
                col_widths[i] = max(col_widths[i], len(click.unstyle(str(cell))))

    col_widths = [min(w, max_width) for w in col_widths]

    separator = "+" + "+".join("-" * (w + 2) for w in col_widths) + "+"

    def _cell(value: object, width: int) -> str:
        text = str(value)
        plain = click.unstyle(text)
        if len(plain) > width:
            # Truncating styled text would cut escape codes; drop the styling.
            text = plain = plain[: width - 1] + "…"
        return f" {text}{' ' * (width - len(plain))} "

    header_row = "|" + "|".join(_cell(h, col_widths[i]) for i, h in enumerate(headers)) + "|"

    data_rows = []
    for row in rows:
        cells = [_cell(cell, col_widths[i]) for i, cell in enumerate(row) if i < len(col_widths)]
        data_rows.append("|" + "|".join(cells) + "|")

    table_lines = [separator, header_row, separator]
    if rows:
        table_lines.extend(data_rows)
        table_lines.append(separator)

    return "\n".join(table_lines)
