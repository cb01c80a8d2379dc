"""Budget overview command."""

from typing import List, Optional

import click

from timebudget.aggregators.budget_aggregator import (
    BudgetAggregator,
    ProjectBudgetSummary,
)
from timebudget.calculators.budget_calculator import usage_percentage
from timebudget.cli.error_handlers import DataValidationError, with_error_handling
from timebudget.cli.utils.formatters import (
    format_euros,
    format_hours,
    format_info,
    format_status,
    format_table,
)
from timebudget.cli.utils.services import create_reference_reader

OVERVIEW_HEADERS = [
    "Project",
    "Facturering",
    "Uren",
    "Besteed",
    "Budget",
    "Gebruikt",
    "Status",
    "Laatste invoer",
]
PHASE_HEADERS = ["Fase", "Uren", "Invoer", "Besteed", "Budget", "Gebruikt", "Status"]


def overview_rows(summaries: List[ProjectBudgetSummary]) -> List[List[str]]:
    rows = []
    for summary in summaries:
        hourly = summary.is_hourly
        rows.append(
            [
                summary.project.name,
                "Uurtarief" if hourly else "Vaste prijs",
                format_hours(summary.total_hours),
                format_euros(summary.total_spent_cents),
                "-" if hourly else format_euros(summary.total_budget_cents),
                "-"
                if hourly
                else f"{usage_percentage(summary.total_spent_cents, summary.total_budget_cents)}%",
                format_status(summary.status),
                summary.last_entry_on.isoformat() if summary.last_entry_on else "-",
            ]
        )
    return rows


def phase_rows(summary: ProjectBudgetSummary) -> List[List[str]]:
    rows = []
    for phase in summary.phase_breakdown.values():
        has_budget = phase.budget_cents > 0
        rows.append(
            [
                phase.phase_name,
                format_hours(phase.hours),
                str(phase.entry_count),
                format_euros(phase.spent_cents),
                format_euros(phase.budget_cents) if has_budget else "-",
                f"{usage_percentage(phase.spent_cents, phase.budget_cents)}%"
                if has_budget
                else "-",
                format_status(phase.status),
            ]
        )
    return rows


@click.command(name="budgets")
@click.option(
    "--view",
    type=click.Choice(["active", "archived", "all"]),
    default="active",
    show_default=True,
    help="Which projects to show",
)
@click.option("--project", "project_name", default=None, help="Only this project")
@click.option("--phases", is_flag=True, help="Show the per-phase breakdown")
@click.pass_context
def show_budgets(
    ctx: click.Context, view: str, project_name: Optional[str], phases: bool
):
    """Show hours, spend and budget status per project.

    Hourly projects show spend only; fixed-price projects compare spend with
    the sum of their phase budgets.

    Example:
        timebudget budgets
        timebudget budgets --view archived
        timebudget budgets --project "Villa Amsterdam" --phases
    """
    settings = ctx.obj["settings"]
    with with_error_handling(ctx.obj["debug"]):
        reader = create_reference_reader(settings)
        projects = reader.read_projects()
        catalog = reader.read_phase_catalog()
        entries = reader.read_time_entries()

        aggregator = BudgetAggregator(catalog, settings.get_budget_thresholds())
        summaries = aggregator.summarize_projects(projects, entries, view=view)

        if project_name:
            wanted = project_name.casefold()
            summaries = [s for s in summaries if s.project.name.casefold() == wanted]
            if not summaries:
                raise DataValidationError(
                    f'Project "{project_name}" niet gevonden',
                    recovery_hint="Check the name or use --view all",
                )

        if not summaries:
            click.echo(format_info(f"No {view} projects"))
            return

        click.echo(format_table(OVERVIEW_HEADERS, overview_rows(summaries)))

        if phases:
            for summary in summaries:
                click.echo()
                click.echo(click.style(summary.project.name, bold=True))
                if summary.phase_breakdown:
                    click.echo(format_table(PHASE_HEADERS, phase_rows(summary)))
                else:
                    click.echo(format_info("No hours or phase budgets"))
