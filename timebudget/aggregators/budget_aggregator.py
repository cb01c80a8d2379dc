"""Budget aggregator for the project budget overview.

This module derives spend, budget and status per project and per phase
from raw time entries and each project's billing configuration. Nothing is
stored: summaries are recomputed from the current entries on every call,
and the aggregator keeps no state between calls.
"""

import datetime as dt
import logging
from collections import defaultdict
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Dict, Iterable, List, Literal, Optional, Sequence

from timebudget.calculators.budget_calculator import (
    DEFAULT_THRESHOLDS,
    BudgetStatus,
    BudgetThresholds,
    calculate_spent_cents,
    classify_budget_status,
)
from timebudget.calculators.time_utils import total_hours
from timebudget.models.phase import PhaseCatalog
from timebudget.models.project import Project
from timebudget.models.time_entry import TimeEntry

logger = logging.getLogger(__name__)

ProjectView = Literal["active", "archived", "all"]


@dataclass
class PhaseBudgetBreakdown:
    """Budget figures for one phase of one project.

    Attributes:
        phase_code: Canonical phase code
        phase_name: Display name from the catalog
        hours: Hours logged on the phase
        spent_cents: Hours x project rate, in cents
        budget_cents: Configured phase budget (0 for hourly projects)
        entry_count: Number of entries on the phase
        last_entry_on: Date of the most recent entry, if any
        status: Status band of spent against budget
    """

    phase_code: str
    phase_name: str
    hours: Decimal
    spent_cents: Decimal
    budget_cents: int
    entry_count: int
    last_entry_on: Optional[dt.date]
    status: BudgetStatus


@dataclass
class ProjectBudgetSummary:
    """Budget overview for one project.

    Attributes:
        project: The project summarized
        total_hours: Hours across all of the project's entries
        total_spent_cents: Total hours x rate, in cents
        total_budget_cents: Sum of phase budgets (0 for hourly projects)
        status: Status band of total spent against total budget
        phase_breakdown: Per-phase figures in catalog order; phases with
            neither entries nor a budget are left out
        entry_count: Number of entries on the project
        last_entry_on: Date of the most recent entry, if any
    """

    project: Project
    total_hours: Decimal
    total_spent_cents: Decimal
    total_budget_cents: int
    status: BudgetStatus
    phase_breakdown: Dict[str, PhaseBudgetBreakdown] = field(default_factory=dict)
    entry_count: int = 0
    last_entry_on: Optional[dt.date] = None

    @property
    def is_hourly(self) -> bool:
        return self.project.is_hourly


def _last_entry(entries: Sequence[TimeEntry]) -> Optional[dt.date]:
    return max((e.occurred_on for e in entries), default=None)


class BudgetAggregator:
    """Aggregates time entries into project budget summaries.

    For every project, spend is always hours x hourly rate. Hourly projects
    have no budget (status is always on track); fixed projects compare spend
    with the sum of their phase budgets. The same status bands apply at
    project and phase level.

    Example:
        >>> aggregator = BudgetAggregator(PhaseCatalog.fallback())
        >>> summaries = aggregator.summarize_projects(projects, entries)
        >>> summaries[0].phase_breakdown["schetsontwerp"].hours
        Decimal('2.5')
    """

    def __init__(
        self,
        catalog: PhaseCatalog,
        thresholds: BudgetThresholds = DEFAULT_THRESHOLDS,
    ) -> None:
        """Initialize the aggregator.

        Args:
            catalog: Phase catalog defining the breakdown order
            thresholds: Status bands for budget classification
        """
        self.catalog = catalog
        self.thresholds = thresholds

    def summarize_project(
        self, project: Project, entries: Iterable[TimeEntry]
    ) -> ProjectBudgetSummary:
        """Summarize one project.

        Args:
            project: Project to summarize
            entries: Time entries; entries of other projects are ignored

        Returns:
            ProjectBudgetSummary for the project
        """
        project_entries = [e for e in entries if e.project_id == project.id]

        minutes = sum(e.minutes for e in project_entries)
        spent = calculate_spent_cents(minutes, project.default_rate_cents)
        budget = project.total_budget_cents

        by_phase: Dict[str, List[TimeEntry]] = defaultdict(list)
        for entry in project_entries:
            by_phase[entry.phase_code].append(entry)

        unknown = set(by_phase) - set(self.catalog.codes)
        if unknown:
            logger.debug(
                f"Project {project.id} has entries on phases outside the "
                f"catalog: {sorted(unknown)}"
            )

        breakdown: Dict[str, PhaseBudgetBreakdown] = {}
        for phase in self.catalog:
            phase_entries = by_phase.get(phase.code, [])
            phase_budget = project.phase_budget_cents(phase.code)
            if not phase_entries and phase_budget <= 0:
                continue

            phase_minutes = sum(e.minutes for e in phase_entries)
            phase_spent = calculate_spent_cents(
                phase_minutes, project.default_rate_cents
            )
            breakdown[phase.code] = PhaseBudgetBreakdown(
                phase_code=phase.code,
                phase_name=phase.name,
                hours=total_hours(e.minutes for e in phase_entries),
                spent_cents=phase_spent,
                budget_cents=phase_budget,
                entry_count=len(phase_entries),
                last_entry_on=_last_entry(phase_entries),
                status=classify_budget_status(
                    phase_spent, phase_budget, self.thresholds
                ),
            )

        return ProjectBudgetSummary(
            project=project,
            total_hours=total_hours(e.minutes for e in project_entries),
            total_spent_cents=spent,
            total_budget_cents=budget,
            status=classify_budget_status(spent, budget, self.thresholds),
            phase_breakdown=breakdown,
            entry_count=len(project_entries),
            last_entry_on=_last_entry(project_entries),
        )

    def summarize_projects(
        self,
        projects: Iterable[Project],
        entries: Iterable[TimeEntry],
        view: ProjectView = "active",
    ) -> List[ProjectBudgetSummary]:
        """Summarize and order all projects in a view.

        Args:
            projects: All known projects
            entries: All time entries
            view: 'active' (not archived), 'archived' or 'all'

        Returns:
            Summaries ordered for display (see ``sort_summaries``)
        """
        entry_list = list(entries)
        selected = [p for p in projects if _in_view(p, view)]
        logger.info(
            f"Summarizing {len(selected)} {view} project(s) "
            f"from {len(entry_list)} time entries"
        )
        summaries = [self.summarize_project(p, entry_list) for p in selected]
        return sort_summaries(summaries, view)


def _in_view(project: Project, view: ProjectView) -> bool:
    if view == "active":
        return not project.archived
    if view == "archived":
        return project.archived
    return True


def sort_summaries(
    summaries: Iterable[ProjectBudgetSummary], view: ProjectView = "active"
) -> List[ProjectBudgetSummary]:
    """Order summaries for display.

    The archived view sorts by archive timestamp, newest first; other views
    sort by most recent entry, newest first. Summaries without that key come
    after the others. Ties are broken alphabetically by project name.
    """
    summaries = sorted(summaries, key=lambda s: s.project.name.casefold())

    if view == "archived":
        dated = [s for s in summaries if s.project.archived_at is not None]
        undated = [s for s in summaries if s.project.archived_at is None]
        dated.sort(key=lambda s: s.project.archived_at, reverse=True)
    else:
        dated = [s for s in summaries if s.last_entry_on is not None]
        undated = [s for s in summaries if s.last_entry_on is None]
        dated.sort(key=lambda s: s.last_entry_on, reverse=True)

    # list.sort is stable, so the alphabetical order survives within equal keys
    return dated + undated
