"""Aggregators module for combining time entries into budget summaries."""

from timebudget.aggregators.budget_aggregator import (
    BudgetAggregator,
    PhaseBudgetBreakdown,
    ProjectBudgetSummary,
    ProjectView,
    sort_summaries,
)

__all__ = [
    "BudgetAggregator",
    "PhaseBudgetBreakdown",
    "ProjectBudgetSummary",
    "ProjectView",
    "sort_summaries",
]
