"""Calculator modules for timebudget."""

from timebudget.calculators.budget_calculator import (
    DEFAULT_THRESHOLDS,
    STATUS_LABELS,
    BudgetStatus,
    BudgetThresholds,
    calculate_spent_cents,
    classify_budget_status,
    usage_percentage,
)
from timebudget.calculators.time_utils import (
    hours_to_minutes,
    minutes_to_hours,
    total_hours,
)

__all__ = [
    # budget_calculator
    "DEFAULT_THRESHOLDS",
    "STATUS_LABELS",
    "BudgetStatus",
    "BudgetThresholds",
    "calculate_spent_cents",
    "classify_budget_status",
    "usage_percentage",
    # time_utils
    "hours_to_minutes",
    "minutes_to_hours",
    "total_hours",
]
