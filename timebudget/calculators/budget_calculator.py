"""Budget calculations: spend and budget status.

This module implements the money side of the budget overview:
- Spend of a duration at an hourly rate (in cents)
- Classification of spend against a budget ceiling

The classification thresholds are a policy value (``BudgetThresholds``)
rather than constants, so they can be tuned through settings.
"""

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from enum import Enum
from typing import Union

from timebudget.calculators.time_utils import minutes_to_hours

Number = Union[int, float, Decimal]


class BudgetStatus(str, Enum):
    """Budget classification shared by projects and phases."""

    UNDER_BUDGET = "under_budget"
    ON_TRACK = "on_track"
    OVER_BUDGET = "over_budget"
    BUDGET_EXCEEDED = "budget_exceeded"

    @property
    def label(self) -> str:
        """Dutch display label."""
        return STATUS_LABELS[self]


STATUS_LABELS = {
    BudgetStatus.UNDER_BUDGET: "Onder budget",
    BudgetStatus.ON_TRACK: "Op schema",
    BudgetStatus.OVER_BUDGET: "Budget bijna op",
    BudgetStatus.BUDGET_EXCEEDED: "Budget overschreden",
}


@dataclass(frozen=True)
class BudgetThresholds:
    """Upper bounds (as spent/budget ratios) for each status band.

    Attributes:
        under_budget: Ratio up to which a budget counts as under budget
        on_track: Ratio up to which a budget counts as on track
        over_budget: Ratio up to which a budget is nearly used up;
            anything above is exceeded

    Example:
        >>> BudgetThresholds(under_budget=0.5, on_track=0.8, over_budget=1.0)
        BudgetThresholds(under_budget=0.5, on_track=0.8, over_budget=1.0)
    """

    under_budget: float = 0.75
    on_track: float = 0.90
    over_budget: float = 1.00

    def __post_init__(self) -> None:
        if not 0 <= self.under_budget <= self.on_track <= self.over_budget:
            raise ValueError(
                "Budget thresholds must satisfy "
                "0 <= under_budget <= on_track <= over_budget, got "
                f"{self.under_budget}, {self.on_track}, {self.over_budget}"
            )


DEFAULT_THRESHOLDS = BudgetThresholds()


def _to_decimal(value: Number) -> Decimal:
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def classify_budget_status(
    spent: Number,
    budget: Number,
    thresholds: BudgetThresholds = DEFAULT_THRESHOLDS,
) -> BudgetStatus:
    """Classify spend against a budget.

    A zero budget means there is no ceiling (hourly billing), which is
    always on track.

    Args:
        spent: Accrued spend
        budget: Budget ceiling in the same unit as ``spent``
        thresholds: Ratio bands to apply

    Returns:
        The status band for ``spent / budget``

    Example:
        >>> classify_budget_status(800, 1000).value
        'on_track'
        >>> classify_budget_status(1010, 1000).value
        'budget_exceeded'
        >>> classify_budget_status(5000, 0).value
        'on_track'
    """
    budget_value = _to_decimal(budget)
    if budget_value == 0:
        return BudgetStatus.ON_TRACK

    ratio = _to_decimal(spent) / budget_value
    if ratio <= _to_decimal(thresholds.under_budget):
        return BudgetStatus.UNDER_BUDGET
    if ratio <= _to_decimal(thresholds.on_track):
        return BudgetStatus.ON_TRACK
    if ratio <= _to_decimal(thresholds.over_budget):
        return BudgetStatus.OVER_BUDGET
    return BudgetStatus.BUDGET_EXCEEDED


def calculate_spent_cents(minutes: int, rate_cents: int) -> Decimal:
    """Spend in cents for a duration at an hourly rate.

    Rounded half-up to a whole cent.

    Example:
        >>> calculate_spent_cents(150, 7500)
        Decimal('18750')
        >>> calculate_spent_cents(20, 7500)
        Decimal('2500')
    """
    spent = minutes_to_hours(minutes) * Decimal(rate_cents)
    return spent.quantize(Decimal("1"), rounding=ROUND_HALF_UP)


def usage_percentage(spent: Number, budget: Number) -> int:
    """Whole-number percentage of the budget used (0 when there is no budget).

    Example:
        >>> usage_percentage(900, 1000)
        90
    """
    budget_value = _to_decimal(budget)
    if budget_value == 0:
        return 0
    ratio = _to_decimal(spent) / budget_value * 100
    return int(ratio.quantize(Decimal("1"), rounding=ROUND_HALF_UP))
