"""Time conversion utilities.

This module converts between the two representations of duration used in
timebudget:
- Whole minutes, as stored on time entries
- Decimal hours, as typed in spreadsheets and shown in reports

Minutes are always non-negative integers obtained by rounding hours x 60
half-up.
"""

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Iterable, Union

Number = Union[int, float, Decimal]

MINUTES_PER_HOUR = Decimal("60")


def hours_to_minutes(hours: Number) -> int:
    """Convert decimal hours to whole minutes.

    Args:
        hours: Duration in hours

    Returns:
        Minutes rounded half-up, never below 0

    Example:
        >>> hours_to_minutes(2.5)
        150
        >>> hours_to_minutes(0.125)
        8
        >>> hours_to_minutes(-1)
        0
    """
    try:
        minutes = (Decimal(str(hours)) * MINUTES_PER_HOUR).quantize(
            Decimal("1"), rounding=ROUND_HALF_UP
        )
    except InvalidOperation:
        return 0
    return max(0, int(minutes))


def minutes_to_hours(minutes: int) -> Decimal:
    """Convert whole minutes to decimal hours (unrounded).

    Example:
        >>> minutes_to_hours(150)
        Decimal('2.5')
    """
    return Decimal(minutes) / MINUTES_PER_HOUR


def total_hours(minutes: Iterable[int]) -> Decimal:
    """Sum a series of minute durations and express it in hours.

    Example:
        >>> total_hours([60, 90])
        Decimal('2.5')
    """
    return minutes_to_hours(sum(minutes))
