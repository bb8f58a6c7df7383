"""
Shared utility functions for cycle-related services.

These utilities handle calendar-date normalization and the ordering of the
period collection, which every other service relies on.
"""
import math
from datetime import date, datetime
from typing import List, Union

from herflow.models.period import PeriodEntry

DateLike = Union[date, datetime, str]

def to_calendar_date(value: DateLike) -> date:
    """
    Truncate a date-like value to a local calendar date.

    Timezone-aware datetimes are converted to local time first, naive
    datetimes are assumed to already be local. ISO strings are parsed.

    Args:
        value: date, datetime or ISO-8601 text

    Returns:
        Calendar date with time-of-day removed

    Raises:
        ValueError: If a string cannot be parsed as an ISO date

    Example:
        >>> to_calendar_date(datetime(2024, 3, 1, 23, 59))
        datetime.date(2024, 3, 1)
    """
    if isinstance(value, str):
        value = datetime.fromisoformat(value.strip())
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            value = value.astimezone()
        return value.date()
    return value

def sort_periods(periods: List[PeriodEntry]) -> List[PeriodEntry]:
    """
    Sort periods most recent first.

    The sort is stable, so entries sharing a start date keep their
    relative order.
    """
    return sorted(periods, key=lambda p: p.start_date, reverse=True)

def round_half_up(value: float) -> int:
    """Round to the nearest integer with .5 rounded up."""
    return int(math.floor(value + 0.5))
