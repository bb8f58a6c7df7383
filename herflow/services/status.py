"""
Short status line describing where the user is in their cycle today.
"""
from typing import List, Optional

from herflow.models.period import PeriodEntry
from herflow.models.profile import UserProfile
from herflow.services.constants import UPCOMING_PERIOD_NOTICE_DAYS
from herflow.services.prediction import predict_cycle
from herflow.services.utils import DateLike

def get_status_message(
    profile: Optional[UserProfile],
    periods: List[PeriodEntry],
    today: DateLike
) -> str:
    """
    Build the status line for the calendar header.

    Checks run in priority order: late or upcoming period, period day,
    ovulation day, fertile window, then the plain cycle day.

    Example:
        >>> get_status_message(profile, [], date.today())
        'Add your period to get started'
    """
    if not periods:
        return "Add your period to get started"

    prediction = predict_cycle(profile, periods, today)
    days_until = prediction.days_until_next_period

    if days_until is not None:
        if days_until < 0:
            return f"Your period is {abs(days_until)} days late"
        if days_until == 0:
            return "Period expected today"
        if days_until <= UPCOMING_PERIOD_NOTICE_DAYS:
            return f"Period expected in {days_until} days"

    if prediction.is_period_day:
        return "You're on your period"
    if prediction.is_ovulation_day:
        return "Ovulation day!"
    if prediction.is_fertile_day:
        return "Fertile window"

    if prediction.cycle_day:
        return f"Day {prediction.cycle_day} of your cycle"
    return "Track your cycle"
