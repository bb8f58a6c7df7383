"""
Service module for cycle date predictions.

Every function here is pure: it takes the profile and the period history
(sorted most recent first, as kept by the store) and returns a new value.
Missing data never raises; queries return None or False instead.

Typical usage:
    next_date = calculate_next_period_date(store.profile, store.periods)
    window = calculate_fertile_window(store.profile, store.periods)
    prediction = predict_cycle(store.profile, store.periods, date.today())
"""
from datetime import date, timedelta
from typing import List, Optional

from herflow.models.period import PeriodEntry
from herflow.models.prediction import CyclePrediction, FertileWindow
from herflow.models.profile import DEFAULT_CYCLE_LENGTH, UserProfile
from herflow.services.constants import (
    FERTILE_DAYS_AFTER_OVULATION,
    FERTILE_DAYS_BEFORE_OVULATION,
    LUTEAL_PHASE_DAYS,
)
from herflow.services.utils import DateLike, to_calendar_date

def get_most_recent_period(periods: List[PeriodEntry]) -> Optional[PeriodEntry]:
    """Return the most recent period, or None if nothing is logged."""
    return periods[0] if periods else None

def calculate_next_period_date(
    profile: Optional[UserProfile],
    periods: List[PeriodEntry]
) -> Optional[date]:
    """
    Predict the start of the next period.

    Args:
        profile: User profile providing the cycle length
        periods: Logged periods, most recent first

    Returns:
        Last period start plus the cycle length, or None without a profile
        or any logged period

    Example:
        >>> calculate_next_period_date(profile, periods)
        datetime.date(2024, 3, 29)
    """
    last_period = get_most_recent_period(periods)
    if last_period is None or profile is None:
        return None
    return last_period.start_date + timedelta(days=profile.cycle_length)

def calculate_ovulation_date(
    profile: Optional[UserProfile],
    periods: List[PeriodEntry]
) -> Optional[date]:
    """
    Estimate the ovulation date as 14 days before the next period.

    Returns None without a profile or period, and also when the cycle is
    shorter than 14 days, since ovulation would then fall before the
    period it belongs to.
    """
    last_period = get_most_recent_period(periods)
    if last_period is None or profile is None:
        return None
    offset = profile.cycle_length - LUTEAL_PHASE_DAYS
    if offset < 0:
        return None
    return last_period.start_date + timedelta(days=offset)

def calculate_fertile_window(
    profile: Optional[UserProfile],
    periods: List[PeriodEntry]
) -> Optional[FertileWindow]:
    """Return the days from 5 before to 1 after ovulation, inclusive."""
    ovulation = calculate_ovulation_date(profile, periods)
    if ovulation is None:
        return None
    return FertileWindow(
        start=ovulation - timedelta(days=FERTILE_DAYS_BEFORE_OVULATION),
        end=ovulation + timedelta(days=FERTILE_DAYS_AFTER_OVULATION)
    )

def is_period_day(periods: List[PeriodEntry], target_date: DateLike) -> bool:
    """Check whether any logged period covers the given day."""
    day = to_calendar_date(target_date)
    return any(period.contains(day) for period in periods)

def is_fertile_day(
    profile: Optional[UserProfile],
    periods: List[PeriodEntry],
    target_date: DateLike
) -> bool:
    window = calculate_fertile_window(profile, periods)
    if window is None:
        return False
    return window.contains(to_calendar_date(target_date))

def is_ovulation_day(
    profile: Optional[UserProfile],
    periods: List[PeriodEntry],
    target_date: DateLike
) -> bool:
    ovulation = calculate_ovulation_date(profile, periods)
    if ovulation is None:
        return False
    return to_calendar_date(target_date) == ovulation

def calculate_cycle_day(
    profile: Optional[UserProfile],
    periods: List[PeriodEntry],
    target_date: DateLike
) -> Optional[int]:
    """
    Calculate the 1-based day of the cycle for a date.

    Counting starts at the most recent logged period and wraps every cycle
    length, so dates far in the future still map onto a predicted cycle.
    Falls back to a 28-day cycle when there is no profile.

    Args:
        profile: User profile providing the cycle length
        periods: Logged periods, most recent first
        target_date: Day to calculate for

    Returns:
        Cycle day number, or None when no period is logged or the date is
        before the most recent period start

    Example:
        >>> calculate_cycle_day(profile, periods, periods[0].start_date)
        1
    """
    last_period = get_most_recent_period(periods)
    if last_period is None:
        return None

    days_since_start = (to_calendar_date(target_date) - last_period.start_date).days
    if days_since_start < 0:
        return None

    cycle_length = profile.cycle_length if profile else DEFAULT_CYCLE_LENGTH
    return days_since_start % cycle_length + 1

def calculate_days_until_next_period(
    profile: Optional[UserProfile],
    periods: List[PeriodEntry],
    today: DateLike
) -> Optional[int]:
    """Days from today to the predicted period; negative when it is late."""
    next_date = calculate_next_period_date(profile, periods)
    if next_date is None:
        return None
    return (next_date - to_calendar_date(today)).days

def predict_cycle(
    profile: Optional[UserProfile],
    periods: List[PeriodEntry],
    target_date: DateLike
) -> CyclePrediction:
    """
    Bundle every prediction for a single day.

    Args:
        profile: User profile
        periods: Logged periods, most recent first
        target_date: Day the prediction is made for

    Returns:
        CyclePrediction whose optional fields are None when data is missing
    """
    day = to_calendar_date(target_date)
    return CyclePrediction(
        target_date=day,
        next_period_date=calculate_next_period_date(profile, periods),
        days_until_next_period=calculate_days_until_next_period(profile, periods, day),
        ovulation_date=calculate_ovulation_date(profile, periods),
        fertile_window=calculate_fertile_window(profile, periods),
        cycle_day=calculate_cycle_day(profile, periods, day),
        is_period_day=is_period_day(periods, day),
        is_fertile_day=is_fertile_day(profile, periods, day),
        is_ovulation_day=is_ovulation_day(profile, periods, day)
    )
