"""
Tracking flows that touch several store collections at once.

This covers saving a day's log (optionally marking it as a period start),
removing a period by its start date, and the onboarding steps.
"""
from datetime import date, timedelta
from typing import Optional

from herflow.models.daily_log import DailyLog
from herflow.models.period import FlowIntensity, PeriodEntry
from herflow.models.profile import DEFAULT_PERIOD_LENGTH, UserProfile
from herflow.services.exceptions import InvalidInputError
from herflow.services.store import CycleStore
from herflow.services.utils import DateLike, to_calendar_date
from herflow.utils.logging import logger
from herflow.utils.validators import validate_date_range

def _default_period_end(store: CycleStore, start_date: date) -> date:
    period_length = store.profile.period_length if store.profile else DEFAULT_PERIOD_LENGTH
    return start_date + timedelta(days=period_length - 1)

def save_daily_log(
    store: CycleStore,
    log: DailyLog,
    period_start: bool = False,
    flow_intensity: FlowIntensity = FlowIntensity.LIGHT
) -> DailyLog:
    """
    Save a day's log, logging a period start on the same day if requested.

    When period_start is set, the flow intensity is recorded on the log and
    a period lasting the profile's period length is logged from that day.
    A period already starting on that day is replaced instead of duplicated.

    Args:
        store: Store to write to
        log: Complete log for the day
        period_start: Whether a period started on this day
        flow_intensity: Flow level for the period start

    Returns:
        The log as saved
    """
    if period_start:
        log = log.model_copy(update={"flow_intensity": FlowIntensity(flow_intensity)})
        entry = PeriodEntry(
            start_date=log.date,
            end_date=_default_period_end(store, log.date),
            flow_intensity=flow_intensity
        )
        existing = store.find_period_index(log.date)
        if existing is None:
            store.add_period(entry)
        else:
            store.update_period(existing, entry)
            logger.info("Replaced period with same start date", extra={"start_date": str(log.date)})

    store.upsert_daily_log(log)
    return log

def delete_period_starting_on(store: CycleStore, start_date: DateLike) -> bool:
    """Delete the first period starting on the given day, if any."""
    index = store.find_period_index(start_date)
    if index is None:
        return False
    store.delete_period(index)
    return True

def start_onboarding(
    store: CycleStore,
    name: str,
    year_of_birth: Optional[int] = None
) -> UserProfile:
    """
    Create a profile with default cycle settings.

    Raises:
        pydantic.ValidationError: If the name is blank
    """
    profile = UserProfile(name=name, year_of_birth=year_of_birth)
    store.set_profile(profile)
    return profile

def complete_onboarding(
    store: CycleStore,
    last_period_start: Optional[DateLike] = None,
    last_period_end: Optional[DateLike] = None
) -> None:
    """
    Finish onboarding, recording the last period when one was given.

    Without an end date the period lasts the profile's period length.
    Skipping the last period step is allowed.

    Raises:
        InvalidInputError: If the end date is before the start date
    """
    if last_period_start is not None:
        start = to_calendar_date(last_period_start)
        if last_period_end is not None:
            end = to_calendar_date(last_period_end)
        else:
            end = _default_period_end(store, start)
        is_valid, error = validate_date_range(start, end)
        if not is_valid:
            raise InvalidInputError(error)
        store.update_profile(last_period_start=start)
        store.add_period(PeriodEntry(start_date=start, end_date=end))

    store.set_onboarding_complete(True)
    logger.info("Onboarding complete", extra={"logged_period": last_period_start is not None})
