"""
Profile edits coming from free-text settings fields.

Values arrive as raw text typed by the user. Invalid or unparseable input
is logged and rejected here; the store is never handed a bad value.
"""
from datetime import date
from typing import Any, Callable, Dict, Optional

from herflow.models.profile import (
    MAX_CYCLE_LENGTH,
    MAX_PERIOD_LENGTH,
    MIN_CYCLE_LENGTH,
    MIN_PERIOD_LENGTH,
)
from herflow.services.constants import MIN_BIRTH_YEAR
from herflow.services.exceptions import InvalidInputError
from herflow.services.store import CycleStore
from herflow.utils.logging import logger
from herflow.utils.validators import validate_date, validate_int

def _parse_name(raw_value: str, today: date) -> Optional[str]:
    name = raw_value.strip()
    return name or None

def _parse_year_of_birth(raw_value: str, today: date) -> Optional[int]:
    return validate_int(raw_value, MIN_BIRTH_YEAR + 1, today.year - 1)

def _parse_date_of_birth(raw_value: str, today: date) -> Optional[date]:
    birth_date = validate_date(raw_value)
    if birth_date is None or birth_date >= today:
        return None
    return birth_date

def _parse_cycle_length(raw_value: str, today: date) -> Optional[int]:
    return validate_int(raw_value, MIN_CYCLE_LENGTH, MAX_CYCLE_LENGTH)

def _parse_period_length(raw_value: str, today: date) -> Optional[int]:
    return validate_int(raw_value, MIN_PERIOD_LENGTH, MAX_PERIOD_LENGTH)

# Editable field name -> (profile attribute, parser)
EDITABLE_FIELDS: Dict[str, tuple[str, Callable[[str, date], Optional[Any]]]] = {
    "name": ("name", _parse_name),
    "yearOfBirth": ("year_of_birth", _parse_year_of_birth),
    "dateOfBirth": ("date_of_birth", _parse_date_of_birth),
    "cycleLength": ("cycle_length", _parse_cycle_length),
    "periodLength": ("period_length", _parse_period_length),
}

def apply_profile_edit(
    store: CycleStore,
    field: str,
    raw_value: str,
    today: Optional[date] = None
) -> bool:
    """
    Validate a settings edit and apply it to the profile.

    Args:
        store: Store holding the profile
        field: One of name, yearOfBirth, dateOfBirth, cycleLength, periodLength
        raw_value: Text entered by the user
        today: Reference day for birth date checks, defaults to today

    Returns:
        True if the profile was updated, False if the input was rejected
        or there is no profile yet

    Example:
        >>> apply_profile_edit(store, "cycleLength", "30")
        True
        >>> apply_profile_edit(store, "cycleLength", "50")
        False
    """
    if today is None:
        today = date.today()

    if field not in EDITABLE_FIELDS:
        logger.warning("Rejected edit of unknown profile field", extra={"field": field})
        return False

    attribute, parser = EDITABLE_FIELDS[field]
    value = parser(str(raw_value), today)
    if value is None:
        logger.warning("Rejected invalid profile value", extra={
            "field": field,
            "value": raw_value
        })
        return False

    try:
        updated = store.update_profile(**{attribute: value})
    except InvalidInputError as e:
        logger.warning("Rejected invalid profile value", extra={
            "field": field,
            "value": raw_value,
            "error": str(e)
        })
        return False

    return updated is not None

def set_pregnancy_mode(store: CycleStore, enabled: bool) -> bool:
    """Turn pregnancy mode on or off; False when there is no profile."""
    return store.update_profile(pregnancy_mode=enabled) is not None

def toggle_pregnancy_mode(store: CycleStore) -> bool:
    """Flip pregnancy mode and return the stored setting; False when there is no profile."""
    if store.profile is None:
        return False
    set_pregnancy_mode(store, not store.profile.pregnancy_mode)
    return store.profile.pregnancy_mode
