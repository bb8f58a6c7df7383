"""
Input validation utilities for values typed in by the user.
"""
from typing import Optional, Tuple
from datetime import date, datetime

def validate_date(date_str: str) -> Optional[date]:
    """
    Validate and parse date string.

    Args:
        date_str: Date string in YYYY-MM-DD format

    Returns:
        Date object if valid, None otherwise
    """
    try:
        return datetime.strptime(date_str.strip(), "%Y-%m-%d").date()
    except (ValueError, AttributeError):
        return None

def validate_int(value: str, minimum: int, maximum: int) -> Optional[int]:
    """
    Parse an integer and check it against an inclusive range.

    Args:
        value: Raw text entered by the user
        minimum: Smallest accepted value
        maximum: Largest accepted value

    Returns:
        Parsed integer if valid and in range, None otherwise
    """
    try:
        number = int(str(value).strip())
    except ValueError:
        return None
    if number < minimum or number > maximum:
        return None
    return number

def validate_date_range(start_date: date, end_date: date) -> Tuple[bool, Optional[str]]:
    """
    Validate that a period date range is ordered.

    Args:
        start_date: First day of the range
        end_date: Last day of the range

    Returns:
        Tuple of (is_valid, error_message)
    """
    if start_date > end_date:
        return False, "Start date must not be after end date"
    return True, None
