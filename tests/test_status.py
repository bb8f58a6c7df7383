"""Tests for the calendar status message."""
from datetime import date

import pytest

from herflow.models.period import PeriodEntry
from herflow.services.status import get_status_message

PERIODS = [PeriodEntry(start_date=date(2024, 3, 1), end_date=date(2024, 3, 5))]

@pytest.mark.parametrize("today, expected", [
    (date(2024, 4, 2), "Your period is 4 days late"),
    (date(2024, 3, 29), "Period expected today"),
    (date(2024, 3, 26), "Period expected in 3 days"),
    (date(2024, 3, 2), "You're on your period"),
    (date(2024, 3, 15), "Ovulation day!"),
    (date(2024, 3, 11), "Fertile window"),
    (date(2024, 3, 20), "Day 20 of your cycle"),
])
def test_status_message(sample_profile, today, expected):
    assert get_status_message(sample_profile, PERIODS, today) == expected

def test_status_without_periods(sample_profile):
    assert get_status_message(sample_profile, [], date(2024, 3, 1)) == "Add your period to get started"

def test_status_before_last_period_without_profile():
    assert get_status_message(None, PERIODS, date(2024, 2, 1)) == "Track your cycle"
