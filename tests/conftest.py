"""
Pytest configuration and shared fixtures.
"""
import pytest
from datetime import date, timedelta
from typing import List

from herflow.models.daily_log import DailyLog, Symptom
from herflow.models.period import FlowIntensity, PeriodEntry
from herflow.models.profile import UserProfile
from herflow.services.store import CycleStore
from herflow.services.utils import sort_periods
from herflow.utils.storage import LocalStorage

@pytest.fixture
def sample_profile() -> UserProfile:
    """Create a sample profile with a 28-day cycle."""
    return UserProfile(
        name="Test User",
        year_of_birth=1995,
        cycle_length=28,
        period_length=5
    )

@pytest.fixture
def regular_periods() -> List[PeriodEntry]:
    """Create five 28-day cycles, most recent first."""
    periods = [
        PeriodEntry(
            start_date=date(2024, 1, 1) + timedelta(days=i * 28),
            end_date=date(2024, 1, 5) + timedelta(days=i * 28),
            flow_intensity=FlowIntensity.MEDIUM
        )
        for i in range(5)
    ]
    return sort_periods(periods)

@pytest.fixture
def irregular_periods() -> List[PeriodEntry]:
    """Create periods with 24, 31 and 26 day cycles, most recent first."""
    return sort_periods([
        PeriodEntry(start_date=date(2024, 1, 1), end_date=date(2024, 1, 5)),
        PeriodEntry(start_date=date(2024, 1, 25), end_date=date(2024, 1, 28)),  # 24 days
        PeriodEntry(start_date=date(2024, 2, 25), end_date=date(2024, 3, 1)),   # 31 days
        PeriodEntry(start_date=date(2024, 3, 22), end_date=date(2024, 3, 27)),  # 26 days
    ])

@pytest.fixture
def symptom_logs() -> List[DailyLog]:
    """Logs with cramps x3, headache x2, bloating x2, nausea x1."""
    return [
        DailyLog(date=date(2024, 1, 1), symptoms=[Symptom.CRAMPS, Symptom.HEADACHE]),
        DailyLog(date=date(2024, 1, 2), symptoms=[Symptom.CRAMPS, Symptom.BLOATING]),
        DailyLog(date=date(2024, 1, 3), symptoms=[Symptom.CRAMPS, Symptom.NAUSEA]),
        DailyLog(date=date(2024, 1, 4), symptoms=[Symptom.BLOATING, Symptom.HEADACHE]),
    ]

@pytest.fixture
def storage(tmp_path) -> LocalStorage:
    """Create local storage in a temporary directory."""
    return LocalStorage(tmp_path / "data.json")

@pytest.fixture
def store(storage) -> CycleStore:
    """Create an empty, loaded store."""
    cycle_store = CycleStore(storage)
    cycle_store.load()
    return cycle_store

@pytest.fixture
def profile_store(store, sample_profile) -> CycleStore:
    """Create a store holding the sample profile."""
    store.set_profile(sample_profile)
    return store
