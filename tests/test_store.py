"""
Tests for the domain store.
"""
import json
import pytest
from datetime import date, datetime
from unittest.mock import Mock

from herflow.models.daily_log import DailyLog, Mood, Symptom
from herflow.models.period import FlowIntensity, PeriodEntry
from herflow.models.profile import UserProfile
from herflow.models.settings import Theme
from herflow.services.exceptions import InvalidInputError, PeriodIndexError, StorageError
from herflow.services.store import CycleStore, open_store
from herflow.utils.storage import LocalStorage

def period(start, end=None, flow=None):
    return PeriodEntry(start_date=start, end_date=end or start, flow_intensity=flow)

def starts(store):
    return [p.start_date for p in store.periods]

def reload(store):
    """Load a fresh store from the same file."""
    fresh = CycleStore(LocalStorage(store.storage.path))
    fresh.load()
    return fresh

def test_empty_store_defaults(store):
    assert store.profile is None
    assert store.periods == []
    assert store.daily_logs == []
    assert store.theme == Theme.MODERN
    assert store.onboarding_complete is False

def test_add_period_keeps_descending_order(store):
    """Test periods stay sorted most recent first after each add."""
    store.add_period(period(date(2024, 2, 1)))
    store.add_period(period(date(2024, 3, 1)))
    store.add_period(period(date(2024, 1, 1)))

    assert starts(store) == [date(2024, 3, 1), date(2024, 2, 1), date(2024, 1, 1)]

def test_add_period_allows_duplicate_start(store):
    store.add_period(period(date(2024, 3, 1), date(2024, 3, 4), FlowIntensity.LIGHT))
    store.add_period(period(date(2024, 3, 1), date(2024, 3, 6), FlowIntensity.HEAVY))

    assert len(store.periods) == 2
    assert store.find_period_index(date(2024, 3, 1)) == 0
    assert store.periods[0].flow_intensity == FlowIntensity.LIGHT

def test_update_period_resorts(store):
    """Test an update that changes the start date re-sorts the collection."""
    for day in (1, 10, 20):
        store.add_period(period(date(2024, 3, day)))

    store.update_period(0, period(date(2024, 2, 1)))

    assert starts(store) == [date(2024, 3, 10), date(2024, 3, 1), date(2024, 2, 1)]

def test_delete_period(store):
    for day in (1, 10, 20):
        store.add_period(period(date(2024, 3, day)))

    store.delete_period(1)

    assert starts(store) == [date(2024, 3, 20), date(2024, 3, 1)]

@pytest.mark.parametrize("index", [-1, 2, 10])
def test_period_index_out_of_range(store, index):
    """Test bad indices raise and leave the collection unchanged."""
    store.add_period(period(date(2024, 3, 1)))
    store.add_period(period(date(2024, 4, 1)))

    with pytest.raises(PeriodIndexError):
        store.update_period(index, period(date(2024, 5, 1)))
    with pytest.raises(PeriodIndexError):
        store.delete_period(index)
    assert starts(store) == [date(2024, 4, 1), date(2024, 3, 1)]

def test_period_index_error_is_index_error(store):
    with pytest.raises(IndexError):
        store.delete_period(0)

def test_mutations_persist_immediately(store):
    """Test a freshly loaded store sees every mutation."""
    store.add_period(period(date(2024, 3, 1), date(2024, 3, 5)))
    store.add_period(period(date(2024, 4, 1), date(2024, 4, 5)))

    assert starts(reload(store)) == [date(2024, 4, 1), date(2024, 3, 1)]

def test_persisted_periods_use_camel_case(store):
    store.add_period(period(date(2024, 3, 1), date(2024, 3, 5), FlowIntensity.MEDIUM))

    document = json.loads(store.storage.path.read_text())
    assert document["periods"] == [
        {"startDate": "2024-03-01", "endDate": "2024-03-05", "flowIntensity": 3}
    ]

def test_load_sorts_unsorted_periods(storage):
    """Test hand-edited unsorted data is sorted on load."""
    storage.put_item("periods", [
        {"startDate": "2024-01-01", "endDate": "2024-01-05"},
        {"startDate": "2024-03-01", "endDate": "2024-03-05"},
    ])
    store = CycleStore(storage)
    store.load()

    assert starts(store) == [date(2024, 3, 1), date(2024, 1, 1)]

def test_load_invalid_data_raises_storage_error(storage):
    storage.put_item("periods", [{"startDate": "2024-03-05", "endDate": "2024-03-01"}])
    store = CycleStore(storage)

    with pytest.raises(StorageError):
        store.load()

def test_set_profile_and_clear(store, sample_profile):
    store.set_profile(sample_profile)
    assert reload(store).profile == sample_profile

    store.set_profile(None)
    assert reload(store).profile is None
    assert store.storage.get_item("userProfile") is None

def test_update_profile_merges(profile_store):
    updated = profile_store.update_profile(cycle_length=30, pregnancy_mode=True)

    assert updated.cycle_length == 30
    assert updated.pregnancy_mode is True
    assert updated.name == "Test User"
    assert reload(profile_store).profile.cycle_length == 30

def test_update_profile_without_profile_is_noop(store):
    """Test updating a missing profile neither raises nor creates one."""
    assert store.update_profile(cycle_length=30) is None
    assert store.profile is None

def test_update_profile_invalid_leaves_state(profile_store):
    with pytest.raises(InvalidInputError):
        profile_store.update_profile(cycle_length=60)

    assert profile_store.profile.cycle_length == 28
    assert reload(profile_store).profile.cycle_length == 28

def test_upsert_daily_log_replaces_whole_log(store):
    """Test saving a log for an existing date replaces it without merging."""
    store.upsert_daily_log(DailyLog(date=date(2024, 3, 1), symptoms=[Symptom.CRAMPS], notes="first"))
    store.upsert_daily_log(DailyLog(date=date(2024, 3, 2), moods=[Mood.CALM]))
    store.upsert_daily_log(DailyLog(date=date(2024, 3, 1), moods=[Mood.HAPPY]))

    assert len(store.daily_logs) == 2
    replaced = store.get_daily_log(date(2024, 3, 1))
    assert replaced.moods == [Mood.HAPPY]
    assert replaced.symptoms == []
    assert replaced.notes is None
    assert store.daily_logs[0].date == date(2024, 3, 1)

def test_get_daily_log_lookup(store):
    store.upsert_daily_log(DailyLog(date=date(2024, 3, 1), water_intake=4))

    assert store.get_daily_log(date(2024, 3, 1)).water_intake == 4
    assert store.get_daily_log("2024-03-01").water_intake == 4
    assert store.get_daily_log(datetime(2024, 3, 1, 18, 30)).water_intake == 4
    assert store.get_daily_log(date(2024, 3, 2)) is None

def test_theme_and_onboarding_persist(store):
    store.set_theme(Theme.RETRO)
    store.set_onboarding_complete(True)

    fresh = reload(store)
    assert fresh.theme == Theme.RETRO
    assert fresh.onboarding_complete is True

def test_clear_wipes_everything(profile_store):
    profile_store.add_period(period(date(2024, 3, 1)))
    profile_store.set_onboarding_complete(True)

    profile_store.clear()

    fresh = reload(profile_store)
    assert fresh.profile is None
    assert fresh.periods == []
    assert fresh.onboarding_complete is False

def test_context_manager_loads_and_flushes(storage):
    with CycleStore(storage) as store:
        store.add_period(period(date(2024, 3, 1)))

    assert storage.get_item("theme") == "modern"
    assert storage.get_item("onboardingComplete") is False

def test_accessors_return_copies(store):
    store.add_period(period(date(2024, 3, 1)))
    store.periods.append(period(date(2024, 4, 1)))

    assert len(store.periods) == 1

def test_storage_failure_propagates():
    """Test write errors are not swallowed by the store."""
    storage = Mock()
    storage.put_item.side_effect = StorageError("disk full")
    store = CycleStore(storage)

    with pytest.raises(StorageError):
        store.add_period(period(date(2024, 3, 1)))

def test_failed_write_leaves_memory_unchanged(profile_store):
    """Test a mutator whose write fails keeps its previous in-memory state."""
    profile_store.add_period(period(date(2024, 3, 1)))
    profile_store.storage.put_item = Mock(side_effect=StorageError("disk full"))

    with pytest.raises(StorageError):
        profile_store.add_period(period(date(2024, 4, 1)))
    with pytest.raises(StorageError):
        profile_store.set_theme(Theme.RETRO)
    with pytest.raises(StorageError):
        profile_store.update_profile(cycle_length=30)
    with pytest.raises(StorageError):
        profile_store.upsert_daily_log(DailyLog(date=date(2024, 3, 1)))

    assert starts(profile_store) == [date(2024, 3, 1)]
    assert profile_store.theme == Theme.MODERN
    assert profile_store.profile.cycle_length == 28
    assert profile_store.daily_logs == []

def test_open_store_uses_environment(tmp_path, monkeypatch):
    data_file = tmp_path / "env" / "data.json"
    monkeypatch.setenv("HERFLOW_DATA_FILE", str(data_file))

    store = open_store()
    store.set_profile(UserProfile(name="Env User"))

    assert store.storage.path == data_file
    assert data_file.exists()
