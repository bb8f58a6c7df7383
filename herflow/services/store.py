"""
Domain store owning every persisted collection.

The store is an explicitly constructed object wrapping a LocalStorage.
Callers create it once, load it, and pass it to whatever reads or mutates
state. Every mutating method writes the updated collection to storage
before returning.

Typical usage:
    store = open_store()
    store.add_period(PeriodEntry(start_date=date(2024, 3, 1), end_date=date(2024, 3, 5)))
    next_date = calculate_next_period_date(store.profile, store.periods)
"""
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional

from pydantic import ValidationError

from herflow.models.backup import BackupSnapshot
from herflow.models.daily_log import DailyLog
from herflow.models.period import PeriodEntry
from herflow.models.profile import UserProfile
from herflow.models.settings import DEFAULT_THEME, Theme
from herflow.services.constants import STORAGE_KEYS
from herflow.services.exceptions import InvalidInputError, PeriodIndexError, StorageError
from herflow.services.utils import DateLike, sort_periods, to_calendar_date
from herflow.utils.logging import logger, log_exception
from herflow.utils.storage import LocalStorage, get_data_path


class CycleStore:
    """Owner of the user profile, periods, daily logs and settings."""

    def __init__(self, storage: LocalStorage):
        self.storage = storage
        self._profile: Optional[UserProfile] = None
        self._periods: List[PeriodEntry] = []
        self._daily_logs: List[DailyLog] = []
        self._theme: Theme = DEFAULT_THEME
        self._onboarding_complete = False

    def __enter__(self) -> "CycleStore":
        self.load()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.flush()

    # Lifecycle

    def load(self) -> None:
        """
        Read every persisted key once and populate the in-memory state.

        Raises:
            StorageError: If the storage file is unreadable or a stored
                collection fails validation
        """
        try:
            raw_theme = self.storage.get_item(STORAGE_KEYS["theme"])
            raw_profile = self.storage.get_item(STORAGE_KEYS["profile"])
            raw_periods = self.storage.get_item(STORAGE_KEYS["periods"]) or []
            raw_logs = self.storage.get_item(STORAGE_KEYS["daily_logs"]) or []
            raw_onboarding = self.storage.get_item(STORAGE_KEYS["onboarding_complete"])

            self._theme = Theme(raw_theme) if raw_theme else DEFAULT_THEME
            self._profile = UserProfile.model_validate(raw_profile) if raw_profile else None
            self._periods = sort_periods([PeriodEntry.model_validate(p) for p in raw_periods])
            self._daily_logs = [DailyLog.model_validate(log) for log in raw_logs]
            self._onboarding_complete = bool(raw_onboarding)
        except (ValidationError, ValueError) as e:
            raise StorageError(f"Stored data is invalid: {str(e)}")

        logger.info("Loaded store", extra={
            "has_profile": self._profile is not None,
            "periods": len(self._periods),
            "daily_logs": len(self._daily_logs),
            "onboarding_complete": self._onboarding_complete
        })

    def flush(self) -> None:
        """Write every collection to storage."""
        self._save_theme(self._theme)
        self._save_profile(self._profile)
        self._save_periods(self._periods)
        self._save_daily_logs(self._daily_logs)
        self._save_onboarding_complete(self._onboarding_complete)

    # Setters write first and assign only after the write succeeds.

    def _save_theme(self, theme: Theme) -> None:
        self.storage.put_item(STORAGE_KEYS["theme"], theme.value)

    def _save_profile(self, profile: Optional[UserProfile]) -> None:
        if profile is None:
            self.storage.delete_item(STORAGE_KEYS["profile"])
        else:
            self.storage.put_item(STORAGE_KEYS["profile"], profile.to_storage())

    def _save_periods(self, periods: List[PeriodEntry]) -> None:
        self.storage.put_item(STORAGE_KEYS["periods"], [p.to_storage() for p in periods])

    def _save_daily_logs(self, daily_logs: List[DailyLog]) -> None:
        self.storage.put_item(STORAGE_KEYS["daily_logs"], [log.to_storage() for log in daily_logs])

    def _save_onboarding_complete(self, complete: bool) -> None:
        self.storage.put_item(STORAGE_KEYS["onboarding_complete"], complete)

    # Read accessors

    @property
    def profile(self) -> Optional[UserProfile]:
        return self._profile

    @property
    def periods(self) -> List[PeriodEntry]:
        """Periods sorted most recent first."""
        return list(self._periods)

    @property
    def daily_logs(self) -> List[DailyLog]:
        return list(self._daily_logs)

    @property
    def theme(self) -> Theme:
        return self._theme

    @property
    def onboarding_complete(self) -> bool:
        return self._onboarding_complete

    # Profile

    def set_profile(self, profile: Optional[UserProfile]) -> None:
        """Replace the profile, or remove it when None."""
        self._save_profile(profile)
        self._profile = profile
        logger.info("Profile set", extra={"has_profile": profile is not None})

    def update_profile(self, **changes: Any) -> Optional[UserProfile]:
        """
        Merge changes into the current profile.

        Args:
            **changes: Profile fields to replace, by attribute name

        Returns:
            The updated profile, or None when no profile exists yet

        Raises:
            InvalidInputError: If the merged profile fails validation; the
                stored profile is left unchanged
        """
        if self._profile is None:
            logger.debug("Ignoring profile update without a profile", extra={"fields": sorted(changes)})
            return None

        try:
            updated = UserProfile.model_validate({**self._profile.model_dump(), **changes})
        except ValidationError as e:
            raise InvalidInputError(f"Invalid profile update: {str(e)}")

        self._save_profile(updated)
        self._profile = updated
        logger.info("Profile updated", extra={"fields": sorted(changes)})
        return updated

    # Periods

    def _check_index(self, index: int) -> None:
        if index < 0 or index >= len(self._periods):
            raise PeriodIndexError(
                f"Period index {index} out of range for {len(self._periods)} periods"
            )

    def add_period(self, entry: PeriodEntry) -> None:
        """Add a period and keep the collection sorted most recent first."""
        periods = sort_periods(self._periods + [entry])
        self._save_periods(periods)
        self._periods = periods
        logger.info("Period added", extra={
            "start_date": str(entry.start_date),
            "end_date": str(entry.end_date),
            "total_periods": len(self._periods)
        })

    def update_period(self, index: int, entry: PeriodEntry) -> None:
        """
        Replace the period at a position in the sorted collection.

        Raises:
            PeriodIndexError: If index is outside the collection
        """
        self._check_index(index)
        periods = list(self._periods)
        periods[index] = entry
        periods = sort_periods(periods)
        self._save_periods(periods)
        self._periods = periods
        logger.info("Period updated", extra={"index": index, "start_date": str(entry.start_date)})

    def delete_period(self, index: int) -> None:
        """
        Remove the period at a position in the sorted collection.

        Raises:
            PeriodIndexError: If index is outside the collection
        """
        self._check_index(index)
        removed = self._periods[index]
        periods = self._periods[:index] + self._periods[index + 1:]
        self._save_periods(periods)
        self._periods = periods
        logger.info("Period deleted", extra={"index": index, "start_date": str(removed.start_date)})

    def find_period_index(self, start_date: DateLike) -> Optional[int]:
        """Return the first index whose period starts on start_date."""
        day = to_calendar_date(start_date)
        for index, period in enumerate(self._periods):
            if period.start_date == day:
                return index
        return None

    # Daily logs

    def upsert_daily_log(self, log: DailyLog) -> None:
        """Replace the log for the same date, or append a new one."""
        logs = list(self._daily_logs)
        for index, existing in enumerate(logs):
            if existing.date == log.date:
                logs[index] = log
                break
        else:
            logs.append(log)
        self._save_daily_logs(logs)
        self._daily_logs = logs
        logger.debug("Daily log saved", extra={"date": str(log.date)})

    def get_daily_log(self, day: DateLike) -> Optional[DailyLog]:
        """Return the log for exactly this date, if any."""
        day = to_calendar_date(day)
        for log in self._daily_logs:
            if log.date == day:
                return log
        return None

    # Settings

    def set_theme(self, theme: Theme) -> None:
        theme = Theme(theme)
        self._save_theme(theme)
        self._theme = theme

    def set_onboarding_complete(self, complete: bool) -> None:
        self._save_onboarding_complete(complete)
        self._onboarding_complete = complete

    # Bulk operations

    @contextmanager
    def _rollback_on_error(self) -> Iterator[None]:
        """Put memory and storage back to their prior state if the block fails."""
        previous = (self._profile, self._periods, self._daily_logs, self._theme, self._onboarding_complete)
        try:
            yield
        except Exception:
            (self._profile, self._periods, self._daily_logs,
             self._theme, self._onboarding_complete) = previous
            try:
                self.flush()
            except StorageError:
                log_exception(logger, "Failed to roll back storage")
            raise

    def restore(self, snapshot: BackupSnapshot, onboarding_complete: Optional[bool] = None) -> None:
        """
        Apply the fields present in a backup snapshot.

        Fields that are None in the snapshot leave the matching collection
        untouched. Restored periods are re-sorted. The snapshot is applied
        as a whole: if any write fails, every collection is put back.

        Args:
            snapshot: Validated backup contents
            onboarding_complete: Onboarding flag to set along with the snapshot

        Raises:
            StorageError: If a write fails
        """
        with self._rollback_on_error():
            if snapshot.user_data is not None:
                self.set_profile(snapshot.user_data)
            if snapshot.periods is not None:
                periods = sort_periods(snapshot.periods)
                self._save_periods(periods)
                self._periods = periods
            if snapshot.daily_logs is not None:
                logs = list(snapshot.daily_logs)
                self._save_daily_logs(logs)
                self._daily_logs = logs
            if snapshot.theme is not None:
                self.set_theme(snapshot.theme)
            if onboarding_complete is not None:
                self.set_onboarding_complete(onboarding_complete)
        logger.info("Store restored from snapshot", extra={
            "profile": snapshot.user_data is not None,
            "periods": None if snapshot.periods is None else len(snapshot.periods),
            "daily_logs": None if snapshot.daily_logs is None else len(snapshot.daily_logs)
        })

    def clear(self) -> None:
        """Wipe all data back to a fresh install."""
        with self._rollback_on_error():
            self.set_profile(None)
            self._save_periods([])
            self._periods = []
            self._save_daily_logs([])
            self._daily_logs = []
            self.set_theme(DEFAULT_THEME)
            self.set_onboarding_complete(False)
        logger.info("Store cleared")

    def snapshot(self) -> Dict[str, Any]:
        """Read-only view of the current state for the codec and services."""
        return {
            "profile": self._profile,
            "periods": self.periods,
            "daily_logs": self.daily_logs,
            "theme": self._theme,
        }


def open_store(path: Optional[Path] = None) -> CycleStore:
    """
    Create and load a store.

    Args:
        path: Storage file; defaults to get_data_path()

    Returns:
        Loaded CycleStore
    """
    store = CycleStore(LocalStorage(path or get_data_path()))
    store.load()
    return store
