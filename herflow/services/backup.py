"""
Backup and restore of the full app state.

Backups are pretty-printed UTF-8 JSON documents with the top-level keys
userData, periods, dailyLogs, theme and exportDate.

Typical usage:
    text = create_backup(store)
    Path(backup_filename()).write_text(text, encoding="utf-8")

    if not restore_backup(store, uploaded_text):
        show_error("Failed to restore data. Invalid file format.")
"""
import json
from datetime import date, datetime, timezone
from typing import List, Optional

from pydantic import ValidationError

from herflow.models.backup import BackupSnapshot
from herflow.models.daily_log import DailyLog
from herflow.models.period import PeriodEntry
from herflow.models.profile import UserProfile
from herflow.models.settings import Theme
from herflow.services.constants import BACKUP_FILENAME_TEMPLATE
from herflow.services.exceptions import BackupFormatError
from herflow.services.store import CycleStore
from herflow.utils.logging import logger, log_exception

def serialize_backup(
    profile: Optional[UserProfile],
    periods: List[PeriodEntry],
    daily_logs: List[DailyLog],
    theme: Theme,
    exported_at: Optional[datetime] = None
) -> str:
    """
    Serialize app state to backup text.

    Args:
        profile: User profile, written as null when absent
        periods: Logged periods in stored order
        daily_logs: Daily logs in stored order
        theme: Selected theme
        exported_at: Export timestamp, defaults to now (UTC)

    Returns:
        Pretty-printed JSON document
    """
    if exported_at is None:
        exported_at = datetime.now(timezone.utc)

    document = {
        "userData": profile.to_storage() if profile else None,
        "periods": [period.to_storage() for period in periods],
        "dailyLogs": [log.to_storage() for log in daily_logs],
        "theme": Theme(theme).value,
        "exportDate": exported_at.isoformat(),
    }
    return json.dumps(document, indent=2, ensure_ascii=False)

def parse_backup(text: str) -> BackupSnapshot:
    """
    Parse and validate backup text.

    Args:
        text: Backup document contents

    Returns:
        BackupSnapshot with None for every field absent from the document

    Raises:
        BackupFormatError: If the text is not JSON, not a JSON object, or
            holds invalid values
    """
    try:
        document = json.loads(text)
    except (TypeError, ValueError, RecursionError) as e:
        raise BackupFormatError(f"Backup is not valid JSON: {str(e)}")

    if not isinstance(document, dict):
        raise BackupFormatError("Backup must be a JSON object")

    try:
        return BackupSnapshot.model_validate(document)
    except ValidationError as e:
        raise BackupFormatError(f"Backup has invalid fields: {str(e)}")

def create_backup(store: CycleStore, exported_at: Optional[datetime] = None) -> str:
    """Serialize everything held by the store."""
    state = store.snapshot()
    return serialize_backup(
        state["profile"],
        state["periods"],
        state["daily_logs"],
        state["theme"],
        exported_at=exported_at
    )

def restore_backup(store: CycleStore, text: str) -> bool:
    """
    Restore store contents from backup text.

    The whole document is validated before anything is applied, so a bad
    document leaves the store untouched. On success onboarding is marked
    complete.

    Returns:
        True if the backup was applied, False otherwise
    """
    try:
        snapshot = parse_backup(text)
    except BackupFormatError as e:
        logger.warning("Rejected backup document", extra={"error": str(e)})
        return False

    try:
        store.restore(snapshot, onboarding_complete=True)
    except Exception:
        log_exception(logger, "Error applying backup")
        return False

    logger.info("Backup restored", extra={
        "export_date": snapshot.export_date.isoformat() if snapshot.export_date else None
    })
    return True

def backup_filename(on: Optional[date] = None) -> str:
    """File name for a backup made on the given day, today by default."""
    if on is None:
        on = datetime.now(timezone.utc).date()
    return BACKUP_FILENAME_TEMPLATE.format(date=on.isoformat())
