"""
Backup snapshot model definition.
"""
from datetime import datetime
from typing import List, Optional

from herflow.models.base import CamelModel
from herflow.models.daily_log import DailyLog
from herflow.models.period import PeriodEntry
from herflow.models.profile import UserProfile
from herflow.models.settings import Theme


class BackupSnapshot(CamelModel):
    """
    Full exported state of the app.

    Every field is optional so partial documents can still be restored;
    a missing or null field means "leave that part of the store alone".
    """
    user_data: Optional[UserProfile] = None
    periods: Optional[List[PeriodEntry]] = None
    daily_logs: Optional[List[DailyLog]] = None
    theme: Optional[Theme] = None
    export_date: Optional[datetime] = None
