# app/models/__init__.py

from app.core.config import Base

# Import all models here so Alembic and app-wide imports work
from .user import User
from .activity_group import ActivityGroup
from .activity import Activity
from .daily_entry import DailyEntry
from .activity_period import ActivityPeriod
from .one_time_task import OneTimeTask
from .journal_entry import JournalEntry
from .time_entry import TimeEntry

__all__ = [
    "Base",
    "User",
    "ActivityGroup",
    "Activity",
    "DailyEntry",
    "ActivityPeriod",
    "OneTimeTask",
    "JournalEntry",
    "TimeEntry",
]
