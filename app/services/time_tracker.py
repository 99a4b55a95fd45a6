# services/time_tracker.py
import logging
from typing import Optional, List
from uuid import UUID
from datetime import datetime, timezone
from sqlalchemy.orm import Session

from app.core.config import commit_or_rollback
from app.core.exceptions import NotFoundError, ValidationError
from app.crud.activities import crud_activity
from app.crud.time_entry import crud_time_entry
from app.models.time_entry import TimeEntry
from app.models.user import User
from app.schemas.timer import ActiveTimerOut, RecentTimeEntryOut, TimeEntryOut
from app.services.metrics import as_utc, format_duration, period_duration

logger = logging.getLogger(__name__)

RECENT_LIMIT = 5


class TimeTrackerService:
    """Dashboard stopwatch. Independent of daily entries and their periods."""

    def __init__(self):
        self.entry_crud = crud_time_entry
        self.activity_crud = crud_activity

    def start(
        self, db: Session, *, user: User, activity_id: UUID, now: Optional[datetime] = None
    ) -> TimeEntry:
        """Stop whatever is running, then start a new entry."""
        now = now or datetime.now(timezone.utc)
        activity = self.activity_crud.get(db, user_id=user.id, activity_id=activity_id)
        if not activity:
            raise NotFoundError("Activity not found")
        if activity.is_archived or activity.group.is_archived:
            raise ValidationError("Activity is archived")

        self.entry_crud.stop_running(db, user_id=user.id, end=now)
        entry = self.entry_crud.create(db, user_id=user.id, activity_id=activity.id, start=now)
        commit_or_rollback(db, "start timer")
        db.refresh(entry)
        return entry

    def stop(self, db: Session, *, user: User, now: Optional[datetime] = None) -> Optional[TimeEntry]:
        """Returns the stopped entry, or None when nothing was running."""
        stopped = self.entry_crud.stop_running(db, user_id=user.id, end=now or datetime.now(timezone.utc))
        if not stopped:
            return None
        commit_or_rollback(db, "stop timer")
        db.refresh(stopped[0])
        return stopped[0]

    def stop_for_activities(
        self, db: Session, *, user_id: UUID, activity_ids: List[UUID], now: Optional[datetime] = None
    ) -> List[TimeEntry]:
        """Stop running timers of activities being archived or deleted. Caller commits."""
        if not activity_ids:
            return []
        return self.entry_crud.stop_running(
            db, user_id=user_id, end=now or datetime.now(timezone.utc), activity_ids=activity_ids
        )

    def active(self, db: Session, *, user: User, now: Optional[datetime] = None) -> Optional[ActiveTimerOut]:
        entry = self.entry_crud.get_active(db, user_id=user.id)
        if entry is None:
            return None
        elapsed = period_duration(entry.time_start, None, now or datetime.now(timezone.utc))
        return ActiveTimerOut(
            **TimeEntryOut.model_validate(entry).model_dump(),
            elapsed_seconds=int(elapsed.total_seconds()),
        )

    def recent(self, db: Session, *, user: User, limit: int = RECENT_LIMIT) -> List[RecentTimeEntryOut]:
        result = []
        for entry in self.entry_crud.get_recent(db, user_id=user.id, limit=limit):
            duration = as_utc(entry.time_end) - as_utc(entry.time_start)
            result.append(
                RecentTimeEntryOut(
                    **TimeEntryOut.model_validate(entry).model_dump(),
                    activity_name=entry.activity.name if entry.activity else None,
                    duration_display=format_duration(duration),
                )
            )
        return result


time_tracker_service = TimeTrackerService()
