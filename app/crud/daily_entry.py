# crud/daily_entry.py

import logging
from typing import Optional, Dict, List
from uuid import UUID
from datetime import date, datetime
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from sqlalchemy.orm.attributes import flag_modified

from app.core.exceptions import DatabaseConflictError
from app.models.daily_entry import DailyEntry
from app.models.activity_period import ActivityPeriod

logger = logging.getLogger(__name__)


class CRUDDailyEntry:
    # ====================================================
    # MAIN DAILY ENTRY
    # ====================================================

    def create(self, db: Session, *, user_id: UUID, day: date, **fields) -> DailyEntry:
        """Insert the entry for (user, day). Caller commits."""
        entry = DailyEntry(user_id=user_id, date=day, task_counts={}, **fields)
        db.add(entry)
        try:
            db.flush()
        except IntegrityError as exc:
            db.rollback()
            raise DatabaseConflictError(f"Daily entry for {day} already exists") from exc
        return entry

    def get_by_user_and_date(self, db: Session, *, user_id: UUID, day: date) -> Optional[DailyEntry]:
        """Get daily entry for a specific user and date"""
        return (
            db.query(DailyEntry)
            .filter(DailyEntry.user_id == user_id)
            .filter(DailyEntry.date == day)
            .first()
        )

    def get_or_create(self, db: Session, *, user_id: UUID, day: date) -> DailyEntry:
        entry = self.get_by_user_and_date(db, user_id=user_id, day=day)
        if entry:
            return entry
        try:
            return self.create(db, user_id=user_id, day=day)
        except DatabaseConflictError:
            # Another request created it in between
            logger.info(f"Daily entry for {day} appeared concurrently, reloading")
            return self.get_by_user_and_date(db, user_id=user_id, day=day)

    def get_with_current_activity(self, db: Session, *, user_id: UUID, activity_ids: List[UUID]) -> List[DailyEntry]:
        """Entries whose current activity is one of `activity_ids`."""
        if not activity_ids:
            return []
        return (
            db.query(DailyEntry)
            .filter(DailyEntry.user_id == user_id)
            .filter(DailyEntry.current_activity_id.in_(activity_ids))
            .all()
        )

    def set_task_counts(self, db: Session, *, entry: DailyEntry, task_counts: Dict[str, int]) -> DailyEntry:
        """Store the integer progress map; the legacy list is cleared on every write. Caller commits."""
        entry.task_counts = dict(task_counts)
        entry.completed_tasks = None
        flag_modified(entry, "task_counts")
        db.flush()
        return entry

    # ====================================================
    # ACTIVITY PERIODS
    # ====================================================

    def get_periods(self, db: Session, *, entry_id: UUID) -> List[ActivityPeriod]:
        return (
            db.query(ActivityPeriod)
            .filter(ActivityPeriod.daily_entry_id == entry_id)
            .order_by(ActivityPeriod.start_time.asc())
            .all()
        )

    def open_period(
        self, db: Session, *, entry: DailyEntry, activity_id: UUID, start: datetime
    ) -> ActivityPeriod:
        """Caller commits."""
        period = ActivityPeriod(
            user_id=entry.user_id,
            daily_entry_id=entry.id,
            activity_id=activity_id,
            start_time=start,
        )
        db.add(period)
        db.flush()
        return period

    def close_open_periods(self, db: Session, *, entry_id: UUID, end: datetime) -> int:
        """Set end_time on every open period of the entry. Caller commits."""
        closed = 0
        for period in (
            db.query(ActivityPeriod)
            .filter(ActivityPeriod.daily_entry_id == entry_id)
            .filter(ActivityPeriod.end_time.is_(None))
            .all()
        ):
            period.end_time = end
            closed += 1
        db.flush()
        return closed


crud_daily_entry = CRUDDailyEntry()
