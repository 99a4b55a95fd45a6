# crud/time_entry.py

from typing import Optional, List
from uuid import UUID
from datetime import datetime
from sqlalchemy.orm import Session, joinedload

from app.models.time_entry import TimeEntry


class CRUDTimeEntry:
    """CRUD operations for the dashboard timer."""

    def create(self, db: Session, *, user_id: UUID, activity_id: UUID, start: datetime) -> TimeEntry:
        """Caller commits."""
        db_obj = TimeEntry(user_id=user_id, activity_id=activity_id, time_start=start)
        db.add(db_obj)
        db.flush()
        return db_obj

    def get_running(
        self, db: Session, *, user_id: UUID, activity_ids: Optional[List[UUID]] = None
    ) -> List[TimeEntry]:
        query = (
            db.query(TimeEntry)
            .filter(TimeEntry.user_id == user_id)
            .filter(TimeEntry.time_end.is_(None))
        )
        if activity_ids is not None:
            query = query.filter(TimeEntry.activity_id.in_(activity_ids))
        return query.order_by(TimeEntry.time_start.desc()).all()

    def get_active(self, db: Session, *, user_id: UUID) -> Optional[TimeEntry]:
        """Running entry with the latest start."""
        running = self.get_running(db, user_id=user_id)
        return running[0] if running else None

    def get_recent(self, db: Session, *, user_id: UUID, limit: int = 5) -> List[TimeEntry]:
        """Finished entries, newest first."""
        return (
            db.query(TimeEntry)
            .options(joinedload(TimeEntry.activity))
            .filter(TimeEntry.user_id == user_id)
            .filter(TimeEntry.time_end.isnot(None))
            .order_by(TimeEntry.time_start.desc())
            .limit(limit)
            .all()
        )

    def stop_running(
        self, db: Session, *, user_id: UUID, end: datetime, activity_ids: Optional[List[UUID]] = None
    ) -> List[TimeEntry]:
        """Stop running entries, optionally only those of `activity_ids`. Caller commits."""
        running = self.get_running(db, user_id=user_id, activity_ids=activity_ids)
        for entry in running:
            entry.time_end = end
        db.flush()
        return running


crud_time_entry = CRUDTimeEntry()
