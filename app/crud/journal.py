# crud/journal.py

from typing import Optional, List, Dict, Any
from uuid import UUID
from datetime import date
from sqlalchemy import or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from sqlalchemy.orm.attributes import flag_modified

from app.core.exceptions import DatabaseConflictError
from app.models.journal_entry import JournalEntry


class CRUDJournalEntry:
    # ====================================================
    # WRITE
    # ====================================================

    def upsert(self, db: Session, *, user_id: UUID, entry_date: date, data: Dict[str, Any]) -> JournalEntry:
        """Insert or replace the entry keyed on (user, entry_date)."""
        db_obj = self.get_by_date(db, user_id=user_id, entry_date=entry_date)
        if db_obj is None:
            db_obj = JournalEntry(user_id=user_id, entry_date=entry_date)
            db.add(db_obj)

        for field, value in data.items():
            setattr(db_obj, field, value)
        if "photo_urls" in data:
            flag_modified(db_obj, "photo_urls")

        try:
            db.commit()
        except IntegrityError as exc:
            db.rollback()
            raise DatabaseConflictError(f"Journal entry for {entry_date} was written concurrently") from exc
        db.refresh(db_obj)
        return db_obj

    def set_bookmark(self, db: Session, *, db_obj: JournalEntry, is_bookmarked: bool) -> JournalEntry:
        db_obj.is_bookmarked = is_bookmarked
        db.commit()
        db.refresh(db_obj)
        return db_obj

    # ====================================================
    # READ
    # ====================================================

    def get_by_date(self, db: Session, *, user_id: UUID, entry_date: date) -> Optional[JournalEntry]:
        return (
            db.query(JournalEntry)
            .filter(JournalEntry.user_id == user_id)
            .filter(JournalEntry.entry_date == entry_date)
            .first()
        )

    def get_all_by_user(
        self, db: Session, *, user_id: UUID, skip: int = 0, limit: int = 50
    ) -> List[JournalEntry]:
        """Entries newest first, with pagination"""
        return (
            db.query(JournalEntry)
            .filter(JournalEntry.user_id == user_id)
            .order_by(JournalEntry.entry_date.desc())
            .offset(skip)
            .limit(limit)
            .all()
        )

    def get_by_date_range(
        self, db: Session, *, user_id: UUID, start_date: date, end_date: date
    ) -> List[JournalEntry]:
        return (
            db.query(JournalEntry)
            .filter(JournalEntry.user_id == user_id)
            .filter(JournalEntry.entry_date >= start_date)
            .filter(JournalEntry.entry_date <= end_date)
            .order_by(JournalEntry.entry_date.asc())
            .all()
        )

    def search(
        self,
        db: Session,
        *,
        user_id: UUID,
        text: Optional[str] = None,
        day_quality: Optional[int] = None,
        is_bookmarked: Optional[bool] = None,
        has_video: Optional[bool] = None,
    ) -> List[JournalEntry]:
        """Column filters only; photo presence lives in a JSON list and is filtered by the service."""
        query = db.query(JournalEntry).filter(JournalEntry.user_id == user_id)

        if text:
            pattern = f"%{text}%"
            query = query.filter(
                or_(
                    JournalEntry.title.ilike(pattern),
                    JournalEntry.text_content.ilike(pattern),
                    JournalEntry.day_emoji.ilike(pattern),
                )
            )
        if day_quality is not None:
            query = query.filter(JournalEntry.day_quality == day_quality)
        if is_bookmarked is not None:
            query = query.filter(JournalEntry.is_bookmarked.is_(is_bookmarked))
        if has_video is True:
            query = query.filter(JournalEntry.video_url.isnot(None))
        elif has_video is False:
            query = query.filter(JournalEntry.video_url.is_(None))

        return query.order_by(JournalEntry.entry_date.desc()).all()


crud_journal_entry = CRUDJournalEntry()
