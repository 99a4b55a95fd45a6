# =====================================================================
# SERVICE LAYER - services/journal.py
# =====================================================================

import calendar
import logging
from typing import Optional, List, Tuple
from datetime import date, datetime, timezone
from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.exceptions import NotFoundError, PermissionError, ValidationError
from app.crud.journal import crud_journal_entry
from app.data.palette import DAY_QUALITY_OPTIONS
from app.models.journal_entry import JournalEntry
from app.models.user import User
from app.schemas.journal import (
    JournalCalendarDay,
    JournalEntryDetail,
    JournalEntryOut,
    JournalEntryUpsert,
)
from app.services.storage import PHOTO_BUCKET, VIDEO_BUCKET, blob_store, object_path

logger = logging.getLogger(__name__)

QUALITY_LABELS = {o["value"]: o["label"] for o in DAY_QUALITY_OPTIONS}

# (filename, content type, bytes) as read from a multipart upload
UploadedFile = Tuple[str, Optional[str], bytes]


def _extension(filename: str, default: str) -> str:
    _, dot, ext = (filename or "").rpartition(".")
    return ext if dot and ext else default


class JournalService:
    """One journal entry per user per day, with photo and video attachments."""

    def __init__(self):
        self.journal_crud = crud_journal_entry
        self.store = blob_store

    # =====================================================================
    # EDIT WINDOW
    # =====================================================================

    def can_edit(self, entry_date: date, today: Optional[date] = None) -> bool:
        today = today or datetime.now(timezone.utc).date()
        age = (today - entry_date).days
        return 0 <= age <= settings.JOURNAL_EDIT_WINDOW_DAYS

    def _check_editable(self, entry_date: date, today: Optional[date] = None) -> None:
        today = today or datetime.now(timezone.utc).date()
        if entry_date > today:
            raise ValidationError("Cannot write a journal entry for a future date")
        if not self.can_edit(entry_date, today):
            raise PermissionError(
                f"Entries older than {settings.JOURNAL_EDIT_WINDOW_DAYS} days can no longer be edited"
            )

    def _check_owned_path(self, user: User, path: str) -> None:
        if not path.startswith(f"{user.id}/"):
            raise ValidationError(f"Media path '{path}' does not belong to this user")

    # =====================================================================
    # WRITE
    # =====================================================================

    def upsert(
        self,
        db: Session,
        *,
        user: User,
        entry_date: date,
        obj_in: JournalEntryUpsert,
        today: Optional[date] = None,
    ) -> JournalEntry:
        """Create or replace the entry for the date. Photos dropped from the list are deleted."""
        self._check_editable(entry_date, today)
        for path in obj_in.photo_urls:
            self._check_owned_path(user, path)
        if obj_in.video_url:
            self._check_owned_path(user, obj_in.video_url)

        existing = self.journal_crud.get_by_date(db, user_id=user.id, entry_date=entry_date)
        old_photos = list(existing.photo_urls or []) if existing else []
        old_video = existing.video_url if existing else None

        entry = self.journal_crud.upsert(
            db, user_id=user.id, entry_date=entry_date, data=obj_in.model_dump()
        )

        for path in old_photos:
            if path not in (entry.photo_urls or []):
                self.store.remove(PHOTO_BUCKET, path)
        if old_video and old_video != entry.video_url:
            self.store.remove(VIDEO_BUCKET, old_video)

        return entry

    def add_photos(
        self,
        db: Session,
        *,
        user: User,
        entry_date: date,
        files: List[UploadedFile],
        now: Optional[datetime] = None,
    ) -> JournalEntry:
        now = now or datetime.now(timezone.utc)
        self._check_editable(entry_date, now.date())

        entry = self.journal_crud.get_by_date(db, user_id=user.id, entry_date=entry_date)
        photos = list(entry.photo_urls or []) if entry else []

        if not files:
            raise ValidationError("No files uploaded")
        if len(photos) + len(files) > settings.MAX_PHOTOS_PER_ENTRY:
            raise ValidationError(f"At most {settings.MAX_PHOTOS_PER_ENTRY} photos per entry")

        for filename, content_type, content in files:
            if not content:
                raise ValidationError(f"Empty file uploaded: {filename}")
            if content_type and not content_type.startswith("image/"):
                raise ValidationError(f"{filename} is not an image")
            if len(content) > settings.MAX_PHOTO_BYTES:
                raise ValidationError(f"{filename} is larger than {settings.MAX_PHOTO_BYTES // (1024 * 1024)} MB")

        timestamp = int(now.timestamp() * 1000)
        for index, (filename, _, content) in enumerate(files, start=len(photos)):
            path = object_path(user.id, entry_date, timestamp, _extension(filename, "jpg"), index=index)
            photos.append(self.store.upload(PHOTO_BUCKET, path, content))
        logger.info(f"Attached {len(files)} photo(s) to journal {entry_date} for user {user.id}")

        return self.journal_crud.upsert(
            db, user_id=user.id, entry_date=entry_date, data={"photo_urls": photos}
        )

    def set_video(
        self,
        db: Session,
        *,
        user: User,
        entry_date: date,
        file: UploadedFile,
        now: Optional[datetime] = None,
    ) -> JournalEntry:
        """Attach a video, replacing any previous one."""
        now = now or datetime.now(timezone.utc)
        self._check_editable(entry_date, now.date())

        filename, content_type, content = file
        if not content:
            raise ValidationError(f"Empty file uploaded: {filename}")
        if content_type and not content_type.startswith("video/"):
            raise ValidationError(f"{filename} is not a video")
        if len(content) > settings.MAX_VIDEO_BYTES:
            raise ValidationError(f"{filename} is larger than {settings.MAX_VIDEO_BYTES // (1024 * 1024)} MB")

        entry = self.journal_crud.get_by_date(db, user_id=user.id, entry_date=entry_date)
        old_video = entry.video_url if entry else None

        path = object_path(user.id, entry_date, int(now.timestamp() * 1000), _extension(filename, "mp4"))
        self.store.upload(VIDEO_BUCKET, path, content)
        entry = self.journal_crud.upsert(
            db, user_id=user.id, entry_date=entry_date, data={"video_url": path}
        )

        if old_video and old_video != path:
            self.store.remove(VIDEO_BUCKET, old_video)
        return entry

    def toggle_bookmark(self, db: Session, *, user: User, entry_date: date) -> JournalEntry:
        entry = self.journal_crud.get_by_date(db, user_id=user.id, entry_date=entry_date)
        if not entry:
            raise NotFoundError("Journal entry not found")
        return self.journal_crud.set_bookmark(db, db_obj=entry, is_bookmarked=not entry.is_bookmarked)

    # =====================================================================
    # READ
    # =====================================================================

    def to_detail(self, entry: JournalEntry, now: Optional[datetime] = None) -> JournalEntryDetail:
        """Entry with signed media URLs valid for SIGNED_URL_TTL_SECONDS."""
        now = now or datetime.now(timezone.utc)
        return JournalEntryDetail(
            **JournalEntryOut.model_validate(entry).model_dump(),
            can_edit=self.can_edit(entry.entry_date, now.date()),
            day_quality_label=QUALITY_LABELS.get(entry.day_quality),
            photo_signed_urls=[
                self.store.signed_url(PHOTO_BUCKET, p, now=now) for p in entry.photo_urls or []
            ],
            video_signed_url=(
                self.store.signed_url(VIDEO_BUCKET, entry.video_url, now=now) if entry.video_url else None
            ),
        )

    def get_entry(
        self, db: Session, *, user: User, entry_date: date, now: Optional[datetime] = None
    ) -> Optional[JournalEntryDetail]:
        entry = self.journal_crud.get_by_date(db, user_id=user.id, entry_date=entry_date)
        return self.to_detail(entry, now) if entry else None

    def list_entries(self, db: Session, *, user: User, skip: int = 0, limit: int = 50) -> List[JournalEntry]:
        return self.journal_crud.get_all_by_user(db, user_id=user.id, skip=skip, limit=limit)

    def month_calendar(self, db: Session, *, user: User, year: int, month: int) -> List[JournalCalendarDay]:
        if not 1 <= month <= 12:
            raise ValidationError("Month must be between 1 and 12")
        if not date.min.year <= year <= date.max.year:
            raise ValidationError(f"Year must be between {date.min.year} and {date.max.year}")
        last_day = calendar.monthrange(year, month)[1]
        entries = self.journal_crud.get_by_date_range(
            db, user_id=user.id, start_date=date(year, month, 1), end_date=date(year, month, last_day)
        )
        return [
            JournalCalendarDay(
                entry_date=e.entry_date,
                day_quality=e.day_quality,
                day_emoji=e.day_emoji,
                is_bookmarked=e.is_bookmarked,
            )
            for e in entries
        ]

    def search(
        self,
        db: Session,
        *,
        user: User,
        text: Optional[str] = None,
        day_quality: Optional[int] = None,
        is_bookmarked: Optional[bool] = None,
        has_photos: Optional[bool] = None,
        has_video: Optional[bool] = None,
    ) -> List[JournalEntry]:
        """Case-insensitive text match on title, content and emoji; each filter is ignored when None."""
        entries = self.journal_crud.search(
            db,
            user_id=user.id,
            text=text.strip() if text else None,
            day_quality=day_quality,
            is_bookmarked=is_bookmarked,
            has_video=has_video,
        )
        if has_photos is not None:
            entries = [e for e in entries if bool(e.photo_urls) == has_photos]
        return entries


journal_service = JournalService()
