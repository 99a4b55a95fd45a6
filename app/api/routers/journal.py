# =====================================================================
# ROUTER - app/api/routers/journal.py
# =====================================================================

from typing import List, Optional
from datetime import date
from fastapi import APIRouter, Depends, File, Query, UploadFile
from sqlalchemy.orm import Session

from app.core.config import get_db
from app.core.security import get_current_user
from app.models.user import User
from app.services.journal import journal_service
from app.schemas.journal import (
    BookmarkResponse,
    JournalCalendarDay,
    JournalEntryDetail,
    JournalEntryOut,
    JournalEntryUpsert,
)

router = APIRouter(prefix="/journal", tags=["Journal"])


# =====================================================================
# LISTING
# =====================================================================


@router.get("", response_model=List[JournalEntryOut], summary="List my entries")
def list_entries(
    skip: int = Query(0, ge=0),
    limit: int = Query(50, ge=1, le=365),
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Entries, newest first."""
    return journal_service.list_entries(db, user=current_user, skip=skip, limit=limit)


@router.get("/search", response_model=List[JournalEntryOut], summary="Search entries")
def search_entries(
    q: Optional[str] = Query(None, description="Matches title, content and emoji"),
    day_quality: Optional[int] = Query(None, ge=1, le=5),
    is_bookmarked: Optional[bool] = None,
    has_photos: Optional[bool] = None,
    has_video: Optional[bool] = None,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """
    Search entries. Every filter is optional; leave it out to match both ways.
    """
    return journal_service.search(
        db,
        user=current_user,
        text=q,
        day_quality=day_quality,
        is_bookmarked=is_bookmarked,
        has_photos=has_photos,
        has_video=has_video,
    )


@router.get("/calendar/{year}/{month}", response_model=List[JournalCalendarDay], summary="Month calendar")
def month_calendar(
    year: int,
    month: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return journal_service.month_calendar(db, user=current_user, year=year, month=month)


# =====================================================================
# SINGLE ENTRY
# =====================================================================


@router.get("/{entry_date}", response_model=Optional[JournalEntryDetail], summary="Get entry for a date")
def get_entry(
    entry_date: date,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """
    The entry with signed photo/video links, or null when the date has no entry.
    """
    return journal_service.get_entry(db, user=current_user, entry_date=entry_date)


@router.put("/{entry_date}", response_model=JournalEntryDetail, summary="Create or replace entry")
def upsert_entry(
    entry_date: date,
    entry_data: JournalEntryUpsert,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """
    Write the entry for a date.

    **Limits:** title 30 chars, text 300 chars, quality 1-5, up to 10 photos.
    Entries older than 7 days are read-only.
    """
    entry = journal_service.upsert(db, user=current_user, entry_date=entry_date, obj_in=entry_data)
    return journal_service.to_detail(entry)


@router.post("/{entry_date}/bookmark", response_model=BookmarkResponse, summary="Toggle bookmark")
def toggle_bookmark(
    entry_date: date,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    entry = journal_service.toggle_bookmark(db, user=current_user, entry_date=entry_date)
    return BookmarkResponse(entry_date=entry.entry_date, is_bookmarked=entry.is_bookmarked)


# =====================================================================
# MEDIA
# =====================================================================


@router.post("/{entry_date}/photos", response_model=JournalEntryDetail, summary="Upload photos")
async def upload_photos(
    entry_date: date,
    files: List[UploadFile] = File(...),
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """
    Attach photos (5 MB each, 10 per entry).
    """
    uploaded = [(f.filename, f.content_type, await f.read()) for f in files]
    entry = journal_service.add_photos(db, user=current_user, entry_date=entry_date, files=uploaded)
    return journal_service.to_detail(entry)


@router.post("/{entry_date}/video", response_model=JournalEntryDetail, summary="Upload video")
async def upload_video(
    entry_date: date,
    file: UploadFile = File(...),
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """
    Attach a video (50 MB), replacing the previous one.
    """
    content = await file.read()
    entry = journal_service.set_video(
        db, user=current_user, entry_date=entry_date, file=(file.filename, file.content_type, content)
    )
    return journal_service.to_detail(entry)
