from typing import List, Optional
from uuid import UUID
from datetime import datetime, date

from pydantic import BaseModel, ConfigDict, Field, field_validator


class JournalEntryUpsert(BaseModel):
    """Create or replace the entry for a date. `photo_urls` are existing blob paths to keep."""
    title: str = Field("", max_length=30)
    text_content: Optional[str] = Field(None, max_length=300)
    day_quality: Optional[int] = Field(None, ge=1, le=5)
    day_emoji: Optional[str] = Field(None, max_length=16)
    is_bookmarked: bool = False
    photo_urls: List[str] = Field(default_factory=list, max_length=10)
    video_url: Optional[str] = None

    @field_validator("text_content", "day_emoji", "video_url")
    @classmethod
    def empty_is_none(cls, v: Optional[str]) -> Optional[str]:
        return v or None


class JournalEntryOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    entry_date: date
    title: str
    text_content: Optional[str] = None
    day_quality: Optional[int] = None
    day_emoji: Optional[str] = None
    is_bookmarked: bool
    photo_urls: List[str] = Field(default_factory=list)
    video_url: Optional[str] = None
    created_at: datetime
    updated_at: datetime

    @field_validator("photo_urls", mode="before")
    @classmethod
    def null_photos(cls, v):
        return v or []


class JournalEntryDetail(JournalEntryOut):
    """Entry with time-limited media links and the quality label."""
    can_edit: bool
    day_quality_label: Optional[str] = None
    photo_signed_urls: List[str] = Field(default_factory=list)
    video_signed_url: Optional[str] = None


class JournalCalendarDay(BaseModel):
    entry_date: date
    day_quality: Optional[int] = None
    day_emoji: Optional[str] = None
    is_bookmarked: bool = False


class BookmarkResponse(BaseModel):
    entry_date: date
    is_bookmarked: bool
