# models/journal_entry.py

import uuid
from datetime import datetime, timezone
from sqlalchemy import (
    Column, String, Text, Date, Integer, Boolean, DateTime, JSON, ForeignKey, UniqueConstraint, UUID
)
from sqlalchemy.orm import relationship
from app.core.config import Base


class JournalEntry(Base):
    __tablename__ = "journal_entries"
    __table_args__ = (UniqueConstraint("user_id", "entry_date", name="uq_journal_entries_user_date"),)

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4, index=True)
    user_id = Column(UUID(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    entry_date = Column(Date, nullable=False, index=True)

    title = Column(String(30), nullable=False, default="")
    text_content = Column(Text, nullable=True)
    day_quality = Column(Integer, nullable=True)  # 1..5
    day_emoji = Column(String(16), nullable=True)
    is_bookmarked = Column(Boolean, nullable=False, default=False)

    # Blob paths, not URLs: signed URLs are generated on read
    photo_urls = Column(JSON, nullable=True)  # ["<user>/<date>_<ts>_<i>.jpg", ...]
    video_url = Column(String(512), nullable=True)

    created_at = Column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))
    updated_at = Column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )

    user = relationship("User", back_populates="journal_entries")
