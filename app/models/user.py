# models/user.py

import uuid
from datetime import datetime, timezone, time
from sqlalchemy import Column, String, DateTime, Time, UUID
from sqlalchemy.orm import relationship
from app.core.config import Base


class User(Base):
    """
    Profile row for an identity-provider user.
    The id is the token `sub`; the row is created lazily on first request.
    """

    __tablename__ = "users"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4, index=True)
    email = Column(String(255), nullable=True)

    # ---- Preferences ----
    typical_wake_time = Column(Time, nullable=False, default=time(7, 0))
    typical_sleep_time = Column(Time, nullable=False, default=time(23, 0))

    created_at = Column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))

    # ---- Relationships ----
    activity_groups = relationship("ActivityGroup", back_populates="user", cascade="all, delete-orphan")
    daily_entries = relationship("DailyEntry", back_populates="user", cascade="all, delete-orphan")
    journal_entries = relationship("JournalEntry", back_populates="user", cascade="all, delete-orphan")
