# models/activity.py

import uuid
from datetime import datetime, timezone
from sqlalchemy import Column, String, Boolean, Integer, DateTime, ForeignKey, UUID
from sqlalchemy.orm import relationship
from app.core.config import Base


class Activity(Base):
    """
    A recurring activity. `routine` holds the serialized recurrence
    ("daily", "weekly:1,3", "custom:2:weeks", ...) and `created_at` anchors
    interval-based routines.
    """

    __tablename__ = "activities"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4, index=True)
    user_id = Column(UUID(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    group_id = Column(UUID(as_uuid=True), ForeignKey("activity_groups.id", ondelete="CASCADE"), nullable=False, index=True)

    name = Column(String(100), nullable=False)
    pattern = Column(String(20), nullable=False, default="solid")
    routine = Column(String(64), nullable=False, default="daily")
    completion_target = Column(Integer, nullable=False, default=1)
    is_archived = Column(Boolean, nullable=False, default=False)

    created_at = Column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))

    group = relationship("ActivityGroup", back_populates="activities")
    periods = relationship("ActivityPeriod", back_populates="activity", cascade="all, delete-orphan")
    time_entries = relationship("TimeEntry", back_populates="activity", cascade="all, delete-orphan")
