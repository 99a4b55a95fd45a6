# models/activity_period.py

import uuid
from sqlalchemy import Column, DateTime, ForeignKey, UUID
from sqlalchemy.orm import relationship
from app.core.config import Base


class ActivityPeriod(Base):
    """Contiguous span during which an activity was the current one. Open while end_time is null."""

    __tablename__ = "activity_periods"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4, index=True)
    user_id = Column(UUID(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    daily_entry_id = Column(UUID(as_uuid=True), ForeignKey("daily_entries.id", ondelete="CASCADE"), nullable=False, index=True)
    activity_id = Column(UUID(as_uuid=True), ForeignKey("activities.id", ondelete="CASCADE"), nullable=False, index=True)

    start_time = Column(DateTime(timezone=True), nullable=False)
    end_time = Column(DateTime(timezone=True), nullable=True)

    daily_entry = relationship("DailyEntry", back_populates="periods")
    activity = relationship("Activity", back_populates="periods")
