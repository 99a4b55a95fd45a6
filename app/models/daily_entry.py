# models/daily_entry.py

import uuid
from datetime import datetime, timezone
from sqlalchemy import (
    Column, Date, DateTime, Boolean, JSON, ForeignKey, UniqueConstraint, UUID
)
from sqlalchemy.orm import relationship
from app.core.config import Base


class DailyEntry(Base):
    __tablename__ = "daily_entries"
    __table_args__ = (UniqueConstraint("user_id", "date", name="uq_daily_entries_user_date"),)

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4, index=True)
    user_id = Column(UUID(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    date = Column(Date, nullable=False, index=True)

    task_counts = Column(JSON, nullable=False, default=dict)  # {"<activity id>": int}
    completed_tasks = Column(JSON, nullable=True)  # legacy: ["<activity id>", ...]

    current_activity_id = Column(
        UUID(as_uuid=True), ForeignKey("activities.id", ondelete="SET NULL"), nullable=True
    )

    # ---- Day bracket ----
    wake_time = Column(DateTime(timezone=True), nullable=True)
    sleep_time = Column(DateTime(timezone=True), nullable=True)
    is_awake = Column(Boolean, nullable=False, default=False)

    created_at = Column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))

    # Relationships
    periods = relationship(
        "ActivityPeriod",
        back_populates="daily_entry",
        cascade="all, delete-orphan",
        order_by="ActivityPeriod.start_time",
    )
    user = relationship("User", back_populates="daily_entries")
