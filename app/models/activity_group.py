# models/activity_group.py

import uuid
from datetime import datetime, timezone
from sqlalchemy import Column, String, Boolean, DateTime, ForeignKey, UUID
from sqlalchemy.orm import relationship
from app.core.config import Base


class ActivityGroup(Base):
    __tablename__ = "activity_groups"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4, index=True)
    user_id = Column(UUID(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)

    name = Column(String(100), nullable=False)
    color = Column(String(7), nullable=False)  # hex, e.g. "#22c55e"
    emoji = Column(String(16), nullable=True)
    is_archived = Column(Boolean, nullable=False, default=False)

    created_at = Column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))

    activities = relationship(
        "Activity",
        back_populates="group",
        cascade="all, delete-orphan",
    )
    user = relationship("User", back_populates="activity_groups")
