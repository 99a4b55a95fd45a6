# models/one_time_task.py

import uuid
from datetime import datetime, timezone
from sqlalchemy import Column, String, Date, Boolean, DateTime, ForeignKey, UUID
from app.core.config import Base


class OneTimeTask(Base):
    __tablename__ = "one_time_tasks"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4, index=True)
    user_id = Column(UUID(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    date = Column(Date, nullable=False, index=True)

    title = Column(String(255), nullable=False)
    is_completed = Column(Boolean, nullable=False, default=False)

    created_at = Column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))
