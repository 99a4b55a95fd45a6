from typing import Optional
from uuid import UUID
from datetime import datetime

from pydantic import BaseModel, ConfigDict


class TimerStartRequest(BaseModel):
    activity_id: UUID


class TimeEntryOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    activity_id: UUID
    time_start: datetime
    time_end: Optional[datetime] = None


class ActiveTimerOut(TimeEntryOut):
    elapsed_seconds: int


class RecentTimeEntryOut(TimeEntryOut):
    activity_name: Optional[str] = None
    duration_display: str
