from typing import Dict, List, Optional
from uuid import UUID
from datetime import datetime, date

from pydantic import BaseModel, ConfigDict, Field, field_validator


# ----------------------
# Daily entry
# ----------------------

class DailyEntryOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    date: date
    task_counts: Dict[str, int] = Field(default_factory=dict)
    current_activity_id: Optional[UUID] = None
    wake_time: Optional[datetime] = None
    sleep_time: Optional[datetime] = None
    is_awake: bool = False


class ActivityPeriodOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    activity_id: UUID
    start_time: datetime
    end_time: Optional[datetime] = None


# ----------------------
# Day view
# ----------------------

class DailyTaskOut(BaseModel):
    """One due activity as shown in the day view."""
    activity_id: UUID
    group_id: UUID
    name: str
    color: str
    pattern: str
    routine: str
    count: int
    target: int
    is_complete: bool
    is_avoid: bool
    is_current: bool
    elapsed_ms: int
    elapsed_display: str


class CompletionOut(BaseModel):
    completed: int
    total: int
    rate: int


class OneTimeTaskOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    date: date
    title: str
    is_completed: bool
    created_at: datetime


class DailyViewOut(BaseModel):
    date: date
    entry: Optional[DailyEntryOut] = None
    tasks: List[DailyTaskOut]
    completion: CompletionOut
    one_time_tasks: List[OneTimeTaskOut]


class IncrementResponse(BaseModel):
    activity_id: UUID
    count: int
    target: int
    is_complete: bool
    completion: CompletionOut


class MinuteGridOut(BaseModel):
    date: date
    minutes: List[Optional[str]] = Field(..., description="1440 slots (UTC minutes), activity id or null")


# ----------------------
# Requests
# ----------------------

class SwitchActivityRequest(BaseModel):
    activity_id: UUID


class WakeRequest(BaseModel):
    activity_id: Optional[UUID] = Field(None, description="Optional activity to start right away")


class OneTimeTaskCreate(BaseModel):
    title: str = Field(..., max_length=255)

    @field_validator("title")
    @classmethod
    def validate_title(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Title is required")
        return v


class OneTimeTaskUpdate(BaseModel):
    title: Optional[str] = Field(None, max_length=255)
    is_completed: Optional[bool] = None

    @field_validator("title")
    @classmethod
    def validate_title(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return v
        v = v.strip()
        if not v:
            raise ValueError("Title is required")
        return v
