# schemas/activities.py
from pydantic import BaseModel, Field, ConfigDict, field_validator
from typing import Optional, List
from datetime import datetime
from uuid import UUID

from app.data.palette import PALETTE_VALUES, DEFAULT_COLOR, PatternType
from app.services.recurrence import parse_routine


def _required_name(v: str) -> str:
    v = v.strip()
    if not v:
        raise ValueError("Name is required")
    return v


def _valid_routine(v: str) -> str:
    v = (v or "daily").strip()
    if v.startswith("weekly") and not v.partition(":")[2].strip(", "):
        raise ValueError("Please select at least one day for weekly routine")
    return parse_routine(v, strict=True).serialize()


def _valid_color(v: str) -> str:
    if v.lower() not in PALETTE_VALUES:
        raise ValueError("Color must be one of the palette colors")
    return v.lower()


# =====================================================================
# ACTIVITY GROUPS
# =====================================================================

class ActivityGroupBase(BaseModel):
    name: str = Field(..., max_length=100)
    color: str = DEFAULT_COLOR
    emoji: Optional[str] = Field(None, max_length=16)

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        return _required_name(v)

    @field_validator("color")
    @classmethod
    def validate_color(cls, v: str) -> str:
        return _valid_color(v)

    @field_validator("emoji")
    @classmethod
    def empty_emoji_is_none(cls, v: Optional[str]) -> Optional[str]:
        return v or None


class ActivityGroupCreate(ActivityGroupBase):
    pass


class ActivityGroupUpdate(BaseModel):
    """All fields optional; only provided fields are updated."""
    name: Optional[str] = Field(None, max_length=100)
    color: Optional[str] = None
    emoji: Optional[str] = Field(None, max_length=16)

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: Optional[str]) -> Optional[str]:
        return _required_name(v) if v is not None else v

    @field_validator("color")
    @classmethod
    def validate_color(cls, v: Optional[str]) -> Optional[str]:
        return _valid_color(v) if v is not None else v


class ActivityGroupOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    name: str
    color: str
    emoji: Optional[str] = None
    is_archived: bool
    created_at: datetime


# =====================================================================
# ACTIVITIES
# =====================================================================

class ActivityCreate(BaseModel):
    model_config = ConfigDict(use_enum_values=True)

    group_id: UUID
    name: str = Field(..., max_length=100)
    pattern: PatternType = PatternType.SOLID
    routine: str = Field("daily", description="anytime | daily | never | weekly:0,6 | monthly:15 | custom:2:weeks")
    completion_target: int = Field(1, ge=1, description="Increments needed to mark the activity done for a day")

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        return _required_name(v)

    @field_validator("routine")
    @classmethod
    def validate_routine(cls, v: str) -> str:
        return _valid_routine(v)


class ActivityUpdate(BaseModel):
    model_config = ConfigDict(use_enum_values=True)

    group_id: Optional[UUID] = None
    name: Optional[str] = Field(None, max_length=100)
    pattern: Optional[PatternType] = None
    routine: Optional[str] = None
    completion_target: Optional[int] = Field(None, ge=1)

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: Optional[str]) -> Optional[str]:
        return _required_name(v) if v is not None else v

    @field_validator("routine")
    @classmethod
    def validate_routine(cls, v: Optional[str]) -> Optional[str]:
        return _valid_routine(v) if v is not None else v


class ActivityOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    group_id: UUID
    name: str
    pattern: str
    routine: str
    completion_target: int
    is_archived: bool
    created_at: datetime


class ActivityGroupWithActivities(ActivityGroupOut):
    activities: List[ActivityOut] = []


# =====================================================================
# ARCHIVE
# =====================================================================

class ArchivedActivityOut(ActivityOut):
    group: ActivityGroupOut


class ArchivedItemsOut(BaseModel):
    groups: List[ActivityGroupOut]
    activities: List[ArchivedActivityOut]


class ColorOption(BaseModel):
    name: str
    value: str
