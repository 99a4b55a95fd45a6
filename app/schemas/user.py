# schemas/user.py
from pydantic import BaseModel, ConfigDict, Field, EmailStr, field_validator
from typing import Optional
from datetime import datetime, time
from uuid import UUID


# =====================================================================
# READ SCHEMAS
# =====================================================================

class UserOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    email: Optional[EmailStr] = None
    typical_wake_time: time
    typical_sleep_time: time
    created_at: datetime


# =====================================================================
# UPDATE SCHEMAS
# =====================================================================

class UserPreferencesUpdate(BaseModel):
    """Typical day bracket. Accepts HH:MM or HH:MM:SS."""
    typical_wake_time: Optional[time] = None
    typical_sleep_time: Optional[time] = Field(
        None, description="For night owls, a time after midnight means the next day"
    )

    @field_validator("typical_wake_time", "typical_sleep_time", mode="before")
    @classmethod
    def add_seconds(cls, v):
        if isinstance(v, str) and len(v) == 5:
            return f"{v}:00"
        return v


# =====================================================================
# RESPONSE SCHEMAS
# =====================================================================

class SuccessResponse(BaseModel):
    """Generic success response."""
    success: bool = True
    message: str
