# =====================================================================
# ROUTER - app/api/routers/daily.py
# =====================================================================

from typing import List, Optional
from uuid import UUID
from datetime import date
from fastapi import APIRouter, Depends, status, Body
from sqlalchemy.orm import Session

from app.core.config import get_db
from app.core.security import get_current_user
from app.models.user import User
from app.services.daily import daily_service
from app.schemas.daily import (
    ActivityPeriodOut,
    DailyEntryOut,
    DailyViewOut,
    IncrementResponse,
    MinuteGridOut,
    OneTimeTaskCreate,
    OneTimeTaskOut,
    OneTimeTaskUpdate,
    SwitchActivityRequest,
    WakeRequest,
)
from app.schemas.user import SuccessResponse

router = APIRouter(prefix="/daily", tags=["Daily Tasks"])


# =====================================================================
# ONE-TIME TASKS (by id)
# =====================================================================


@router.patch("/tasks/{task_id}", response_model=OneTimeTaskOut, summary="Update a one-time task")
def update_task(
    task_id: UUID,
    update_data: OneTimeTaskUpdate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return daily_service.update_task(db, user=current_user, task_id=task_id, obj_in=update_data)


@router.delete("/tasks/{task_id}", response_model=SuccessResponse, summary="Delete a one-time task")
def delete_task(
    task_id: UUID,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    daily_service.delete_task(db, user=current_user, task_id=task_id)
    return SuccessResponse(message="Task deleted successfully")


# =====================================================================
# DAY VIEW
# =====================================================================


@router.get("/{day}", response_model=DailyViewOut, summary="Tasks for a day")
def get_day(
    day: date,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """
    Activities due on `day` with their progress and time spent,
    the completion summary and the day's one-time tasks.

    Days without an entry return zero progress, not an error.
    """
    return daily_service.get_day(db, user=current_user, day=day)


@router.post(
    "/{day}/activities/{activity_id}/increment",
    response_model=IncrementResponse,
    summary="Increment progress",
)
def increment(
    day: date,
    activity_id: UUID,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """
    One click: count + 1, or back to 0 once the target was reached.
    """
    return daily_service.increment(db, user=current_user, day=day, activity_id=activity_id)


@router.post("/{day}/tasks", response_model=OneTimeTaskOut, status_code=status.HTTP_201_CREATED, summary="Add a one-time task")
def add_task(
    day: date,
    task_data: OneTimeTaskCreate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return daily_service.add_task(db, user=current_user, day=day, obj_in=task_data)


# =====================================================================
# WAKE / SLEEP / CURRENT ACTIVITY
# =====================================================================


@router.post("/{day}/wake", response_model=DailyEntryOut, summary="Wake up")
def wake(
    day: date,
    wake_data: Optional[WakeRequest] = Body(None),
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """
    Start the day. The given activity (or the first one) becomes current.
    """
    activity_id = wake_data.activity_id if wake_data else None
    return daily_service.wake(db, user=current_user, day=day, activity_id=activity_id)


@router.post("/{day}/sleep", response_model=DailyEntryOut, summary="Go to sleep")
def sleep(
    day: date,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return daily_service.sleep(db, user=current_user, day=day)


@router.post("/{day}/switch", response_model=DailyEntryOut, summary="Switch current activity")
def switch_activity(
    day: date,
    switch_data: SwitchActivityRequest,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """
    Close the running period and start one for the new activity.

    Returns 404 when the day has no entry yet (wake up first).
    """
    return daily_service.switch_activity(
        db, user=current_user, day=day, activity_id=switch_data.activity_id
    )


@router.post("/{day}/stop", response_model=DailyEntryOut, summary="Stop current activity")
def stop(
    day: date,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return daily_service.stop(db, user=current_user, day=day)


# =====================================================================
# TIMELINE
# =====================================================================


@router.get("/{day}/periods", response_model=List[ActivityPeriodOut], summary="Activity periods of a day")
def get_periods(
    day: date,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return daily_service.get_periods(db, user=current_user, day=day)


@router.get("/{day}/grid", response_model=MinuteGridOut, summary="Minute grid of a day")
def get_grid(
    day: date,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return daily_service.get_grid(db, user=current_user, day=day)
