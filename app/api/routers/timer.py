# =====================================================================
# ROUTER - app/api/routers/timer.py
# =====================================================================

from typing import List, Optional
from fastapi import APIRouter, Depends, status, Query
from sqlalchemy.orm import Session

from app.core.config import get_db
from app.core.security import get_current_user
from app.models.user import User
from app.services.time_tracker import time_tracker_service, RECENT_LIMIT
from app.schemas.timer import (
    ActiveTimerOut,
    RecentTimeEntryOut,
    TimeEntryOut,
    TimerStartRequest,
)

router = APIRouter(prefix="/timer", tags=["Timer"])


@router.post("/start", response_model=TimeEntryOut, status_code=status.HTTP_201_CREATED, summary="Start timer")
def start_timer(
    start_data: TimerStartRequest,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """
    Start timing an activity. A timer that is already running is stopped first.
    """
    return time_tracker_service.start(db, user=current_user, activity_id=start_data.activity_id)


@router.post("/stop", response_model=Optional[TimeEntryOut], summary="Stop timer")
def stop_timer(
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """
    Stop the running timer. Returns null when nothing was running.
    """
    return time_tracker_service.stop(db, user=current_user)


@router.get("/active", response_model=Optional[ActiveTimerOut], summary="Running timer")
def get_active(
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return time_tracker_service.active(db, user=current_user)


@router.get("/recent", response_model=List[RecentTimeEntryOut], summary="Recent entries")
def get_recent(
    limit: int = Query(RECENT_LIMIT, ge=1, le=50),
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return time_tracker_service.recent(db, user=current_user, limit=limit)
