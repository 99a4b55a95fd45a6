# =====================================================================
# ROUTER - app/api/routers/activities.py
# =====================================================================

from uuid import UUID
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.core.config import get_db
from app.core.security import get_current_user
from app.models.user import User
from app.services.activities import activity_service
from app.schemas.activities import (
    ActivityCreate,
    ActivityUpdate,
    ActivityOut,
    ArchivedItemsOut,
)
from app.schemas.user import SuccessResponse

router = APIRouter(prefix="/activities", tags=["Activities"])


@router.post(
    "",
    response_model=ActivityOut,
    status_code=status.HTTP_201_CREATED,
    summary="Create an activity",
)
def create_activity(
    activity_data: ActivityCreate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """
    Create an activity in one of my groups.

    **Routine:**
    - `anytime`, `daily`, `never` (something to avoid)
    - `weekly:1,3,5` (0 = Sunday)
    - `monthly:15`
    - `custom:2:weeks` (every N days/weeks/months from creation)
    """
    return activity_service.create_activity(db, user=current_user, obj_in=activity_data)


@router.get("/archived", response_model=ArchivedItemsOut, summary="Archived groups and activities")
def list_archived(
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return activity_service.list_archived(db, user=current_user)


@router.get("/{activity_id}", response_model=ActivityOut, summary="Get an activity")
def get_activity(
    activity_id: UUID,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return activity_service.get_activity(db, user=current_user, activity_id=activity_id)


@router.patch("/{activity_id}", response_model=ActivityOut, summary="Update an activity")
def update_activity(
    activity_id: UUID,
    update_data: ActivityUpdate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """
    All fields are optional - only provided fields will be updated.
    """
    return activity_service.update_activity(
        db, user=current_user, activity_id=activity_id, obj_in=update_data
    )


@router.post("/{activity_id}/archive", response_model=ActivityOut, summary="Archive an activity")
def archive_activity(
    activity_id: UUID,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return activity_service.archive_activity(db, user=current_user, activity_id=activity_id)


@router.post("/{activity_id}/restore", response_model=ActivityOut, summary="Restore an activity")
def restore_activity(
    activity_id: UUID,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """
    Restore an archived activity. Its group is restored too if it was archived.
    """
    return activity_service.restore_activity(db, user=current_user, activity_id=activity_id)


@router.delete("/{activity_id}", response_model=SuccessResponse, summary="Delete an archived activity")
def delete_activity(
    activity_id: UUID,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    activity_service.delete_activity(db, user=current_user, activity_id=activity_id)
    return SuccessResponse(message="Activity deleted successfully")
