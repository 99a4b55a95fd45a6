# =====================================================================
# ROUTER - app/api/routers/groups.py
# =====================================================================

from typing import List
from uuid import UUID
from fastapi import APIRouter, Depends, status, Query
from sqlalchemy.orm import Session

from app.core.config import get_db
from app.core.security import get_current_user
from app.models.user import User
from app.services.activities import activity_service
from app.schemas.activities import (
    ActivityGroupCreate,
    ActivityGroupUpdate,
    ActivityGroupOut,
    ActivityGroupWithActivities,
    ColorOption,
)
from app.schemas.user import SuccessResponse

router = APIRouter(prefix="/groups", tags=["Activity Groups"])


@router.get("/colors", response_model=List[ColorOption], summary="Group color palette")
def list_colors():
    """Colors a group may use."""
    return activity_service.list_colors()


@router.get("", response_model=List[ActivityGroupWithActivities], summary="List my groups")
def list_groups(
    include_archived: bool = Query(False, description="Also return archived groups and activities"),
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return activity_service.list_groups(db, user=current_user, include_archived=include_archived)


@router.post(
    "",
    response_model=ActivityGroupOut,
    status_code=status.HTTP_201_CREATED,
    summary="Create a group",
)
def create_group(
    group_data: ActivityGroupCreate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """
    Create an activity group.

    - **name**: required, trimmed
    - **color**: one of `/groups/colors`
    - **emoji**: optional
    """
    return activity_service.create_group(db, user=current_user, obj_in=group_data)


@router.get("/{group_id}", response_model=ActivityGroupOut, summary="Get a group")
def get_group(
    group_id: UUID,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return activity_service.get_group(db, user=current_user, group_id=group_id)


@router.patch("/{group_id}", response_model=ActivityGroupOut, summary="Update a group")
def update_group(
    group_id: UUID,
    update_data: ActivityGroupUpdate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return activity_service.update_group(db, user=current_user, group_id=group_id, obj_in=update_data)


@router.post("/{group_id}/archive", response_model=ActivityGroupOut, summary="Archive a group")
def archive_group(
    group_id: UUID,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """
    Archive the group and every activity in it.

    If one of them is the current activity of a day, that day's open period is closed.
    """
    return activity_service.archive_group(db, user=current_user, group_id=group_id)


@router.post("/{group_id}/restore", response_model=ActivityGroupOut, summary="Restore a group")
def restore_group(
    group_id: UUID,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return activity_service.restore_group(db, user=current_user, group_id=group_id)


@router.delete("/{group_id}", response_model=SuccessResponse, summary="Delete an archived group")
def delete_group(
    group_id: UUID,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """
    Permanently delete an archived group with its activities and their history.
    """
    activity_service.delete_group(db, user=current_user, group_id=group_id)
    return SuccessResponse(message="Group deleted successfully")
