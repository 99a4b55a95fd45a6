# =====================================================================
# SERVICE LAYER - services/activities.py
# =====================================================================

import logging
from typing import Optional, List
from uuid import UUID
from datetime import datetime
from sqlalchemy.orm import Session

from app.core.config import commit_or_rollback
from app.core.exceptions import NotFoundError, ValidationError
from app.crud.activities import crud_activity_group, crud_activity
from app.data.palette import COLOR_PALETTE
from app.models.activity import Activity
from app.models.activity_group import ActivityGroup
from app.models.user import User
from app.schemas.activities import (
    ActivityCreate,
    ActivityGroupCreate,
    ActivityGroupOut,
    ActivityGroupUpdate,
    ActivityGroupWithActivities,
    ActivityOut,
    ActivityUpdate,
    ArchivedActivityOut,
    ArchivedItemsOut,
    ColorOption,
)
from app.services.daily import daily_service
from app.services.time_tracker import time_tracker_service

logger = logging.getLogger(__name__)


class ActivityService:
    """Groups and activities: management, archive and restore."""

    def __init__(self):
        self.group_crud = crud_activity_group
        self.activity_crud = crud_activity

    # =====================================================================
    # LOOKUPS
    # =====================================================================

    def get_group(self, db: Session, *, user: User, group_id: UUID) -> ActivityGroup:
        group = self.group_crud.get(db, user_id=user.id, group_id=group_id)
        if not group:
            raise NotFoundError("Activity group not found")
        return group

    def get_activity(self, db: Session, *, user: User, activity_id: UUID) -> Activity:
        activity = self.activity_crud.get(db, user_id=user.id, activity_id=activity_id)
        if not activity:
            raise NotFoundError("Activity not found")
        return activity

    def list_colors(self) -> List[ColorOption]:
        return [ColorOption(**c) for c in COLOR_PALETTE]

    # =====================================================================
    # GROUPS
    # =====================================================================

    def list_groups(
        self, db: Session, *, user: User, include_archived: bool = False
    ) -> List[ActivityGroupWithActivities]:
        """Groups with their activities; archived rows only when asked for."""
        result = []
        for group in self.group_crud.get_multi(db, user_id=user.id, include_archived=include_archived):
            activities = self.activity_crud.get_by_group(
                db, user_id=user.id, group_id=group.id, include_archived=include_archived
            )
            result.append(
                ActivityGroupWithActivities(
                    **ActivityGroupOut.model_validate(group).model_dump(),
                    activities=[ActivityOut.model_validate(a) for a in activities],
                )
            )
        return result

    def create_group(self, db: Session, *, user: User, obj_in: ActivityGroupCreate) -> ActivityGroup:
        group = self.group_crud.create(db, user_id=user.id, obj_in=obj_in)
        logger.info(f"Created activity group {group.id} for user {user.id}")
        return group

    def update_group(
        self, db: Session, *, user: User, group_id: UUID, obj_in: ActivityGroupUpdate
    ) -> ActivityGroup:
        group = self.get_group(db, user=user, group_id=group_id)
        return self.group_crud.update(db, db_obj=group, obj_in=obj_in)

    def archive_group(
        self, db: Session, *, user: User, group_id: UUID, now: Optional[datetime] = None
    ) -> ActivityGroup:
        """Archive the group and all of its activities, stopping any that is current."""
        group = self.get_group(db, user=user, group_id=group_id)
        activity_ids = [a.id for a in group.activities]
        daily_service.stop_activities_everywhere(db, user_id=user.id, activity_ids=activity_ids, now=now)
        time_tracker_service.stop_for_activities(db, user_id=user.id, activity_ids=activity_ids, now=now)
        self.group_crud.set_archived(db, db_obj=group, archived=True)
        commit_or_rollback(db, "archive activity group")
        db.refresh(group)
        return group

    def restore_group(self, db: Session, *, user: User, group_id: UUID) -> ActivityGroup:
        group = self.get_group(db, user=user, group_id=group_id)
        self.group_crud.set_archived(db, db_obj=group, archived=False)
        commit_or_rollback(db, "restore activity group")
        db.refresh(group)
        return group

    def delete_group(self, db: Session, *, user: User, group_id: UUID, now: Optional[datetime] = None) -> None:
        """Permanently delete an archived group with its activities, periods and time entries."""
        group = self.get_group(db, user=user, group_id=group_id)
        if not group.is_archived:
            raise ValidationError("Only archived groups can be deleted permanently")

        daily_service.stop_activities_everywhere(
            db, user_id=user.id, activity_ids=[a.id for a in group.activities], now=now
        )
        self.group_crud.delete(db, db_obj=group)
        commit_or_rollback(db, "delete activity group")
        logger.info(f"Deleted activity group {group_id} for user {user.id}")

    # =====================================================================
    # ACTIVITIES
    # =====================================================================

    def create_activity(self, db: Session, *, user: User, obj_in: ActivityCreate) -> Activity:
        group = self.get_group(db, user=user, group_id=obj_in.group_id)
        if group.is_archived:
            raise ValidationError("Cannot add an activity to an archived group")
        return self.activity_crud.create(db, user_id=user.id, obj_in=obj_in)

    def update_activity(
        self, db: Session, *, user: User, activity_id: UUID, obj_in: ActivityUpdate
    ) -> Activity:
        activity = self.get_activity(db, user=user, activity_id=activity_id)
        if obj_in.group_id is not None and obj_in.group_id != activity.group_id:
            target = self.get_group(db, user=user, group_id=obj_in.group_id)
            if target.is_archived:
                raise ValidationError("Cannot move an activity to an archived group")
        return self.activity_crud.update(db, db_obj=activity, obj_in=obj_in)

    def archive_activity(
        self, db: Session, *, user: User, activity_id: UUID, now: Optional[datetime] = None
    ) -> Activity:
        activity = self.get_activity(db, user=user, activity_id=activity_id)
        daily_service.stop_activities_everywhere(db, user_id=user.id, activity_ids=[activity.id], now=now)
        time_tracker_service.stop_for_activities(db, user_id=user.id, activity_ids=[activity.id], now=now)
        self.activity_crud.set_archived(db, db_obj=activity, archived=True)
        commit_or_rollback(db, "archive activity")
        db.refresh(activity)
        return activity

    def restore_activity(self, db: Session, *, user: User, activity_id: UUID) -> Activity:
        """Un-archive the activity; its group comes back too if it was archived."""
        activity = self.get_activity(db, user=user, activity_id=activity_id)
        self.activity_crud.set_archived(db, db_obj=activity, archived=False)
        if activity.group.is_archived:
            activity.group.is_archived = False
        commit_or_rollback(db, "restore activity")
        db.refresh(activity)
        return activity

    def delete_activity(
        self, db: Session, *, user: User, activity_id: UUID, now: Optional[datetime] = None
    ) -> None:
        activity = self.get_activity(db, user=user, activity_id=activity_id)
        if not activity.is_archived:
            raise ValidationError("Only archived activities can be deleted permanently")

        daily_service.stop_activities_everywhere(db, user_id=user.id, activity_ids=[activity.id], now=now)
        self.activity_crud.delete(db, db_obj=activity)
        commit_or_rollback(db, "delete activity")
        logger.info(f"Deleted activity {activity_id} for user {user.id}")

    # =====================================================================
    # ARCHIVE VIEW
    # =====================================================================

    def list_archived(self, db: Session, *, user: User) -> ArchivedItemsOut:
        return ArchivedItemsOut(
            groups=[ActivityGroupOut.model_validate(g) for g in self.group_crud.get_archived(db, user_id=user.id)],
            activities=[ArchivedActivityOut.model_validate(a) for a in self.activity_crud.get_archived(db, user_id=user.id)],
        )


activity_service = ActivityService()
