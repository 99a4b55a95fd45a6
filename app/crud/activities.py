# =====================================================================
# CRUD LAYER - crud/activities.py
# =====================================================================

from typing import Optional, List
from uuid import UUID
from sqlalchemy.orm import Session, joinedload

from app.models.activity_group import ActivityGroup
from app.models.activity import Activity
from app.schemas.activities import (
    ActivityGroupCreate,
    ActivityGroupUpdate,
    ActivityCreate,
    ActivityUpdate,
)


class CRUDActivityGroup:
    """CRUD operations for ActivityGroup model."""

    # =====================================================================
    # CREATE OPERATIONS
    # =====================================================================

    def create(self, db: Session, *, user_id: UUID, obj_in: ActivityGroupCreate) -> ActivityGroup:
        db_obj = ActivityGroup(user_id=user_id, **obj_in.model_dump())
        db.add(db_obj)
        db.commit()
        db.refresh(db_obj)
        return db_obj

    # =====================================================================
    # READ OPERATIONS
    # =====================================================================

    def get(self, db: Session, *, user_id: UUID, group_id: UUID) -> Optional[ActivityGroup]:
        """Get a group owned by the user."""
        return (
            db.query(ActivityGroup)
            .filter(ActivityGroup.id == group_id)
            .filter(ActivityGroup.user_id == user_id)
            .first()
        )

    def get_multi(
        self, db: Session, *, user_id: UUID, include_archived: bool = False
    ) -> List[ActivityGroup]:
        query = db.query(ActivityGroup).filter(ActivityGroup.user_id == user_id)
        if not include_archived:
            query = query.filter(ActivityGroup.is_archived.is_(False))
        return query.order_by(ActivityGroup.created_at.asc()).all()

    def get_archived(self, db: Session, *, user_id: UUID) -> List[ActivityGroup]:
        return (
            db.query(ActivityGroup)
            .filter(ActivityGroup.user_id == user_id)
            .filter(ActivityGroup.is_archived.is_(True))
            .order_by(ActivityGroup.name.asc())
            .all()
        )

    # =====================================================================
    # UPDATE OPERATIONS
    # =====================================================================

    def update(self, db: Session, *, db_obj: ActivityGroup, obj_in: ActivityGroupUpdate) -> ActivityGroup:
        for field, value in obj_in.model_dump(exclude_unset=True).items():
            if value is None and field != "emoji":
                continue
            setattr(db_obj, field, value)

        db.commit()
        db.refresh(db_obj)
        return db_obj

    def set_archived(self, db: Session, *, db_obj: ActivityGroup, archived: bool) -> ActivityGroup:
        """Flag the group and every activity in it. Caller commits."""
        db_obj.is_archived = archived
        for activity in db_obj.activities:
            activity.is_archived = archived
        db.flush()
        return db_obj

    # =====================================================================
    # DELETE OPERATIONS
    # =====================================================================

    def delete(self, db: Session, *, db_obj: ActivityGroup) -> None:
        """Delete the group; activities, their periods and time entries go with it. Caller commits."""
        db.delete(db_obj)
        db.flush()


class CRUDActivity:
    """CRUD operations for Activity model."""

    # =====================================================================
    # CREATE OPERATIONS
    # =====================================================================

    def create(self, db: Session, *, user_id: UUID, obj_in: ActivityCreate) -> Activity:
        db_obj = Activity(user_id=user_id, **obj_in.model_dump())
        db.add(db_obj)
        db.commit()
        db.refresh(db_obj)
        return db_obj

    # =====================================================================
    # READ OPERATIONS
    # =====================================================================

    def get(self, db: Session, *, user_id: UUID, activity_id: UUID) -> Optional[Activity]:
        """Get an activity owned by the user."""
        return (
            db.query(Activity)
            .filter(Activity.id == activity_id)
            .filter(Activity.user_id == user_id)
            .first()
        )

    def get_active(self, db: Session, *, user_id: UUID) -> List[Activity]:
        """Non-archived activities whose group is not archived either."""
        return (
            db.query(Activity)
            .join(ActivityGroup, Activity.group_id == ActivityGroup.id)
            .options(joinedload(Activity.group))
            .filter(Activity.user_id == user_id)
            .filter(Activity.is_archived.is_(False))
            .filter(ActivityGroup.is_archived.is_(False))
            .order_by(ActivityGroup.created_at.asc(), Activity.created_at.asc())
            .all()
        )

    def get_by_group(
        self, db: Session, *, user_id: UUID, group_id: UUID, include_archived: bool = False
    ) -> List[Activity]:
        query = (
            db.query(Activity)
            .filter(Activity.user_id == user_id)
            .filter(Activity.group_id == group_id)
        )
        if not include_archived:
            query = query.filter(Activity.is_archived.is_(False))
        return query.order_by(Activity.created_at.asc()).all()

    def get_archived(self, db: Session, *, user_id: UUID) -> List[Activity]:
        return (
            db.query(Activity)
            .options(joinedload(Activity.group))
            .filter(Activity.user_id == user_id)
            .filter(Activity.is_archived.is_(True))
            .order_by(Activity.name.asc())
            .all()
        )

    # =====================================================================
    # UPDATE OPERATIONS
    # =====================================================================

    def update(self, db: Session, *, db_obj: Activity, obj_in: ActivityUpdate) -> Activity:
        for field, value in obj_in.model_dump(exclude_unset=True, exclude_none=True).items():
            setattr(db_obj, field, value)

        db.commit()
        db.refresh(db_obj)
        return db_obj

    def set_archived(self, db: Session, *, db_obj: Activity, archived: bool) -> Activity:
        """Caller commits."""
        db_obj.is_archived = archived
        db.flush()
        return db_obj

    # =====================================================================
    # DELETE OPERATIONS
    # =====================================================================

    def delete(self, db: Session, *, db_obj: Activity) -> None:
        """Caller commits."""
        db.delete(db_obj)
        db.flush()


crud_activity_group = CRUDActivityGroup()
crud_activity = CRUDActivity()
