# crud/one_time_task.py

from typing import Optional, List
from uuid import UUID
from datetime import date
from sqlalchemy.orm import Session

from app.models.one_time_task import OneTimeTask
from app.schemas.daily import OneTimeTaskCreate, OneTimeTaskUpdate


class CRUDOneTimeTask:
    def create(self, db: Session, *, user_id: UUID, day: date, obj_in: OneTimeTaskCreate) -> OneTimeTask:
        task = OneTimeTask(user_id=user_id, date=day, title=obj_in.title)
        db.add(task)
        db.commit()
        db.refresh(task)
        return task

    def get(self, db: Session, *, user_id: UUID, task_id: UUID) -> Optional[OneTimeTask]:
        return (
            db.query(OneTimeTask)
            .filter(OneTimeTask.id == task_id)
            .filter(OneTimeTask.user_id == user_id)
            .first()
        )

    def get_by_date(self, db: Session, *, user_id: UUID, day: date) -> List[OneTimeTask]:
        return (
            db.query(OneTimeTask)
            .filter(OneTimeTask.user_id == user_id)
            .filter(OneTimeTask.date == day)
            .order_by(OneTimeTask.created_at.asc())
            .all()
        )

    def update(self, db: Session, *, db_obj: OneTimeTask, obj_in: OneTimeTaskUpdate) -> OneTimeTask:
        for field, value in obj_in.model_dump(exclude_unset=True, exclude_none=True).items():
            setattr(db_obj, field, value)

        db.commit()
        db.refresh(db_obj)
        return db_obj

    def delete(self, db: Session, *, db_obj: OneTimeTask) -> None:
        db.delete(db_obj)
        db.commit()


crud_one_time_task = CRUDOneTimeTask()
