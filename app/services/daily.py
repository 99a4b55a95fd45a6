# =====================================================================
# SERVICE LAYER - services/daily.py
# =====================================================================

import logging
from typing import Optional, List, Dict
from uuid import UUID
from datetime import date, datetime, timezone
from sqlalchemy.orm import Session

from app.core.config import settings, commit_or_rollback
from app.core.exceptions import NotFoundError, ValidationError
from app.crud.activities import crud_activity
from app.crud.daily_entry import crud_daily_entry
from app.crud.one_time_task import crud_one_time_task
from app.models.activity import Activity
from app.models.activity_period import ActivityPeriod
from app.models.daily_entry import DailyEntry
from app.models.one_time_task import OneTimeTask
from app.models.user import User
from app.schemas.daily import (
    CompletionOut,
    DailyEntryOut,
    DailyTaskOut,
    DailyViewOut,
    IncrementResponse,
    MinuteGridOut,
    OneTimeTaskCreate,
    OneTimeTaskOut,
    OneTimeTaskUpdate,
)
from app.services import metrics
from app.services.recurrence import due_activities, parse_routine

logger = logging.getLogger(__name__)


def _utcnow(now: Optional[datetime] = None) -> datetime:
    return now or datetime.now(timezone.utc)


class DailyService:
    """Day view, progress counters, wake/sleep bracket and the current-activity switch."""

    def __init__(self):
        self.entry_crud = crud_daily_entry
        self.activity_crud = crud_activity
        self.task_crud = crud_one_time_task

    # =====================================================================
    # HELPERS
    # =====================================================================

    def _get_usable_activity(self, db: Session, *, user_id: UUID, activity_id: UUID) -> Activity:
        """Activity owned by the user, not archived, in a non-archived group."""
        activity = self.activity_crud.get(db, user_id=user_id, activity_id=activity_id)
        if not activity:
            raise NotFoundError("Activity not found")
        if activity.is_archived or activity.group.is_archived:
            raise ValidationError("Activity is archived")
        return activity

    def _progress(self, entry: Optional[DailyEntry], activities: List[Activity]) -> Dict[str, int]:
        if entry is None:
            return {}
        targets = {str(a.id): a.completion_target or 1 for a in activities}
        return metrics.merge_legacy_progress(entry.task_counts, entry.completed_tasks, targets)

    def _completion(self, activities: List[Activity], counts: Dict[str, int], day: date) -> CompletionOut:
        summary = metrics.completion_rate(
            due_activities(activities, day),
            counts,
            include_never=settings.COUNT_AVOID_IN_COMPLETION,
        )
        return CompletionOut(**summary.model_dump())

    def _require_entry(self, db: Session, *, user_id: UUID, day: date) -> DailyEntry:
        entry = self.entry_crud.get_by_user_and_date(db, user_id=user_id, day=day)
        if not entry:
            raise NotFoundError("Please wake up first from the home page.")
        return entry

    # =====================================================================
    # DAY VIEW
    # =====================================================================

    def get_day(self, db: Session, *, user: User, day: date, now: Optional[datetime] = None) -> DailyViewOut:
        """Due activities with progress and time spent, plus the day's one-time tasks."""
        now = _utcnow(now)
        activities = self.activity_crud.get_active(db, user_id=user.id)
        entry = self.entry_crud.get_by_user_and_date(db, user_id=user.id, day=day)
        counts = self._progress(entry, activities)
        periods = self.entry_crud.get_periods(db, entry_id=entry.id) if entry else []
        current_id = str(entry.current_activity_id) if entry and entry.current_activity_id else None

        tasks = []
        for activity in due_activities(activities, day):
            key = str(activity.id)
            target = activity.completion_target or 1
            count = counts.get(key, 0)
            elapsed = metrics.activity_duration(periods, activity.id, now)
            tasks.append(
                DailyTaskOut(
                    activity_id=activity.id,
                    group_id=activity.group_id,
                    name=activity.name,
                    color=activity.group.color,
                    pattern=activity.pattern,
                    routine=activity.routine,
                    count=count,
                    target=target,
                    is_complete=metrics.is_complete(count, target),
                    is_avoid=parse_routine(activity.routine).is_avoid,
                    is_current=key == current_id,
                    elapsed_ms=int(elapsed.total_seconds() * 1000),
                    elapsed_display=metrics.format_duration(elapsed),
                )
            )

        return DailyViewOut(
            date=day,
            entry=DailyEntryOut.model_validate(entry) if entry else None,
            tasks=tasks,
            completion=self._completion(activities, counts, day),
            one_time_tasks=[
                OneTimeTaskOut.model_validate(t)
                for t in self.task_crud.get_by_date(db, user_id=user.id, day=day)
            ],
        )

    def increment(self, db: Session, *, user: User, day: date, activity_id: UUID) -> IncrementResponse:
        """Cyclic single-click increment; a completed task goes back to zero."""
        activity = self._get_usable_activity(db, user_id=user.id, activity_id=activity_id)
        entry = self.entry_crud.get_or_create(db, user_id=user.id, day=day)
        activities = self.activity_crud.get_active(db, user_id=user.id)
        counts = self._progress(entry, activities)

        key = str(activity.id)
        target = activity.completion_target or 1
        new_count = metrics.next_count(counts.get(key, 0), target)
        if new_count == 0:
            counts.pop(key, None)
        else:
            counts[key] = new_count

        self.entry_crud.set_task_counts(db, entry=entry, task_counts=counts)
        commit_or_rollback(db, "update task progress")

        return IncrementResponse(
            activity_id=activity.id,
            count=new_count,
            target=target,
            is_complete=metrics.is_complete(new_count, target),
            completion=self._completion(activities, counts, day),
        )

    # =====================================================================
    # WAKE / SLEEP
    # =====================================================================

    def wake(
        self,
        db: Session,
        *,
        user: User,
        day: date,
        activity_id: Optional[UUID] = None,
        now: Optional[datetime] = None,
    ) -> DailyEntry:
        """Open the day and start the first activity (the given one, else the first usable one)."""
        now = _utcnow(now)
        entry = self.entry_crud.get_by_user_and_date(db, user_id=user.id, day=day)
        if entry and entry.is_awake:
            return entry

        if activity_id is not None:
            first = self._get_usable_activity(db, user_id=user.id, activity_id=activity_id)
        else:
            active = self.activity_crud.get_active(db, user_id=user.id)
            first = active[0] if active else None

        if entry is None:
            entry = self.entry_crud.create(db, user_id=user.id, day=day)
        entry.wake_time = entry.wake_time or now
        entry.sleep_time = None
        entry.is_awake = True
        self.entry_crud.close_open_periods(db, entry_id=entry.id, end=now)
        entry.current_activity_id = first.id if first else None
        if first:
            self.entry_crud.open_period(db, entry=entry, activity_id=first.id, start=now)

        commit_or_rollback(db, "wake up")
        db.refresh(entry)
        logger.info(f"User {user.id} woke up on {day}")
        return entry

    def sleep(self, db: Session, *, user: User, day: date, now: Optional[datetime] = None) -> DailyEntry:
        now = _utcnow(now)
        entry = self._require_entry(db, user_id=user.id, day=day)

        self.entry_crud.close_open_periods(db, entry_id=entry.id, end=now)
        entry.sleep_time = now
        entry.is_awake = False
        entry.current_activity_id = None

        commit_or_rollback(db, "go to sleep")
        db.refresh(entry)
        return entry

    # =====================================================================
    # CURRENT ACTIVITY
    # =====================================================================

    def switch_activity(
        self,
        db: Session,
        *,
        user: User,
        day: date,
        activity_id: UUID,
        now: Optional[datetime] = None,
    ) -> DailyEntry:
        """
        Make `activity_id` the current activity.

        Closing the open period, opening the new one and moving the pointer
        commit together, so at most one open period exists per entry.
        """
        now = _utcnow(now)
        entry = self._require_entry(db, user_id=user.id, day=day)

        if entry.current_activity_id == activity_id:
            return entry

        activity = self._get_usable_activity(db, user_id=user.id, activity_id=activity_id)

        self.entry_crud.close_open_periods(db, entry_id=entry.id, end=now)
        self.entry_crud.open_period(db, entry=entry, activity_id=activity.id, start=now)
        entry.current_activity_id = activity.id

        commit_or_rollback(db, "switch activity")
        db.refresh(entry)
        return entry

    def stop_current_activity(
        self, db: Session, *, entry: DailyEntry, now: Optional[datetime] = None
    ) -> DailyEntry:
        """Close the open period and clear the pointer. Caller commits."""
        self.entry_crud.close_open_periods(db, entry_id=entry.id, end=_utcnow(now))
        entry.current_activity_id = None
        db.flush()
        return entry

    def stop(self, db: Session, *, user: User, day: date, now: Optional[datetime] = None) -> DailyEntry:
        entry = self._require_entry(db, user_id=user.id, day=day)
        self.stop_current_activity(db, entry=entry, now=now)
        commit_or_rollback(db, "stop activity")
        db.refresh(entry)
        return entry

    def stop_activities_everywhere(
        self, db: Session, *, user_id: UUID, activity_ids: List[UUID], now: Optional[datetime] = None
    ) -> int:
        """Stop every entry whose current activity is in `activity_ids`. Caller commits."""
        entries = self.entry_crud.get_with_current_activity(db, user_id=user_id, activity_ids=activity_ids)
        for entry in entries:
            self.stop_current_activity(db, entry=entry, now=now)
        return len(entries)

    # =====================================================================
    # TIMELINE
    # =====================================================================

    def get_periods(self, db: Session, *, user: User, day: date) -> List[ActivityPeriod]:
        entry = self.entry_crud.get_by_user_and_date(db, user_id=user.id, day=day)
        if not entry:
            return []
        return self.entry_crud.get_periods(db, entry_id=entry.id)

    def get_grid(self, db: Session, *, user: User, day: date, now: Optional[datetime] = None) -> MinuteGridOut:
        now = _utcnow(now)
        entry = self.entry_crud.get_by_user_and_date(db, user_id=user.id, day=day)
        if not entry:
            return MinuteGridOut(date=day, minutes=[None] * (24 * 60))

        periods = self.entry_crud.get_periods(db, entry_id=entry.id)
        return MinuteGridOut(
            date=day,
            minutes=metrics.minute_grid(day, periods, entry.wake_time, entry.sleep_time, now),
        )

    # =====================================================================
    # ONE-TIME TASKS
    # =====================================================================

    def add_task(self, db: Session, *, user: User, day: date, obj_in: OneTimeTaskCreate) -> OneTimeTask:
        return self.task_crud.create(db, user_id=user.id, day=day, obj_in=obj_in)

    def update_task(self, db: Session, *, user: User, task_id: UUID, obj_in: OneTimeTaskUpdate) -> OneTimeTask:
        task = self.task_crud.get(db, user_id=user.id, task_id=task_id)
        if not task:
            raise NotFoundError("Task not found")
        return self.task_crud.update(db, db_obj=task, obj_in=obj_in)

    def delete_task(self, db: Session, *, user: User, task_id: UUID) -> None:
        task = self.task_crud.get(db, user_id=user.id, task_id=task_id)
        if not task:
            raise NotFoundError("Task not found")
        self.task_crud.delete(db, db_obj=task)


daily_service = DailyService()
