# app/services/metrics.py
from datetime import date, datetime, time, timedelta, timezone
from typing import Any, Dict, Iterable, List, Mapping, Optional

from pydantic import BaseModel

from app.services.recurrence import parse_routine


# =====================================================================
# PROGRESS / COMPLETION
# =====================================================================

def is_complete(count: int, target: int) -> bool:
    return count >= target


def next_count(count: int, target: int) -> int:
    """Cyclic single-click increment: clicking a completed task resets it to zero."""
    return 0 if count >= target else count + 1


def clamp_count(count: int, target: int) -> int:
    return max(0, min(count, target))


class CompletionSummary(BaseModel):
    completed: int
    total: int
    rate: int


def completion_rate(
    activities: Iterable[Any],
    counts: Mapping[str, int],
    include_never: bool = False,
) -> CompletionSummary:
    """
    Percentage of the day's activities that are complete.

    Avoid ("never") activities are left out of both numerator and
    denominator unless include_never is set.
    """
    completed = total = 0
    for activity in activities:
        if not include_never and parse_routine(activity.routine).is_avoid:
            continue
        total += 1
        target = activity.completion_target or 1
        if is_complete(counts.get(str(activity.id), 0), target):
            completed += 1

    rate = round(100 * completed / total) if total else 0
    return CompletionSummary(completed=completed, total=total, rate=rate)


def merge_legacy_progress(
    task_counts: Optional[Mapping[str, int]],
    completed_tasks: Optional[Iterable[str]],
    targets: Mapping[str, int],
) -> Dict[str, int]:
    """
    Read progress from both historical encodings.

    Ids in the legacy boolean `completed_tasks` list that have no counter
    yet are read as complete (count = completion target). Counters are
    clamped to [0, target].
    """
    merged: Dict[str, int] = {}
    for activity_id, count in (task_counts or {}).items():
        target = targets.get(activity_id)
        merged[activity_id] = clamp_count(int(count), target) if target else int(count)

    for activity_id in completed_tasks or []:
        activity_id = str(activity_id)
        if activity_id not in merged:
            merged[activity_id] = targets.get(activity_id, 1)

    return {k: v for k, v in merged.items() if v > 0}


# =====================================================================
# PERIOD DURATIONS
# =====================================================================

def as_utc(value: datetime) -> datetime:
    """SQLite hands back naive datetimes; everything here is stored in UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def period_duration(start: datetime, end: Optional[datetime], now: datetime) -> timedelta:
    # An open period runs up to `now`. end < start is not checked.
    return as_utc(end or now) - as_utc(start)


def activity_duration(periods: Iterable[Any], activity_id: Any, now: datetime) -> timedelta:
    """Total time spent on one activity across the given periods."""
    total = timedelta()
    for period in periods:
        if str(period.activity_id) != str(activity_id):
            continue
        total += period_duration(period.start_time, period.end_time, now)
    return total


def format_duration(delta: timedelta) -> str:
    """`"1h 2m 3s"`, or `"2m 3s"` under an hour; negative totals get a leading `-`."""
    total_seconds = int(delta.total_seconds())
    sign = "-" if total_seconds < 0 else ""
    hours, rest = divmod(abs(total_seconds), 3600)
    minutes, seconds = divmod(rest, 60)

    if hours > 0:
        return f"{sign}{hours}h {minutes}m {seconds}s"
    return f"{sign}{minutes}m {seconds}s"


def open_period(periods: Iterable[Any]) -> Optional[Any]:
    for period in periods:
        if period.end_time is None:
            return period
    return None


# =====================================================================
# DAY TIMELINE
# =====================================================================

def activity_at(
    periods: Iterable[Any],
    moment: datetime,
    wake_time: Optional[datetime],
    sleep_time: Optional[datetime],
    now: datetime,
) -> Optional[str]:
    """Activity id that was current at `moment`, bounded by the wake/sleep bracket."""
    if wake_time is None:
        return None

    moment = as_utc(moment)
    upper = as_utc(sleep_time or now)
    if moment < as_utc(wake_time) or moment > upper:
        return None

    for period in periods:
        start = as_utc(period.start_time)
        end = as_utc(period.end_time or now)
        if start <= moment < end:
            return str(period.activity_id)

    return None


def minute_grid(
    day: date,
    periods: List[Any],
    wake_time: Optional[datetime],
    sleep_time: Optional[datetime],
    now: datetime,
) -> List[Optional[str]]:
    """1440 slots (one per UTC minute of `day`) holding the current activity id or None."""
    midnight = datetime.combine(day, time(0, 0), tzinfo=timezone.utc)
    return [
        activity_at(periods, midnight + timedelta(minutes=m), wake_time, sleep_time, now)
        for m in range(24 * 60)
    ]
