# app/services/recurrence.py
import logging
from datetime import date, datetime
from enum import Enum
from typing import FrozenSet, Iterable, List, Optional, Union

from pydantic import BaseModel, ConfigDict

logger = logging.getLogger(__name__)


# =====================================================================
# ENUMS
# =====================================================================

class RoutineKind(str, Enum):
    ANYTIME = "anytime"
    DAILY = "daily"
    NEVER = "never"
    WEEKLY = "weekly"
    MONTHLY = "monthly"
    CUSTOM = "custom"


class IntervalUnit(str, Enum):
    DAYS = "days"
    WEEKS = "weeks"
    MONTHS = "months"


SIMPLE_KINDS = {RoutineKind.ANYTIME, RoutineKind.DAILY, RoutineKind.NEVER}


# =====================================================================
# ROUTINE
# =====================================================================

class Routine(BaseModel):
    """
    Parsed recurrence descriptor.

    Serialized forms:
        anytime | daily | never
        weekly:<csv of 0-6, 0 = Sunday>
        monthly:<1-31>
        custom:<interval>:<days|weeks|months>
    """

    model_config = ConfigDict(frozen=True)

    kind: RoutineKind
    days: FrozenSet[int] = frozenset()
    day: Optional[int] = None
    interval: Optional[int] = None
    unit: Optional[IntervalUnit] = None

    @property
    def is_avoid(self) -> bool:
        """`never` activities are things to avoid; they still show every day."""
        return self.kind == RoutineKind.NEVER

    def serialize(self) -> str:
        if self.kind == RoutineKind.WEEKLY:
            return "weekly:" + ",".join(str(d) for d in sorted(self.days))
        if self.kind == RoutineKind.MONTHLY:
            return f"monthly:{self.day}"
        if self.kind == RoutineKind.CUSTOM:
            return f"custom:{self.interval}:{self.unit.value}"
        return self.kind.value

    def is_due(self, created_at: Optional[Union[date, datetime]], target: date) -> bool:
        return is_due(self, created_at, target)


DAILY = Routine(kind=RoutineKind.DAILY)


# =====================================================================
# PARSING
# =====================================================================

def _parse_int(raw: str, low: int, high: Optional[int] = None) -> int:
    value = int(raw.strip())
    if value < low or (high is not None and value > high):
        raise ValueError(f"{value} is out of range")
    return value


def _parse(text: str) -> Routine:
    parts = text.split(":")
    head = parts[0]

    if len(parts) == 1 and head in {k.value for k in SIMPLE_KINDS}:
        return Routine(kind=RoutineKind(head))

    if head == RoutineKind.WEEKLY.value and len(parts) == 2:
        days = frozenset(_parse_int(d, 0, 6) for d in parts[1].split(",") if d.strip())
        if not days:
            raise ValueError("weekly routine needs at least one day")
        return Routine(kind=RoutineKind.WEEKLY, days=days)

    if head == RoutineKind.MONTHLY.value and len(parts) == 2:
        return Routine(kind=RoutineKind.MONTHLY, day=_parse_int(parts[1], 1, 31))

    if head == RoutineKind.CUSTOM.value and len(parts) == 3:
        return Routine(
            kind=RoutineKind.CUSTOM,
            interval=_parse_int(parts[1], 1),
            unit=IntervalUnit(parts[2].strip()),
        )

    raise ValueError(f"Unknown routine '{text}'")


def parse_routine(text: Optional[str], strict: bool = False) -> Routine:
    """
    Parse a serialized routine.

    Empty input means "daily". With strict=False a malformed string also
    falls back to "daily" (stored legacy rows); with strict=True it raises
    ValueError (incoming writes).
    """
    if text is None or not text.strip():
        return DAILY

    try:
        return _parse(text.strip())
    except ValueError:
        if strict:
            raise ValueError(f"Invalid routine '{text}'")
        logger.warning(f"Unrecognized routine {text!r}, treating it as daily")
        return DAILY


# =====================================================================
# DUE PREDICATE
# =====================================================================

def _as_date(value: Union[date, datetime]) -> date:
    if isinstance(value, datetime):
        return value.date()
    return value


def sunday_weekday(day: date) -> int:
    """Weekday with 0 = Sunday .. 6 = Saturday."""
    return day.isoweekday() % 7


def is_due(
    routine: Union[Routine, str, None],
    created_at: Optional[Union[date, datetime]],
    target: Union[date, datetime],
) -> bool:
    """Whether an activity with this routine is due on `target`. Pure: no clock reads."""
    if not isinstance(routine, Routine):
        routine = parse_routine(routine)

    target = _as_date(target)

    if routine.kind in SIMPLE_KINDS:
        return True

    if routine.kind == RoutineKind.WEEKLY:
        return sunday_weekday(target) in routine.days

    if routine.kind == RoutineKind.MONTHLY:
        # No clamping: day 31 is never due in a 30-day month
        return target.day == routine.day

    # custom:<interval>:<unit> is anchored on the creation date
    if created_at is None:
        return False

    anchor = _as_date(created_at)
    interval = routine.interval

    if routine.unit == IntervalUnit.DAYS:
        days_diff = (target - anchor).days
        return days_diff >= 0 and days_diff % interval == 0

    if routine.unit == IntervalUnit.WEEKS:
        days_diff = (target - anchor).days
        return days_diff >= 0 and days_diff % 7 == 0 and (days_diff // 7) % interval == 0

    months_diff = (target.year - anchor.year) * 12 + (target.month - anchor.month)
    return months_diff >= 0 and months_diff % interval == 0 and target.day == anchor.day


def due_activities(activities: Iterable, target: date) -> List:
    """Filter activity rows (anything with `routine` and `created_at`) down to those due on target."""
    return [a for a in activities if is_due(a.routine, a.created_at, target)]
