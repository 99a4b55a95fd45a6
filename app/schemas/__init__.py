# app/schemas/__init__.py

from .user import (
    UserOut,
    UserPreferencesUpdate,
    SuccessResponse,
)
from .activities import (
    ActivityGroupCreate,
    ActivityGroupUpdate,
    ActivityGroupOut,
    ActivityGroupWithActivities,
    ActivityCreate,
    ActivityUpdate,
    ActivityOut,
    ArchivedActivityOut,
    ArchivedItemsOut,
    ColorOption,
)
from .daily import (
    DailyEntryOut,
    ActivityPeriodOut,
    DailyTaskOut,
    CompletionOut,
    DailyViewOut,
    IncrementResponse,
    MinuteGridOut,
    SwitchActivityRequest,
    WakeRequest,
    OneTimeTaskCreate,
    OneTimeTaskUpdate,
    OneTimeTaskOut,
)
from .journal import (
    JournalEntryUpsert,
    JournalEntryOut,
    JournalEntryDetail,
    JournalCalendarDay,
    BookmarkResponse,
)
from .timer import (
    TimerStartRequest,
    TimeEntryOut,
    ActiveTimerOut,
    RecentTimeEntryOut,
)


__all__ = [
    # Users
    "UserOut", "UserPreferencesUpdate", "SuccessResponse",

    # Activities
    "ActivityGroupCreate", "ActivityGroupUpdate", "ActivityGroupOut", "ActivityGroupWithActivities",
    "ActivityCreate", "ActivityUpdate", "ActivityOut", "ArchivedActivityOut", "ArchivedItemsOut", "ColorOption",

    # Daily
    "DailyEntryOut", "ActivityPeriodOut", "DailyTaskOut", "CompletionOut", "DailyViewOut",
    "IncrementResponse", "MinuteGridOut", "SwitchActivityRequest", "WakeRequest",
    "OneTimeTaskCreate", "OneTimeTaskUpdate", "OneTimeTaskOut",

    # Journal
    "JournalEntryUpsert", "JournalEntryOut", "JournalEntryDetail", "JournalCalendarDay", "BookmarkResponse",

    # Timer
    "TimerStartRequest", "TimeEntryOut", "ActiveTimerOut", "RecentTimeEntryOut",
]
