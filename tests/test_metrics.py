from datetime import date, datetime, timedelta, timezone
from types import SimpleNamespace

from app.services import metrics


def at(hour, minute=0, second=0):
    return datetime(2024, 3, 1, hour, minute, second, tzinfo=timezone.utc)


def period(activity_id, start, end=None):
    return SimpleNamespace(activity_id=activity_id, start_time=start, end_time=end)


def activity(activity_id, routine="daily", target=1):
    return SimpleNamespace(id=activity_id, routine=routine, completion_target=target)


# =====================================================================
# PROGRESS
# =====================================================================


def test_increment_wraps_after_target():
    seen = [0]
    for _ in range(4):
        seen.append(metrics.next_count(seen[-1], 3))
    assert seen == [0, 1, 2, 3, 0]


def test_single_target_toggles():
    assert metrics.next_count(0, 1) == 1
    assert metrics.next_count(1, 1) == 0


def test_clamp_count():
    assert metrics.clamp_count(5, 3) == 3
    assert metrics.clamp_count(-1, 3) == 0
    assert metrics.clamp_count(2, 3) == 2


def test_completion_rate_skips_avoid_activities():
    activities = [activity("a"), activity("b"), activity("c", routine="never")]
    summary = metrics.completion_rate(activities, {"a": 1})
    assert (summary.completed, summary.total, summary.rate) == (1, 2, 50)


def test_completion_rate_can_include_avoid_activities():
    activities = [activity("a"), activity("b"), activity("c", routine="never")]
    summary = metrics.completion_rate(activities, {"a": 1}, include_never=True)
    assert (summary.completed, summary.total, summary.rate) == (1, 3, 33)


def test_completion_rate_respects_target():
    summary = metrics.completion_rate([activity("a", target=3)], {"a": 2})
    assert summary.rate == 0


def test_completion_rate_empty_day():
    assert metrics.completion_rate([], {}).rate == 0
    assert metrics.completion_rate([activity("x", routine="never")], {}).rate == 0


def test_legacy_completed_list_reads_as_complete():
    merged = metrics.merge_legacy_progress(
        {"a": 5, "z": 0},
        ["a", "b"],
        {"a": 3, "b": 2},
    )
    assert merged == {"a": 3, "b": 2}


def test_legacy_merge_with_no_data():
    assert metrics.merge_legacy_progress(None, None, {}) == {}


# =====================================================================
# DURATIONS
# =====================================================================


def test_activity_duration_sums_closed_and_open_periods():
    periods = [
        period("run", at(11), None),
        period("read", at(10, 5), at(11)),
        period("run", at(10), at(10, 5)),
    ]
    total = metrics.activity_duration(periods, "run", now=at(11, 2))
    assert total == timedelta(minutes=7)
    assert metrics.activity_duration(list(reversed(periods)), "run", now=at(11, 2)) == total


def test_duration_accepts_naive_database_values():
    periods = [period("run", datetime(2024, 3, 1, 10, 0), datetime(2024, 3, 1, 10, 30))]
    assert metrics.activity_duration(periods, "run", now=at(12)) == timedelta(minutes=30)


def test_negative_period_is_not_clamped():
    periods = [period("run", at(10), at(9, 59))]
    assert metrics.activity_duration(periods, "run", now=at(12)) == timedelta(minutes=-1)


def test_format_duration():
    assert metrics.format_duration(timedelta(hours=1, minutes=2, seconds=3)) == "1h 2m 3s"
    assert metrics.format_duration(timedelta(minutes=2, seconds=3)) == "2m 3s"
    assert metrics.format_duration(timedelta()) == "0m 0s"


def test_format_negative_duration():
    assert metrics.format_duration(timedelta(minutes=-1)) == "-1m 0s"
    assert metrics.format_duration(timedelta(seconds=-90)) == "-1m 30s"
    assert metrics.format_duration(-timedelta(hours=2, seconds=5)) == "-2h 0m 5s"


def test_open_period():
    closed = period("a", at(9), at(10))
    running = period("b", at(10))
    assert metrics.open_period([closed, running]) is running
    assert metrics.open_period([closed]) is None


# =====================================================================
# TIMELINE
# =====================================================================


def test_activity_at_respects_wake_and_sleep():
    periods = [period("a", at(8), at(9)), period("b", at(9), at(10))]
    wake, sleep, now = at(8), at(10), at(23)

    assert metrics.activity_at(periods, at(7, 59), wake, sleep, now) is None
    assert metrics.activity_at(periods, at(8, 30), wake, sleep, now) == "a"
    assert metrics.activity_at(periods, at(9), wake, sleep, now) == "b"
    assert metrics.activity_at(periods, at(10, 1), wake, sleep, now) is None
    assert metrics.activity_at(periods, at(8, 30), None, sleep, now) is None


def test_minute_grid():
    periods = [period("a", at(8), at(9)), period("b", at(9))]
    grid = metrics.minute_grid(date(2024, 3, 1), periods, at(8), None, now=at(9, 30))

    assert len(grid) == 1440
    assert grid[8 * 60] == "a"
    assert grid[9 * 60 + 29] == "b"
    assert grid[9 * 60 + 31] is None
    assert grid[7 * 60] is None
