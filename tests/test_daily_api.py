from datetime import date, datetime, timezone
from uuid import UUID


TODAY = date.today().isoformat()
MONDAY = "2024-01-01"
TUESDAY = "2024-01-02"


def tasks_by_name(day_view):
    return {t["name"]: t for t in day_view["tasks"]}


# =====================================================================
# DAY VIEW
# =====================================================================


def test_day_without_entry_is_empty(client, auth_headers, make_activity):
    make_activity(name="Run")
    resp = client.get(f"/daily/{TODAY}", headers=auth_headers)
    assert resp.status_code == 200

    body = resp.json()
    assert body["entry"] is None
    assert body["completion"] == {"completed": 0, "total": 1, "rate": 0}
    task = tasks_by_name(body)["Run"]
    assert task["count"] == 0
    assert task["is_complete"] is False
    assert task["elapsed_display"] == "0m 0s"


def test_only_due_activities_listed(client, auth_headers, make_group, make_activity):
    group = make_group()
    make_activity(name="Gym", group_id=group["id"], routine="weekly:1")
    make_activity(name="Water", group_id=group["id"])

    monday = tasks_by_name(client.get(f"/daily/{MONDAY}", headers=auth_headers).json())
    tuesday = tasks_by_name(client.get(f"/daily/{TUESDAY}", headers=auth_headers).json())

    assert set(monday) == {"Gym", "Water"}
    assert set(tuesday) == {"Water"}


def test_avoid_activities_excluded_from_rate(client, auth_headers, make_group, make_activity):
    group = make_group()
    run = make_activity(name="Run", group_id=group["id"])
    make_activity(name="Read", group_id=group["id"])
    make_activity(name="Doomscroll", group_id=group["id"], routine="never")

    client.post(f"/daily/{TODAY}/activities/{run['id']}/increment", headers=auth_headers)

    body = client.get(f"/daily/{TODAY}", headers=auth_headers).json()
    assert body["completion"] == {"completed": 1, "total": 2, "rate": 50}
    assert tasks_by_name(body)["Doomscroll"]["is_avoid"] is True


# =====================================================================
# PROGRESS
# =====================================================================


def test_increment_cycles_and_creates_entry(client, auth_headers, make_activity):
    activity = make_activity(name="Water", completion_target=2)
    url = f"/daily/{TODAY}/activities/{activity['id']}/increment"

    first = client.post(url, headers=auth_headers).json()
    assert (first["count"], first["is_complete"]) == (1, False)

    second = client.post(url, headers=auth_headers).json()
    assert (second["count"], second["is_complete"]) == (2, True)
    assert second["completion"]["rate"] == 100

    third = client.post(url, headers=auth_headers).json()
    assert (third["count"], third["is_complete"]) == (0, False)

    entry = client.get(f"/daily/{TODAY}", headers=auth_headers).json()["entry"]
    assert entry is not None
    assert activity["id"] not in entry["task_counts"]


def test_increment_unknown_activity(client, auth_headers, other_headers, make_activity):
    activity = make_activity()
    resp = client.post(f"/daily/{TODAY}/activities/{activity['id']}/increment", headers=other_headers)
    assert resp.status_code == 404


def test_legacy_completed_tasks_are_read(client, auth_headers, make_activity, db, user_id):
    from app.models.daily_entry import DailyEntry

    activity = make_activity(name="Stretch", completion_target=3)
    db.add(DailyEntry(user_id=user_id, date=date(2024, 1, 1), task_counts={}, completed_tasks=[activity["id"]]))
    db.commit()

    task = tasks_by_name(client.get(f"/daily/{MONDAY}", headers=auth_headers).json())["Stretch"]
    assert task["count"] == 3
    assert task["is_complete"] is True

    # Clicking a complete task wraps to zero and drops the legacy list
    resp = client.post(f"/daily/{MONDAY}/activities/{activity['id']}/increment", headers=auth_headers)
    assert resp.json()["count"] == 0
    db.expire_all()
    entry = db.query(DailyEntry).filter(DailyEntry.user_id == user_id).one()
    assert entry.completed_tasks is None
    assert entry.task_counts == {}


# =====================================================================
# WAKE / SWITCH / SLEEP
# =====================================================================


def test_switch_requires_daily_entry(client, auth_headers, make_activity):
    activity = make_activity()
    resp = client.post(f"/daily/{TODAY}/switch", json={"activity_id": activity["id"]}, headers=auth_headers)
    assert resp.status_code == 404
    assert "wake up first" in resp.json()["detail"]


def test_wake_starts_first_activity(client, auth_headers, make_activity):
    activity = make_activity()
    resp = client.post(f"/daily/{TODAY}/wake", headers=auth_headers)
    assert resp.status_code == 200

    entry = resp.json()
    assert entry["is_awake"] is True
    assert entry["wake_time"] is not None
    assert entry["current_activity_id"] == activity["id"]

    periods = client.get(f"/daily/{TODAY}/periods", headers=auth_headers).json()
    assert len(periods) == 1
    assert periods[0]["end_time"] is None


def test_switch_keeps_single_open_period(client, auth_headers, make_group, make_activity):
    group = make_group()
    run = make_activity(name="Run", group_id=group["id"])
    read = make_activity(name="Read", group_id=group["id"])
    client.post(f"/daily/{TODAY}/wake", json={"activity_id": run["id"]}, headers=auth_headers)

    for target in (read, run, read, read):
        resp = client.post(f"/daily/{TODAY}/switch", json={"activity_id": target["id"]}, headers=auth_headers)
        assert resp.status_code == 200
        assert resp.json()["current_activity_id"] == target["id"]

    periods = client.get(f"/daily/{TODAY}/periods", headers=auth_headers).json()
    # the last switch to the already-current activity is a no-op
    assert len(periods) == 4
    open_periods = [p for p in periods if p["end_time"] is None]
    assert len(open_periods) == 1
    assert open_periods[0]["activity_id"] == read["id"]

    tasks = tasks_by_name(client.get(f"/daily/{TODAY}", headers=auth_headers).json())
    assert tasks["Read"]["is_current"] is True
    assert tasks["Run"]["is_current"] is False


def test_switch_closes_and_opens_at_same_instant(client, auth_headers, make_group, make_activity, db, user_id):
    from app.models.user import User
    from app.services.daily import daily_service
    from app.services.metrics import as_utc

    group = make_group()
    a = make_activity(name="A", group_id=group["id"])
    b = make_activity(name="B", group_id=group["id"])
    user = db.get(User, user_id)
    t0 = datetime(2024, 1, 1, 8, 0, tzinfo=timezone.utc)
    t1 = datetime(2024, 1, 1, 9, 17, 42, tzinfo=timezone.utc)

    daily_service.wake(db, user=user, day=date(2024, 1, 1), activity_id=UUID(a["id"]), now=t0)
    daily_service.switch_activity(db, user=user, day=date(2024, 1, 1), activity_id=UUID(b["id"]), now=t1)

    first, second = daily_service.get_periods(db, user=user, day=date(2024, 1, 1))
    assert first.activity_id == UUID(a["id"])
    assert as_utc(first.start_time) == t0
    assert as_utc(first.end_time) == t1
    assert second.activity_id == UUID(b["id"])
    assert as_utc(second.start_time) == t1
    assert second.end_time is None


def test_switch_to_archived_activity_rejected(client, auth_headers, make_group, make_activity):
    group = make_group()
    run = make_activity(name="Run", group_id=group["id"])
    old = make_activity(name="Old", group_id=group["id"])
    client.post(f"/daily/{TODAY}/wake", json={"activity_id": run["id"]}, headers=auth_headers)
    client.post(f"/activities/{old['id']}/archive", headers=auth_headers)

    resp = client.post(f"/daily/{TODAY}/switch", json={"activity_id": old["id"]}, headers=auth_headers)
    assert resp.status_code == 422
    assert client.get(f"/daily/{TODAY}", headers=auth_headers).json()["entry"]["current_activity_id"] == run["id"]


def test_stop_and_sleep_close_period(client, auth_headers, make_activity):
    activity = make_activity()
    client.post(f"/daily/{TODAY}/wake", json={"activity_id": activity["id"]}, headers=auth_headers)

    resp = client.post(f"/daily/{TODAY}/stop", headers=auth_headers)
    assert resp.json()["current_activity_id"] is None
    assert resp.json()["is_awake"] is True

    client.post(f"/daily/{TODAY}/switch", json={"activity_id": activity["id"]}, headers=auth_headers)
    resp = client.post(f"/daily/{TODAY}/sleep", headers=auth_headers)
    entry = resp.json()
    assert entry["is_awake"] is False
    assert entry["sleep_time"] is not None
    assert entry["current_activity_id"] is None

    periods = client.get(f"/daily/{TODAY}/periods", headers=auth_headers).json()
    assert len(periods) == 2
    assert all(p["end_time"] is not None for p in periods)


def test_sleep_without_entry(client, auth_headers):
    assert client.post(f"/daily/{TODAY}/sleep", headers=auth_headers).status_code == 404


def test_grid(client, auth_headers, make_activity):
    activity = make_activity()
    empty = client.get(f"/daily/{TODAY}/grid", headers=auth_headers).json()
    assert len(empty["minutes"]) == 1440
    assert set(empty["minutes"]) == {None}

    client.post(f"/daily/{TODAY}/wake", json={"activity_id": activity["id"]}, headers=auth_headers)
    grid = client.get(f"/daily/{TODAY}/grid", headers=auth_headers).json()
    assert len(grid["minutes"]) == 1440


# =====================================================================
# ONE-TIME TASKS
# =====================================================================


def test_one_time_tasks(client, auth_headers):
    assert client.post(f"/daily/{TODAY}/tasks", json={"title": "  "}, headers=auth_headers).status_code == 422

    resp = client.post(f"/daily/{TODAY}/tasks", json={"title": " Call mom "}, headers=auth_headers)
    assert resp.status_code == 201
    task = resp.json()
    assert task["title"] == "Call mom"
    assert task["is_completed"] is False

    resp = client.patch(f"/daily/tasks/{task['id']}", json={"is_completed": True}, headers=auth_headers)
    assert resp.json()["is_completed"] is True

    day = client.get(f"/daily/{TODAY}", headers=auth_headers).json()
    assert [t["title"] for t in day["one_time_tasks"]] == ["Call mom"]

    assert client.delete(f"/daily/tasks/{task['id']}", headers=auth_headers).status_code == 200
    assert client.get(f"/daily/{TODAY}", headers=auth_headers).json()["one_time_tasks"] == []
    assert client.delete(f"/daily/tasks/{task['id']}", headers=auth_headers).status_code == 404
