from datetime import datetime, timedelta, timezone
from uuid import UUID

from app.models.user import User
from app.services.time_tracker import time_tracker_service


def test_start_stops_running_entry(client, auth_headers, make_group, make_activity):
    group = make_group()
    run = make_activity(name="Run", group_id=group["id"])
    read = make_activity(name="Read", group_id=group["id"])

    first = client.post("/timer/start", json={"activity_id": run["id"]}, headers=auth_headers)
    assert first.status_code == 201
    second = client.post("/timer/start", json={"activity_id": read["id"]}, headers=auth_headers)
    assert second.status_code == 201

    active = client.get("/timer/active", headers=auth_headers).json()
    assert active["id"] == second.json()["id"]
    assert active["activity_id"] == read["id"]
    assert active["elapsed_seconds"] >= 0

    recent = client.get("/timer/recent", headers=auth_headers).json()
    assert [r["activity_name"] for r in recent] == ["Run"]
    assert recent[0]["time_end"] is not None


def test_stop(client, auth_headers, make_activity):
    activity = make_activity()
    assert client.post("/timer/stop", headers=auth_headers).json() is None

    client.post("/timer/start", json={"activity_id": activity["id"]}, headers=auth_headers)
    stopped = client.post("/timer/stop", headers=auth_headers).json()
    assert stopped["time_end"] is not None
    assert client.get("/timer/active", headers=auth_headers).json() is None


def test_start_unknown_activity(client, other_headers, make_activity):
    activity = make_activity()
    resp = client.post("/timer/start", json={"activity_id": activity["id"]}, headers=other_headers)
    assert resp.status_code == 404


def test_recent_is_limited_and_newest_first(client, auth_headers, make_activity, db, user_id):
    activity = make_activity()
    user = db.get(User, user_id)
    start = datetime(2024, 5, 1, 8, 0, tzinfo=timezone.utc)
    for i in range(7):
        time_tracker_service.start(db, user=user, activity_id=UUID(activity["id"]), now=start + timedelta(hours=i))
    time_tracker_service.stop(db, user=user, now=start + timedelta(hours=7, minutes=1, seconds=5))

    recent = time_tracker_service.recent(db, user=user)
    assert len(recent) == 5
    assert [r.time_start.hour for r in recent] == [14, 13, 12, 11, 10]
    assert recent[0].duration_display == "1h 1m 5s"
    assert recent[1].duration_display == "1h 0m 0s"


def test_start_rejects_activity_in_archived_group(client, auth_headers, make_activity, db, user_id):
    from app.models.activity_group import ActivityGroup

    activity = make_activity()
    group = db.get(ActivityGroup, UUID(activity["group_id"]))
    group.is_archived = True
    db.commit()

    resp = client.post("/timer/start", json={"activity_id": activity["id"]}, headers=auth_headers)
    assert resp.status_code == 422
    assert client.get("/timer/active", headers=auth_headers).json() is None


def test_archiving_stops_running_timer(client, auth_headers, make_group, make_activity):
    group = make_group()
    run = make_activity(name="Run", group_id=group["id"])
    read = make_activity(name="Read")

    client.post("/timer/start", json={"activity_id": run["id"]}, headers=auth_headers)
    client.post(f"/activities/{run['id']}/archive", headers=auth_headers)
    assert client.get("/timer/active", headers=auth_headers).json() is None
    assert [r["activity_name"] for r in client.get("/timer/recent", headers=auth_headers).json()] == ["Run"]

    client.post(f"/activities/{run['id']}/restore", headers=auth_headers)
    client.post("/timer/start", json={"activity_id": run["id"]}, headers=auth_headers)
    client.post(f"/groups/{group['id']}/archive", headers=auth_headers)
    assert client.get("/timer/active", headers=auth_headers).json() is None

    # timers of other groups keep running
    client.post("/timer/start", json={"activity_id": read["id"]}, headers=auth_headers)
    client.post(f"/groups/{group['id']}/archive", headers=auth_headers)
    assert client.get("/timer/active", headers=auth_headers).json()["activity_id"] == read["id"]
