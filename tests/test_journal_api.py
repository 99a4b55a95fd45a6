from datetime import datetime, timedelta, timezone

import pytest

from app.core.config import settings


def utc_today():
    return datetime.now(timezone.utc).date()


TODAY = utc_today().isoformat()


def put_entry(client, headers, day=TODAY, **fields):
    return client.put(f"/journal/{day}", json=fields, headers=headers)


# =====================================================================
# UPSERT / READ
# =====================================================================


def test_missing_entry_is_null(client, auth_headers):
    resp = client.get(f"/journal/{TODAY}", headers=auth_headers)
    assert resp.status_code == 200
    assert resp.json() is None


def test_upsert_replaces_entry(client, auth_headers):
    resp = put_entry(client, auth_headers, title="Good day", text_content="Went for a run", day_quality=4, day_emoji="😊")
    assert resp.status_code == 200
    created = resp.json()
    assert created["day_quality_label"] == "Good"
    assert created["can_edit"] is True

    resp = put_entry(client, auth_headers, title="Great day", day_quality=5)
    updated = resp.json()
    assert updated["id"] == created["id"]
    assert updated["title"] == "Great day"
    assert updated["text_content"] is None
    assert updated["day_quality_label"] == "Great"

    assert len(client.get("/journal", headers=auth_headers).json()) == 1


@pytest.mark.parametrize(
    "fields",
    [
        {"title": "x" * 31},
        {"text_content": "x" * 301},
        {"day_quality": 0},
        {"day_quality": 6},
    ],
)
def test_upsert_limits(client, auth_headers, fields):
    assert put_entry(client, auth_headers, **fields).status_code == 422


def test_old_entries_are_read_only(client, auth_headers):
    window = settings.JOURNAL_EDIT_WINDOW_DAYS
    edge = (utc_today() - timedelta(days=window)).isoformat()
    too_old = (utc_today() - timedelta(days=window + 1)).isoformat()

    assert put_entry(client, auth_headers, day=edge, title="Still ok").status_code == 200
    resp = put_entry(client, auth_headers, day=too_old, title="Too late")
    assert resp.status_code == 403


def test_future_entries_rejected(client, auth_headers):
    tomorrow = (utc_today() + timedelta(days=1)).isoformat()
    assert put_entry(client, auth_headers, day=tomorrow, title="Later").status_code == 422


def test_entries_are_private(client, auth_headers, other_headers):
    put_entry(client, auth_headers, title="Mine")
    assert client.get(f"/journal/{TODAY}", headers=other_headers).json() is None
    assert client.get("/journal", headers=other_headers).json() == []


# =====================================================================
# BOOKMARK / CALENDAR / SEARCH
# =====================================================================


def test_bookmark_toggle(client, auth_headers):
    assert client.post(f"/journal/{TODAY}/bookmark", headers=auth_headers).status_code == 404

    put_entry(client, auth_headers, title="Keep")
    first = client.post(f"/journal/{TODAY}/bookmark", headers=auth_headers).json()
    assert first["is_bookmarked"] is True
    second = client.post(f"/journal/{TODAY}/bookmark", headers=auth_headers).json()
    assert second["is_bookmarked"] is False


def test_month_calendar(client, auth_headers):
    today = utc_today()
    put_entry(client, auth_headers, title="Today", day_quality=3, day_emoji="😐")

    resp = client.get(f"/journal/calendar/{today.year}/{today.month}", headers=auth_headers)
    assert resp.status_code == 200
    days = resp.json()
    assert {"entry_date": TODAY, "day_quality": 3, "day_emoji": "😐", "is_bookmarked": False} in days

    assert client.get(f"/journal/calendar/{today.year}/13", headers=auth_headers).status_code == 422
    assert client.get("/journal/calendar/0/1", headers=auth_headers).status_code == 422
    assert client.get("/journal/calendar/10000/1", headers=auth_headers).status_code == 422


def test_search_filters(client, auth_headers):
    yesterday = (utc_today() - timedelta(days=1)).isoformat()
    put_entry(client, auth_headers, day=TODAY, title="Beach trip", day_quality=5, is_bookmarked=True)
    put_entry(client, auth_headers, day=yesterday, title="Office", text_content="long BEACH meeting", day_quality=2)

    def search(**params):
        resp = client.get("/journal/search", params=params, headers=auth_headers)
        assert resp.status_code == 200
        return [e["title"] for e in resp.json()]

    assert search(q="beach") == ["Beach trip", "Office"]
    assert search(q="beach", is_bookmarked="true") == ["Beach trip"]
    assert search(is_bookmarked="false") == ["Office"]
    assert search(day_quality=2) == ["Office"]
    assert search(has_photos="true") == []
    assert search(has_video="false") == ["Beach trip", "Office"]
    assert search(q="mountain") == []


# =====================================================================
# MEDIA
# =====================================================================


def test_photo_upload_and_signed_url(client, auth_headers, user_id):
    files = [
        ("files", ("one.jpg", b"first-photo", "image/jpeg")),
        ("files", ("two.png", b"second-photo", "image/png")),
    ]
    resp = client.post(f"/journal/{TODAY}/photos", files=files, headers=auth_headers)
    assert resp.status_code == 200, resp.text

    entry = resp.json()
    assert len(entry["photo_urls"]) == 2
    assert all(p.startswith(f"{user_id}/{TODAY}_") for p in entry["photo_urls"])
    assert entry["photo_urls"][0].endswith("_0.jpg")
    assert entry["photo_urls"][1].endswith("_1.png")

    media = client.get(entry["photo_signed_urls"][0])
    assert media.status_code == 200
    assert media.content == b"first-photo"

    # a token only opens the file it was issued for
    token = entry["photo_signed_urls"][0].split("token=")[1]
    other = entry["photo_urls"][1]
    assert client.get(f"/media/journal-photos/{other}?token={token}").status_code == 401


def test_photo_upload_rules(client, auth_headers, monkeypatch):
    bad_type = [("files", ("notes.txt", b"hello", "text/plain"))]
    assert client.post(f"/journal/{TODAY}/photos", files=bad_type, headers=auth_headers).status_code == 422

    monkeypatch.setattr(settings, "MAX_PHOTO_BYTES", 4)
    too_big = [("files", ("big.jpg", b"12345", "image/jpeg"))]
    assert client.post(f"/journal/{TODAY}/photos", files=too_big, headers=auth_headers).status_code == 422

    monkeypatch.setattr(settings, "MAX_PHOTO_BYTES", 1024)
    monkeypatch.setattr(settings, "MAX_PHOTOS_PER_ENTRY", 2)
    three = [("files", (f"{i}.jpg", b"x", "image/jpeg")) for i in range(3)]
    assert client.post(f"/journal/{TODAY}/photos", files=three, headers=auth_headers).status_code == 422


def test_removing_photo_from_entry_deletes_file(client, auth_headers, media_root):
    files = [("files", ("one.jpg", b"a", "image/jpeg")), ("files", ("two.jpg", b"b", "image/jpeg"))]
    entry = client.post(f"/journal/{TODAY}/photos", files=files, headers=auth_headers).json()
    keep, drop = entry["photo_urls"]

    resp = put_entry(client, auth_headers, title="Trimmed", photo_urls=[keep])
    assert resp.json()["photo_urls"] == [keep]
    assert (media_root / "journal-photos" / keep).is_file()
    assert not (media_root / "journal-photos" / drop).exists()


def test_foreign_media_path_rejected(client, auth_headers):
    resp = put_entry(client, auth_headers, title="Sneaky", photo_urls=["someone-else/2024-01-01_1_0.jpg"])
    assert resp.status_code == 422


def test_video_replaces_previous(client, auth_headers, media_root, monkeypatch):
    first = client.post(
        f"/journal/{TODAY}/video", files={"file": ("a.mp4", b"video-1", "video/mp4")}, headers=auth_headers
    ).json()
    assert first["video_url"].endswith(".mp4")
    assert first["video_signed_url"] is not None

    second = client.post(
        f"/journal/{TODAY}/video", files={"file": ("b.webm", b"video-2", "video/webm")}, headers=auth_headers
    ).json()
    assert second["video_url"] != first["video_url"]
    assert not (media_root / "journal-videos" / first["video_url"]).exists()
    assert client.get(second["video_signed_url"]).content == b"video-2"

    monkeypatch.setattr(settings, "MAX_VIDEO_BYTES", 3)
    resp = client.post(
        f"/journal/{TODAY}/video", files={"file": ("c.mp4", b"toolong", "video/mp4")}, headers=auth_headers
    )
    assert resp.status_code == 422
