import os
from uuid import uuid4

os.environ.setdefault("DATABASE_URL", "sqlite://")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app import models  # noqa: F401
from app.core.config import Base, get_db, settings
from app.core.security import create_access_token
from main import app


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def media_root(tmp_path, monkeypatch):
    root = tmp_path / "media"
    monkeypatch.setattr(settings, "MEDIA_ROOT", str(root))
    return root


@pytest.fixture
def client(session_factory, media_root):
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


def _headers_for(user_id):
    token = create_access_token(user_id, email=f"{str(user_id)[:8]}@okhabit.app")
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def user_id():
    return uuid4()


@pytest.fixture
def auth_headers(user_id):
    return _headers_for(user_id)


@pytest.fixture
def other_headers():
    return _headers_for(uuid4())


@pytest.fixture
def make_group(client, auth_headers):
    def _make(name="Health", color="#22c55e", headers=None, **extra):
        resp = client.post(
            "/groups",
            json={"name": name, "color": color, **extra},
            headers=headers or auth_headers,
        )
        assert resp.status_code == 201, resp.text
        return resp.json()

    return _make


@pytest.fixture
def make_activity(client, auth_headers, make_group):
    def _make(name="Run", group_id=None, routine="daily", completion_target=1, headers=None, **extra):
        if group_id is None:
            group_id = make_group(headers=headers)["id"]
        resp = client.post(
            "/activities",
            json={
                "group_id": group_id,
                "name": name,
                "routine": routine,
                "completion_target": completion_target,
                **extra,
            },
            headers=headers or auth_headers,
        )
        assert resp.status_code == 201, resp.text
        return resp.json()

    return _make
