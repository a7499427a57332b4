import logging
import os
from datetime import datetime, timedelta

os.environ["DATABASE_URL"] = "sqlite://"
os.environ["JWT_SECRET_KEY"] = "test-secret"

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from main import app  # noqa: E402
from quizroom.core.clock import get_now  # noqa: E402
from quizroom.core.database import Base, get_db  # noqa: E402


START = datetime(2026, 3, 1, 12, 0, 0)


class FrozenClock:
    def __init__(self, now: datetime):
        self.now = now

    def advance(self, **kwargs) -> datetime:
        self.now = self.now + timedelta(**kwargs)
        return self.now


@pytest.fixture(autouse=True)
def quiet_sql_logger():
    logger = logging.getLogger("sqlalchemy.engine")
    old = logger.level
    logger.setLevel(logging.WARNING)
    try:
        yield
    finally:
        logger.setLevel(old)


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
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def clock():
    return FrozenClock(START)


@pytest.fixture
def client(session_factory, clock):
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_now] = lambda: clock.now
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


class Api:
    """Small helpers for driving the HTTP API in tests."""

    def __init__(self, client: TestClient):
        self.client = client

    def signup(self, name: str, password: str = "secret123") -> dict:
        r = self.client.post("/api/auth/signup", json={"name": name, "password": password})
        assert r.status_code == 200, r.text
        return {"Authorization": f"Bearer {r.json()['token']}"}

    def create_quiz(self, headers: dict, title: str = "Capitals", deadline: datetime | None = None) -> dict:
        body = {"title": title}
        if deadline is not None:
            body["deadline"] = deadline.isoformat()
        r = self.client.post("/api/quizzes", json=body, headers=headers)
        assert r.status_code == 200, r.text
        return r.json()

    def add_question(self, headers: dict, code: str, **fields) -> dict:
        r = self.client.post(f"/api/quizzes/{code}/questions", json=fields, headers=headers)
        assert r.status_code == 200, r.text
        return r.json()

    def join(self, code: str, username: str | None = None, headers: dict | None = None) -> dict:
        body = {} if username is None else {"username": username}
        r = self.client.post(f"/api/quizzes/{code}/join", json=body, headers=headers or {})
        assert r.status_code == 200, r.text
        return r.json()["participant"]

    def submit(self, code: str, participant_id: str, answers: dict):
        return self.client.post(
            f"/api/quizzes/{code}/submit",
            json={"participantId": participant_id, "answers": answers},
        )


@pytest.fixture
def api(client):
    return Api(client)


@pytest.fixture
def host(api):
    return api.signup("host_user")
