"""Shared fixtures: in-memory SQLite store, seeded roles, and an app client."""

import os

os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("SESSION_SECRET", "test-session-secret")

from datetime import datetime, timedelta, timezone

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from demoyork import models  # noqa: F401
from demoyork.core.config import settings
from demoyork.core.security import SessionCodec, hash_password
from demoyork.db.base import Base
from demoyork.db.seeds.seed_roles import seed_roles
from demoyork.db import session as db_session
from demoyork.main import app
from demoyork.models.role import Role
from demoyork.models.user import User

PASSWORD = "secret123"


class FakeClock:
    """Settable clock for session expiry tests."""

    def __init__(self, start: datetime):
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now += timedelta(**kwargs)


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
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
def seeded_db(db):
    seed_roles(db)
    return db


@pytest.fixture
def clock():
    return FakeClock(datetime(2020, 1, 1, 12, 0, tzinfo=timezone.utc))


@pytest.fixture
def codec(clock):
    return SessionCodec(secret="unit-test-secret", ttl=timedelta(hours=1), clock=clock)


@pytest.fixture
def make_user(db):
    """Insert a user with one of the seeded roles straight into the store."""

    def _make_user(username: str, role_name: str, email: str | None = None, password: str = PASSWORD) -> User:
        role = db.query(Role).filter(Role.name == role_name).one()
        user = User(
            username=username,
            email=email or f"{username}@example.com",
            hashed_password=hash_password(password),
            role_id=role.id,
        )
        db.add(user)
        db.commit()
        db.refresh(user)
        return user

    return _make_user


@pytest.fixture
def client(session_factory, monkeypatch):
    # get_db and the startup seed both open sessions through this factory
    monkeypatch.setattr(db_session, "SessionLocal", session_factory)
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def signin(client):
    """Sign in through the API; the session cookie lands in the client jar."""

    def _signin(username: str, password: str = PASSWORD):
        client.cookies.clear()
        return client.post("/users/signin", json={"username": username, "password": password})

    return _signin


@pytest.fixture
def cookie_name():
    return settings.SESSION_COOKIE_NAME
