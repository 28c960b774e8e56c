"""Shared fixtures.

Every test gets its own SQLite file database under ``tmp_path`` and bcrypt
runs at its minimum cost so hashing does not dominate the run time.
"""

from datetime import datetime, timedelta, timezone
from typing import Generator

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import select, update

from app.config import Settings
from app.database import Database
from app.main import create_app
from app.models.session import SessionEntry
from app.services.sessions import SessionStore
from app.services.users import AccountStore

TEST_BCRYPT_ROUNDS = 4
DEFAULT_PASSWORD = "pw1234567"


@pytest.fixture
def database_url(tmp_path) -> str:
    return f"sqlite:///{tmp_path / 'test.db'}"


@pytest.fixture
def database(database_url: str) -> Generator[Database, None, None]:
    db = Database(database_url)
    db.init_db()
    yield db
    db.dispose()


@pytest.fixture
def accounts(database: Database) -> AccountStore:
    return AccountStore(database, bcrypt_rounds=TEST_BCRYPT_ROUNDS)


@pytest.fixture
def sessions(database: Database) -> SessionStore:
    return SessionStore(database)


def expire_session(database: Database, token: str) -> None:
    """Move a session's expiry into the past."""
    past = datetime.now(timezone.utc) - timedelta(minutes=1)
    with database.session_scope() as session:
        session.execute(
            update(SessionEntry)
            .where(SessionEntry.token == token)
            .values(expires_at=past)
        )


def count_sessions(database: Database, token: str | None = None) -> int:
    with database.session_scope() as session:
        stmt = select(SessionEntry)
        if token is not None:
            stmt = stmt.where(SessionEntry.token == token)
        return len(session.execute(stmt).scalars().all())


@pytest.fixture
def settings(database_url: str) -> Settings:
    return Settings(
        database_url=database_url,
        bcrypt_rounds=TEST_BCRYPT_ROUNDS,
        seed_admin_email="root@example.test",
        seed_admin_password="rootpass123",
        seed_admin_name="Root Admin",
    )


@pytest.fixture
def client(settings: Settings) -> Generator[TestClient, None, None]:
    with TestClient(create_app(settings)) as test_client:
        yield test_client


@pytest.fixture
def admin_client(client: TestClient) -> TestClient:
    """Client logged in as the seeded admin."""
    response = client.post(
        "/api/auth/login",
        json={"email": "root@example.test", "password": "rootpass123"},
    )
    assert response.status_code == 200
    return client


def register(
    client: TestClient,
    email: str,
    password: str = DEFAULT_PASSWORD,
    name: str = "Test User",
    role: str | None = None,
):
    payload = {"name": name, "email": email, "password": password}
    if role is not None:
        payload["role"] = role
    return client.post("/api/auth/register", json=payload)
