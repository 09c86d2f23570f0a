"""Shared fixtures: a throwaway SQLite database and an application client."""

from __future__ import annotations

import os
import sys
import tempfile
from pathlib import Path

import pytest

pytest.importorskip("fastapi")
from fastapi.testclient import TestClient

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.append(str(ROOT))

TEST_DB_PATH = Path(tempfile.gettempdir()) / "expense_tracker_test.db"
os.environ["DATABASE_URL"] = f"sqlite:///{TEST_DB_PATH}"
os.environ["SECRET_KEY"] = "test-secret"
os.environ["ACCESS_TOKEN_EXPIRE_MINUTES"] = "30"

from expense_tracker.config import get_settings  # noqa: E402

get_settings.cache_clear()

from expense_tracker.application.use_cases.users import create_user  # noqa: E402
from expense_tracker.infrastructure.database import (  # noqa: E402
    Base,
    SessionLocal,
    engine,
    initialize_database,
)
from expense_tracker.infrastructure.repositories import RoleRepository  # noqa: E402
from main import create_app  # noqa: E402


@pytest.fixture(autouse=True)
def reset_database():
    """Ensure every test starts from freshly seeded tables."""

    Base.metadata.drop_all(bind=engine)
    initialize_database()
    yield
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture()
def session():
    with SessionLocal() as db:
        yield db


@pytest.fixture()
def client():
    with TestClient(create_app()) as test_client:
        yield test_client


def make_user(
    db,
    username: str,
    *,
    password: str = "secret123",
    roles: tuple[str, ...] | None = None,
):
    """Create an account holding the named roles (the default role when omitted)."""

    role_ids = None
    if roles is not None:
        repository = RoleRepository(db)
        role_ids = [repository.get_by_name(name).id for name in roles]
    return create_user(
        db,
        username=username,
        email=f"{username}@example.com",
        password=password,
        name=username.title(),
        role_ids=role_ids,
    )


def login(client: TestClient, username: str, password: str = "secret123") -> dict[str, str]:
    """Log in and return an Authorization header for the issued token."""

    response = client.post("/api/login", json={"username": username, "password": password})
    assert response.status_code == 200, response.text
    return {"Authorization": f"Bearer {response.json()['access_token']}"}


@pytest.fixture()
def admin_headers(client, session):
    make_user(session, "admin", roles=("admin",))
    return login(client, "admin")
