"""Shared fixtures: a throwaway SQLite database and user factories."""

from __future__ import annotations

import os
import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

TEST_DB_PATH = Path(__file__).parent / "test.db"
os.environ["DATABASE_URL"] = f"sqlite:///{TEST_DB_PATH}"
os.environ.setdefault("SECRET_KEY", "test-secret")

from servicedesk.config import reset_settings_cache  # noqa: E402

reset_settings_cache()

from servicedesk.domain.entities import User  # noqa: E402
from servicedesk.infrastructure import database  # noqa: E402
from servicedesk.infrastructure import models  # noqa: E402,F401
from servicedesk.infrastructure.repositories import (  # noqa: E402
    RoleRepository,
    UserRepository,
)


@pytest.fixture(autouse=True)
def clean_database():
    """Recreate every table before each test."""

    database.Base.metadata.drop_all(bind=database.engine, checkfirst=True)
    database.Base.metadata.create_all(bind=database.engine)
    yield
    database.engine.dispose()


@pytest.fixture()
def db_session():
    session = database.SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture()
def make_user(db_session):
    """Insert a user directly, skipping password hashing."""

    counter = {"value": 0}

    def _make_user(
        role_alias: str = "agent",
        *,
        name: str | None = None,
        is_active: bool = True,
        deleted: bool = False,
    ) -> User:
        counter["value"] += 1
        role = RoleRepository(db_session).get_or_create(
            name=role_alias.capitalize(), alias=role_alias
        )
        return UserRepository(db_session).create(
            User(
                id=None,
                role=role,
                name=name or f"{role_alias} {counter['value']}",
                email=f"{role_alias}{counter['value']}@example.com",
                password="not-a-hash",
                is_active=is_active,
                deleted=deleted,
            )
        )

    return _make_user


@pytest.fixture()
def anyio_backend():
    return "asyncio"


def pytest_sessionfinish(session, exitstatus):
    database.engine.dispose()
    if TEST_DB_PATH.exists():
        TEST_DB_PATH.unlink()
