"""Tests for the authentication token endpoint."""

from __future__ import annotations

import pytest

pytest.importorskip("fastapi")
from fastapi.testclient import TestClient

from servicedesk.application.use_cases.users import create_user
from servicedesk.infrastructure.security import decode_access_token


@pytest.fixture()
def client():
    from main import create_app

    with TestClient(create_app()) as test_client:
        yield test_client


def test_token_carries_email_and_role(client: TestClient, db_session) -> None:
    create_user(
        db_session,
        name="Sofia Supervisor",
        email="sofia@example.com",
        password="Secret123",
        role_alias="supervisor",
    )

    response = client.post(
        "/auth/token", data={"username": "sofia@example.com", "password": "Secret123"}
    )

    assert response.status_code == 200
    body = response.json()
    assert body["token_type"] == "bearer"
    assert body["role"] == "supervisor"
    payload = decode_access_token(body["access_token"])
    assert payload["sub"] == "sofia@example.com"


def test_wrong_password_is_rejected(client: TestClient, db_session) -> None:
    create_user(
        db_session,
        name="Sofia Supervisor",
        email="sofia@example.com",
        password="Secret123",
        role_alias="supervisor",
    )

    response = client.post(
        "/auth/token", data={"username": "sofia@example.com", "password": "wrong"}
    )

    assert response.status_code == 401


def test_inactive_users_cannot_sign_in(client: TestClient, db_session) -> None:
    create_user(
        db_session,
        name="Iris Inactive",
        email="iris@example.com",
        password="Secret123",
        role_alias="agent",
        is_active=False,
    )

    response = client.post(
        "/auth/token", data={"username": "iris@example.com", "password": "Secret123"}
    )

    assert response.status_code == 403
