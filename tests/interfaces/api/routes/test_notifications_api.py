"""Integration tests for the notification and event endpoints."""

from __future__ import annotations

import pytest

pytest.importorskip("fastapi")
from fastapi.testclient import TestClient

from servicedesk.application.use_cases.users import create_user
from servicedesk.domain.entities import ROLE_ADMIN, ROLE_TECHNICIAN

PASSWORD = "Secret123"


@pytest.fixture()
def client():
    from main import create_app

    with TestClient(create_app()) as test_client:
        yield test_client


@pytest.fixture()
def admin(db_session):
    return create_user(
        db_session,
        name="Ana Admin",
        email="admin@example.com",
        password=PASSWORD,
        role_alias=ROLE_ADMIN,
    )


@pytest.fixture()
def technician(db_session):
    return create_user(
        db_session,
        name="Tomas Tech",
        email="tech@example.com",
        password=PASSWORD,
        role_alias=ROLE_TECHNICIAN,
    )


def _auth_headers(client: TestClient, email: str) -> dict[str, str]:
    response = client.post("/auth/token", data={"username": email, "password": PASSWORD})
    assert response.status_code == 200
    return {"Authorization": f"Bearer {response.json()['access_token']}"}


def _raise_complaint(client: TestClient, headers, assignee_id: int, complaint_id: int = 42):
    return client.post(
        "/events/",
        json={
            "action": "create",
            "entity_kind": "complaint",
            "entity_id": complaint_id,
            "context": {"assignee_id": assignee_id, "label": "Broken AC"},
        },
        headers=headers,
    )


def test_event_to_read_flow(client: TestClient, admin, technician) -> None:
    admin_headers = _auth_headers(client, admin.email)
    tech_headers = _auth_headers(client, technician.email)

    event_response = _raise_complaint(client, admin_headers, technician.id)
    assert event_response.status_code == 202
    fan_out = event_response.json()
    assert fan_out["type"] == "create_complaint:42"
    assert fan_out["recipient_ids"] == [technician.id]
    assert fan_out["failed"] == []

    assert client.get("/notifications/", headers=admin_headers).json() == []

    list_response = client.get("/notifications/", headers=tech_headers)
    assert list_response.status_code == 200
    (notification,) = list_response.json()
    assert notification["recipient_id"] == technician.id
    assert notification["message"] == "Ana Admin added complaint #42: Broken AC."
    assert notification["link"] == "/complaints/42"
    assert notification["icon"] == "create"
    assert notification["read"] is False

    summary = client.get("/notifications/summary", headers=tech_headers).json()
    assert summary == {"unread_count": 1, "unread_by_kind": {"complaint": 1}}

    read_path = f"/notifications/{notification['id']}/read"
    first = client.post(read_path, headers=tech_headers)
    second = client.post(read_path, headers=tech_headers)
    assert first.status_code == second.status_code == 200
    assert first.json()["read"] is True
    assert second.json()["read_at"] == first.json()["read_at"]

    summary = client.get("/notifications/summary", headers=tech_headers).json()
    assert summary == {"unread_count": 0, "unread_by_kind": {}}


def test_mark_read_is_scoped_to_the_owner(client: TestClient, admin, technician) -> None:
    admin_headers = _auth_headers(client, admin.email)
    tech_headers = _auth_headers(client, technician.email)
    _raise_complaint(client, admin_headers, technician.id)
    (notification,) = client.get("/notifications/", headers=tech_headers).json()

    foreign = client.post(f"/notifications/{notification['id']}/read", headers=admin_headers)
    missing = client.post("/notifications/999/read", headers=tech_headers)

    assert foreign.status_code == 404
    assert missing.status_code == 404
    assert "not found" in missing.json()["detail"]


def test_read_all_marks_every_unread_notification(client: TestClient, admin, technician) -> None:
    admin_headers = _auth_headers(client, admin.email)
    tech_headers = _auth_headers(client, technician.email)
    for complaint_id in (1, 2, 3):
        _raise_complaint(client, admin_headers, technician.id, complaint_id)

    response = client.post("/notifications/read-all", headers=tech_headers)

    assert response.status_code == 200
    assert response.json() == {"updated": 3}
    listed = client.get("/notifications/", headers=tech_headers).json()
    assert [item["link"] for item in listed] == [
        "/complaints/3",
        "/complaints/2",
        "/complaints/1",
    ]
    assert all(item["read"] for item in listed)
    assert client.post("/notifications/read-all", headers=tech_headers).json() == {
        "updated": 0
    }


def test_only_admins_can_raise_events(client: TestClient, admin, technician) -> None:
    tech_headers = _auth_headers(client, technician.email)

    response = _raise_complaint(client, tech_headers, admin.id)

    assert response.status_code == 403


def test_invalid_events_are_rejected(client: TestClient, admin) -> None:
    admin_headers = _auth_headers(client, admin.email)

    unknown_kind = client.post(
        "/events/",
        json={"action": "create", "entity_kind": "invoice", "entity_id": 1},
        headers=admin_headers,
    )
    bad_label = client.post(
        "/events/",
        json={
            "action": "create",
            "entity_kind": "complaint",
            "entity_id": 1,
            "context": {"label": 5},
        },
        headers=admin_headers,
    )

    assert unknown_kind.status_code == 422
    assert bad_label.status_code == 422


def test_notifications_require_authentication(client: TestClient) -> None:
    assert client.get("/notifications/").status_code == 401
    assert client.post("/notifications/read-all").status_code == 401


def test_notification_detail_is_scoped_to_the_owner(
    client: TestClient, admin, technician
) -> None:
    admin_headers = _auth_headers(client, admin.email)
    tech_headers = _auth_headers(client, technician.email)
    _raise_complaint(client, admin_headers, technician.id, complaint_id=8)
    (listed,) = client.get("/notifications/", headers=tech_headers).json()

    detail = client.get(f"/notifications/{listed['id']}", headers=tech_headers)
    foreign = client.get(f"/notifications/{listed['id']}", headers=admin_headers)

    assert detail.status_code == 200
    assert detail.json()["link"] == "/complaints/8"
    assert detail.json()["read"] is False
    assert foreign.status_code == 404
