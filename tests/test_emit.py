import pytest

from servicedesk.application.use_cases.notifications import (
    emit,
    summarize_notifications,
    users_with_role,
)
from servicedesk.domain.entities import ROLE_ADMIN, EntityKind, EventAction, Notification
from servicedesk.domain.errors import ValidationError
from servicedesk.infrastructure.repositories import NotificationRepository


def test_emit_persists_one_unread_row_per_recipient(db_session, make_user):
    admin = make_user(ROLE_ADMIN)
    technician = make_user("technician")
    make_user(ROLE_ADMIN, is_active=False)
    make_user(ROLE_ADMIN, deleted=True)

    result = emit(
        db_session,
        "create",
        "complaint",
        42,
        actor_name="Ana",
        context={"assignee_id": technician.id, "label": "Broken AC"},
    )

    assert result.ok
    assert result.recipient_ids == [admin.id, technician.id]
    repository = NotificationRepository(db_session)
    for user in (admin, technician):
        (notification,) = repository.list_for_user(user.id)
        assert notification.type == "create_complaint:42"
        assert notification.message == "Ana added complaint #42: Broken AC."
        assert notification.read is False


def test_emit_excludes_the_actor(db_session, make_user):
    admin = make_user(ROLE_ADMIN)
    other_admin = make_user(ROLE_ADMIN)

    result = emit(
        db_session,
        EventAction.DELETE,
        EntityKind.SERVICE_REQUEST,
        3,
        actor_id=admin.id,
        actor_name=admin.name,
    )

    assert result.recipient_ids == [other_admin.id]
    assert result.encoded.type == "request_list"
    assert NotificationRepository(db_session).list_for_user(admin.id) == []


def test_emit_without_recipients_is_a_no_op(db_session, make_user):
    make_user("technician")

    result = emit(db_session, "update", "evaluation", 5)

    assert result.ok
    assert result.delivered == []


def test_emit_rejects_unknown_actions_and_entities(db_session):
    with pytest.raises(ValidationError):
        emit(db_session, "archive", "complaint", 1)
    with pytest.raises(ValidationError):
        emit(db_session, "create", "invoice", 1)


def test_summary_groups_unread_by_linked_entity(db_session, make_user):
    admin = make_user(ROLE_ADMIN)
    emit(db_session, "create", "complaint", 1)
    emit(db_session, "status", "complaint", 1, context={"status": "closed"})
    emit(db_session, "create", "evaluation", 4)
    emit(db_session, "delete", "request", 9)
    repository = NotificationRepository(db_session)
    repository.create(
        Notification(
            id=None,
            recipient_id=admin.id,
            title="Maintenance",
            message="Scheduled downtime.",
            type="maintenance",
        )
    )

    summary = summarize_notifications(db_session, user_id=admin.id)

    assert summary.unread_count == 5
    assert summary.unread_by_kind == {
        "complaint": 2,
        "evaluation": 1,
        "other": 1,
        "request": 1,
    }


def test_emit_rejects_ids_that_cannot_be_linked(db_session, make_user):
    admin = make_user(ROLE_ADMIN)

    for entity_id in ("abc", "1.5", 2.0):
        with pytest.raises(ValidationError):
            emit(db_session, "update", "complaint", entity_id)

    assert summarize_notifications(db_session, user_id=admin.id).unread_count == 0


def test_role_alias_is_matched_literally(db_session, make_user):
    field_tech = make_user("field_tech")
    make_user("fieldxtech")

    result = emit(
        db_session,
        "create",
        "complaint",
        1,
        policy={"complaint": users_with_role("field_tech")},
    )

    assert result.recipient_ids == [field_tech.id]
