import logging

import pytest

from servicedesk.application.use_cases.notifications import (
    encode_event,
    parse_deep_link,
    resolve_deep_link,
)
from servicedesk.domain.entities import DomainEvent, EntityKind, EventAction
from servicedesk.domain.errors import RoutingAmbiguity


@pytest.mark.parametrize(
    ("notification_type", "path"),
    [
        ("create_complaint:42", "/complaints/42"),
        ("evaluation:7", "/evaluations?techId=7"),
        ("complaint_list", "/complaints"),
        ("delete_request", "/requests"),
        ("create", "/complaints"),
        ("request_list", "/requests"),
        ("update_request:15", "/requests/15"),
        ("evaluation_list", "/evaluations"),
        ("create_technician:3", "/evaluations?techId=3"),
    ],
)
def test_resolves_known_routing_keys(notification_type, path):
    link = resolve_deep_link(notification_type)

    assert link is not None
    assert link.path == path


@pytest.mark.parametrize("notification_type", ["unknown_thing", "", None, "update"])
def test_unmatched_keys_have_no_navigation(notification_type):
    assert resolve_deep_link(notification_type) is None


def test_complaint_takes_precedence_over_request():
    link = resolve_deep_link("complaint_request:5")

    assert link.path == "/complaints/5"
    assert link.entity_kind is EntityKind.COMPLAINT
    assert link.entity_id == 5


def test_evaluation_takes_precedence_over_everything():
    assert resolve_deep_link("create_complaint_evaluation:8").path == "/evaluations?techId=8"


def test_non_numeric_id_is_ambiguous_and_logged(caplog):
    with pytest.raises(RoutingAmbiguity) as excinfo:
        parse_deep_link("update_complaint:abc")
    assert excinfo.value.routing_key == "update_complaint:abc"

    with caplog.at_level(logging.WARNING):
        assert resolve_deep_link("update_complaint:abc") is None
    assert "update_complaint:abc" in caplog.text


@pytest.mark.parametrize(
    ("kind", "entity_id", "path"),
    [
        (EntityKind.COMPLAINT, 42, "/complaints/42"),
        (EntityKind.EVALUATION, 7, "/evaluations?techId=7"),
        (EntityKind.SERVICE_REQUEST, 15, "/requests/15"),
        (EntityKind.TECHNICIAN_RECORD, 3, "/evaluations?techId=3"),
    ],
)
def test_encoded_entity_events_resolve_to_their_entity(kind, entity_id, path):
    encoded = encode_event(
        DomainEvent(action=EventAction.UPDATE, entity_kind=kind, entity_id=entity_id)
    )

    link = resolve_deep_link(encoded.type)

    assert link.path == path
    assert link.entity_kind is kind
    assert link.entity_id == entity_id


@pytest.mark.parametrize(
    ("kind", "path"),
    [
        (EntityKind.COMPLAINT, "/complaints"),
        (EntityKind.EVALUATION, "/evaluations"),
        (EntityKind.SERVICE_REQUEST, "/requests"),
        (EntityKind.TECHNICIAN_RECORD, "/evaluations"),
    ],
)
def test_deleted_entities_resolve_to_their_collection(kind, path):
    encoded = encode_event(
        DomainEvent(action=EventAction.DELETE, entity_kind=kind, entity_id=1)
    )

    assert resolve_deep_link(encoded.type).path == path
