"""Turn domain events into notification payloads with a stable routing key."""

from __future__ import annotations

import re
from dataclasses import dataclass

from servicedesk.domain.entities import (
    ROUTING_KEY_SEPARATOR,
    DomainEvent,
    EntityKind,
    EventAction,
    RoutingKey,
)
from servicedesk.domain.errors import ValidationError

_ENTITY_ID_PATTERN = re.compile(r"-?[0-9]+")

ICON_CREATE = "create"
ICON_UPDATE = "update"
ICON_DELETE = "delete"
ICON_INFO = "info"

_ENTITY_LABELS: dict[EntityKind, str] = {
    EntityKind.COMPLAINT: "complaint",
    EntityKind.EVALUATION: "evaluation",
    EntityKind.SERVICE_REQUEST: "service request",
    EntityKind.TECHNICIAN_RECORD: "technician record",
}

_TITLES: dict[EventAction, str] = {
    EventAction.CREATE: "New {entity}",
    EventAction.UPDATE: "{Entity} updated",
    EventAction.DELETE: "{Entity} deleted",
    EventAction.STATUS_CHANGE: "{Entity} status changed",
}

_VERBS: dict[EventAction, str] = {
    EventAction.CREATE: "added",
    EventAction.UPDATE: "updated",
    EventAction.DELETE: "deleted",
    EventAction.STATUS_CHANGE: "changed the status of",
}


@dataclass(frozen=True)
class EncodedEvent:
    """Recipient-agnostic notification content."""

    title: str
    message: str
    type: str


def build_routing_key(event: DomainEvent) -> RoutingKey:
    """Return the structured routing key for ``event``."""

    return RoutingKey(
        kind=event.entity_kind,
        action=event.action,
        entity_id=_normalize_entity_id(event.entity_id),
    )


def encode_event(event: DomainEvent) -> EncodedEvent:
    """Build the title, message and routing key for ``event``.

    The mapping is deterministic: equal events always produce the same
    ``type`` string, so retries stay idempotent and the deep-link resolver can
    parse the key back.
    """

    routing_key = build_routing_key(event)
    entity = _ENTITY_LABELS[event.entity_kind]
    title = _TITLES[event.action].format(entity=entity, Entity=entity.capitalize())
    return EncodedEvent(
        title=title,
        message=_build_message(event, entity, routing_key),
        type=routing_key.encode(),
    )


def icon_for(notification_type: str | None) -> str:
    """Return the display icon for a routing key.

    Understands legacy bare types (``create``, ``update``, ``delete``) as well
    as ``{action}_{entity}:{id}`` keys; anything else is ``info``.
    """

    if not notification_type:
        return ICON_INFO
    action = notification_type.split(ROUTING_KEY_SEPARATOR, 1)[0].split("_", 1)[0]
    if action == EventAction.CREATE.value:
        return ICON_CREATE
    if action in (EventAction.UPDATE.value, EventAction.STATUS_CHANGE.value):
        return ICON_UPDATE
    if action == EventAction.DELETE.value:
        return ICON_DELETE
    return ICON_INFO


def _normalize_entity_id(entity_id: int | str | None) -> str | None:
    if entity_id is None:
        return None
    if isinstance(entity_id, bool) or not isinstance(entity_id, (int, str)):
        msg = f"Entity id must be an integer, got {type(entity_id).__name__}"
        raise ValidationError(msg)
    value = str(entity_id).strip()
    if not value:
        raise ValidationError("Entity id must not be empty")
    # Deep links parse the last key segment back with int().
    if not _ENTITY_ID_PATTERN.fullmatch(value):
        raise ValidationError(f"Entity id '{value}' is not an integer")
    return value


def _build_message(event: DomainEvent, entity: str, routing_key: RoutingKey) -> str:
    actor = event.actor_name or "A user"
    verb = _VERBS[event.action]
    label = event.context.get("label")

    if routing_key.entity_id is None:
        subject = f"several {entity} records"
    elif event.entity_kind is EntityKind.EVALUATION:
        subject = f"an evaluation for technician #{routing_key.entity_id}"
    else:
        subject = f"{entity} #{routing_key.entity_id}"

    message = f"{actor} {verb} {subject}"
    if label:
        message = f"{message}: {label}"
    status = event.context.get("status")
    if event.action is EventAction.STATUS_CHANGE and status:
        message = f"{message} (now '{status}')"
    return f"{message}."


__all__ = [
    "EncodedEvent",
    "build_routing_key",
    "encode_event",
    "icon_for",
    "ICON_CREATE",
    "ICON_UPDATE",
    "ICON_DELETE",
    "ICON_INFO",
]
