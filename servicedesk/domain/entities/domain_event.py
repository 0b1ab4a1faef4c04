"""Domain events that produce notifications."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class EventAction(str, Enum):
    """Lifecycle change reported by a domain-action handler."""

    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"
    STATUS_CHANGE = "status"


class EntityKind(str, Enum):
    """Entity families that raise notifications, keyed by their wire name."""

    COMPLAINT = "complaint"
    EVALUATION = "evaluation"
    SERVICE_REQUEST = "request"
    TECHNICIAN_RECORD = "technician"


@dataclass(frozen=True)
class DomainEvent:
    """A change to a complaint, evaluation, technician or service request.

    ``entity_id`` is an integer (or its decimal string) and ``None`` for
    collection-level changes such as bulk status updates. For evaluations it holds the evaluated technician's id.
    ``context`` carries routing hints (``assignee_id``, ``supervisor_id``) and
    the human ``label`` used in messages.
    """

    action: EventAction
    entity_kind: EntityKind
    entity_id: int | str | None = None
    actor_id: int | None = None
    actor_name: str | None = None
    context: dict[str, Any] = field(default_factory=dict)

    @property
    def event_kind(self) -> str:
        """Policy key combining action and entity, e.g. ``delete_complaint``."""

        return f"{self.action.value}_{self.entity_kind.value}"


__all__ = ["EventAction", "EntityKind", "DomainEvent"]
