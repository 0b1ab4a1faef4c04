"""Structured routing keys and navigation targets."""

from __future__ import annotations

from dataclasses import dataclass

from .domain_event import EntityKind, EventAction

ROUTING_KEY_SEPARATOR = ":"
COLLECTION_SUFFIX = "_list"


@dataclass(frozen=True)
class RoutingKey:
    """Tagged form of a notification ``type``.

    Stored rows keep the legacy string produced by :meth:`encode`, which is
    ``{action}_{entity}:{id}`` for a single entity and ``{entity}_list`` for a
    collection.
    """

    kind: EntityKind
    action: EventAction
    entity_id: str | None = None

    @property
    def is_collection(self) -> bool:
        return self.entity_id is None or self.action is EventAction.DELETE

    def encode(self) -> str:
        if self.is_collection:
            return f"{self.kind.value}{COLLECTION_SUFFIX}"
        return f"{self.action.value}_{self.kind.value}{ROUTING_KEY_SEPARATOR}{self.entity_id}"


@dataclass(frozen=True)
class DeepLink:
    """Navigation target derived from a routing key."""

    path: str
    entity_kind: EntityKind
    entity_id: int | None = None


__all__ = [
    "ROUTING_KEY_SEPARATOR",
    "COLLECTION_SUFFIX",
    "RoutingKey",
    "DeepLink",
]
