"""Domain entities exposed by the application."""

from .domain_event import DomainEvent, EntityKind, EventAction
from .notification import Notification, notification_sort_key
from .role import ROLE_ADMIN, ROLE_AGENT, ROLE_SUPERVISOR, ROLE_TECHNICIAN, Role
from .routing_key import (
    COLLECTION_SUFFIX,
    ROUTING_KEY_SEPARATOR,
    DeepLink,
    RoutingKey,
)
from .user import User

__all__ = [
    "DomainEvent",
    "EntityKind",
    "EventAction",
    "Notification",
    "notification_sort_key",
    "Role",
    "ROLE_ADMIN",
    "ROLE_AGENT",
    "ROLE_SUPERVISOR",
    "ROLE_TECHNICIAN",
    "COLLECTION_SUFFIX",
    "ROUTING_KEY_SEPARATOR",
    "DeepLink",
    "RoutingKey",
    "User",
]
