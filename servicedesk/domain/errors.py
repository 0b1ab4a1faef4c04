"""Error taxonomy shared by the notification core."""

from __future__ import annotations


class NotificationError(Exception):
    """Base class for every recoverable notification failure."""


class ValidationError(NotificationError):
    """Raised when a notification or event payload is malformed."""


class NotFoundError(NotificationError):
    """Raised when a notification does not exist or belongs to another user."""


class TransportError(NotificationError):
    """Raised when the notification store cannot be reached."""


class RoutingAmbiguity(NotificationError):
    """Raised when a routing key cannot be mapped to a navigation target."""

    def __init__(self, routing_key: str, reason: str) -> None:
        super().__init__(f"Cannot resolve routing key '{routing_key}': {reason}")
        self.routing_key = routing_key
        self.reason = reason


__all__ = [
    "NotificationError",
    "ValidationError",
    "NotFoundError",
    "TransportError",
    "RoutingAmbiguity",
]
