"""Client-side notification state for UI sessions."""

from .cache import (
    CacheState,
    MutationState,
    NotificationCache,
    NotificationGateway,
    PendingMutation,
)
from .gateway import HttpNotificationGateway
from .session import NotificationSession

__all__ = [
    "CacheState",
    "MutationState",
    "NotificationCache",
    "NotificationGateway",
    "PendingMutation",
    "HttpNotificationGateway",
    "NotificationSession",
]
