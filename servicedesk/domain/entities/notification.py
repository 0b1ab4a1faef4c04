"""Domain entity representing a user notification."""

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import datetime, timezone


@dataclass(frozen=True)
class Notification:
    """Information message delivered to a single recipient.

    ``type`` is the routing key; it selects the display icon and the deep-link
    target. Every field is immutable except the read state, which only moves
    from unread to read through :meth:`as_read`.
    """

    id: int | None
    recipient_id: int | None
    title: str
    message: str
    type: str
    read: bool = False
    created_at: datetime | None = None
    read_at: datetime | None = None

    def as_read(self, read_at: datetime | None = None) -> "Notification":
        """Return a copy flagged as read; already read notifications are returned as is."""

        if self.read:
            return self
        return replace(self, read=True, read_at=read_at)

    def as_unread(self) -> "Notification":
        """Return a copy with the read flag cleared.

        Only used by clients to roll back an optimistic update that the server
        never confirmed.
        """

        if not self.read:
            return self
        return replace(self, read=False, read_at=None)


def notification_sort_key(notification: Notification) -> tuple[datetime, int]:
    """Key ordering notifications newest first once ``reverse=True`` is applied."""

    created_at = notification.created_at or datetime.min
    if created_at.tzinfo is not None:
        created_at = created_at.astimezone(timezone.utc).replace(tzinfo=None)
    return (created_at, notification.id or 0)


__all__ = ["Notification", "notification_sort_key"]
