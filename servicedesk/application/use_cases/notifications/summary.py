"""Unread counters backing the notification badge and dashboard widgets."""

from __future__ import annotations

from dataclasses import dataclass, field

from sqlalchemy.orm import Session

from servicedesk.infrastructure.repositories import NotificationRepository

from .deep_links import resolve_deep_link

OTHER_KIND = "other"


@dataclass
class NotificationSummary:
    unread_count: int
    unread_by_kind: dict[str, int] = field(default_factory=dict)


def summarize_notifications(session: Session, *, user_id: int) -> NotificationSummary:
    """Count unread notifications of ``user_id`` grouped by the linked entity kind."""

    by_type = NotificationRepository(session).list_unread_types(user_id)
    by_kind: dict[str, int] = {}
    for notification_type, count in by_type.items():
        link = resolve_deep_link(notification_type)
        kind = link.entity_kind.value if link else OTHER_KIND
        by_kind[kind] = by_kind.get(kind, 0) + count
    return NotificationSummary(
        unread_count=sum(by_type.values()),
        unread_by_kind=dict(sorted(by_kind.items())),
    )


__all__ = ["NotificationSummary", "summarize_notifications", "OTHER_KIND"]
