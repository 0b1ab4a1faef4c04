"""Endpoints exposing the current user's notifications."""

from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from servicedesk.application.use_cases.notifications import (
    icon_for,
    resolve_deep_link,
    summarize_notifications,
)
from servicedesk.config import get_settings
from servicedesk.domain.entities import Notification, User
from servicedesk.infrastructure.database import get_db
from servicedesk.infrastructure.repositories import NotificationRepository
from servicedesk.interfaces.api.dependencies import get_current_active_user
from servicedesk.interfaces.api.schemas import (
    MarkAllReadResponse,
    NotificationRead,
    NotificationSummaryRead,
)

router = APIRouter(prefix="/notifications", tags=["notifications"])


def _notification_to_schema(notification: Notification) -> NotificationRead:
    link = resolve_deep_link(notification.type)
    return NotificationRead(
        id=notification.id or 0,
        recipient_id=notification.recipient_id,
        title=notification.title,
        message=notification.message,
        type=notification.type,
        read=notification.read,
        created_at=notification.created_at,
        read_at=notification.read_at,
        link=link.path if link else None,
        icon=icon_for(notification.type),
    )


@router.get("/", response_model=list[NotificationRead])
def list_notifications(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
) -> list[NotificationRead]:
    """Return the most recent notifications for the authenticated user."""

    notifications = NotificationRepository(db).list_for_user(
        current_user.id, limit=get_settings().notification_list_limit
    )
    return [_notification_to_schema(notification) for notification in notifications]


@router.get("/summary", response_model=NotificationSummaryRead)
def read_notification_summary(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
) -> NotificationSummaryRead:
    """Return unread counters for the notification badge."""

    summary = summarize_notifications(db, user_id=current_user.id)
    return NotificationSummaryRead(
        unread_count=summary.unread_count, unread_by_kind=summary.unread_by_kind
    )


@router.get("/{notification_id}", response_model=NotificationRead)
def read_notification(
    notification_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
) -> NotificationRead:
    """Return one notification owned by the authenticated user."""

    notification = NotificationRepository(db).get_for_user(
        notification_id, user_id=current_user.id
    )
    return _notification_to_schema(notification)


@router.post("/read-all", response_model=MarkAllReadResponse)
def mark_all_notifications_read(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
) -> MarkAllReadResponse:
    """Flag every unread notification of the authenticated user as read."""

    updated = NotificationRepository(db).mark_all_read(current_user.id)
    return MarkAllReadResponse(updated=updated)


@router.post("/{notification_id}/read", response_model=NotificationRead)
def mark_notification_read(
    notification_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
) -> NotificationRead:
    """Flag one notification as read; repeated calls are harmless."""

    notification = NotificationRepository(db).mark_read(
        notification_id, user_id=current_user.id
    )
    return _notification_to_schema(notification)


__all__ = ["router"]
