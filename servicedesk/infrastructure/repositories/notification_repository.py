"""Persistence helpers for notification entities."""

from __future__ import annotations

import logging
from collections import Counter
from collections.abc import Iterator, Sequence
from contextlib import contextmanager

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from servicedesk.domain.entities import Notification
from servicedesk.domain.errors import NotFoundError, TransportError, ValidationError
from servicedesk.infrastructure.models import NotificationModel
from servicedesk.utils import (
    ensure_app_naive_datetime,
    ensure_app_timezone,
    now_in_app_timezone,
)

logger = logging.getLogger(__name__)

DEFAULT_LIST_LIMIT = 50


class NotificationRepository:
    """Store adapter for :class:`Notification` rows.

    Rows are append-only; the only mutation is the unread to read transition.
    ``list_for_user`` returns at most ``limit`` rows (50 by default), newest
    first with ties broken by descending id.
    """

    def __init__(self, session: Session) -> None:
        self.session = session

    def create(self, notification: Notification) -> Notification:
        if notification.recipient_id is None:
            raise ValidationError("Notification recipient is required")
        if not notification.type or not notification.type.strip():
            raise ValidationError("Notification type is required")

        model = NotificationModel()
        self._apply_entity_to_model(model, notification)
        with self._store_errors("create"):
            self.session.add(model)
            self.session.commit()
            self.session.refresh(model)
        return self._to_entity(model)

    def list_for_user(
        self,
        user_id: int,
        *,
        limit: int | None = DEFAULT_LIST_LIMIT,
    ) -> Sequence[Notification]:
        with self._store_errors("list"):
            query = self._query_for_user(user_id).order_by(
                NotificationModel.created_at.desc(), NotificationModel.id.desc()
            )
            if limit is not None:
                query = query.limit(limit)
            return [self._to_entity(model) for model in query.all()]

    def get_for_user(self, notification_id: int, *, user_id: int) -> Notification:
        with self._store_errors("get"):
            model = self._get_owned_model(notification_id, user_id)
        return self._to_entity(model)

    def mark_read(self, notification_id: int, *, user_id: int) -> Notification:
        with self._store_errors("mark_read"):
            model = self._get_owned_model(notification_id, user_id)
            if not model.read:
                model.read = True
                model.read_at = ensure_app_naive_datetime(now_in_app_timezone())
                self.session.add(model)
                self.session.commit()
                self.session.refresh(model)
        return self._to_entity(model)

    def mark_all_read(self, user_id: int) -> int:
        """Flag every unread notification of ``user_id`` as read in one statement."""

        with self._store_errors("mark_all_read"):
            updated = (
                self.session.query(NotificationModel)
                .filter(
                    NotificationModel.user_id == user_id,
                    NotificationModel.read.is_(False),
                )
                .update(
                    {
                        NotificationModel.read: True,
                        NotificationModel.read_at: ensure_app_naive_datetime(
                            now_in_app_timezone()
                        ),
                    },
                    synchronize_session=False,
                )
            )
            self.session.commit()
        return updated

    def count_unread(self, user_id: int) -> int:
        with self._store_errors("count_unread"):
            return (
                self._query_for_user(user_id)
                .filter(NotificationModel.read.is_(False))
                .count()
            )

    def list_unread_types(self, user_id: int) -> Counter[str]:
        """Return how many unread notifications exist per routing key."""

        with self._store_errors("list_unread_types"):
            rows = (
                self.session.query(NotificationModel.type)
                .filter(
                    NotificationModel.user_id == user_id,
                    NotificationModel.read.is_(False),
                )
                .all()
            )
        return Counter(notification_type for (notification_type,) in rows)

    def _query_for_user(self, user_id: int):
        return self.session.query(NotificationModel).filter(
            NotificationModel.user_id == user_id
        )

    def _get_owned_model(self, notification_id: int, user_id: int) -> NotificationModel:
        model = self.session.get(NotificationModel, notification_id)
        if model is None or model.user_id != user_id:
            msg = f"Notification with id {notification_id} not found"
            raise NotFoundError(msg)
        return model

    @contextmanager
    def _store_errors(self, operation: str) -> Iterator[None]:
        try:
            yield
        except SQLAlchemyError as exc:
            self.session.rollback()
            logger.error("Notification store %s failed: %s", operation, exc)
            raise TransportError(f"Notification store unavailable during {operation}") from exc

    @staticmethod
    def _apply_entity_to_model(
        model: NotificationModel,
        notification: Notification,
    ) -> None:
        model.created_at = (
            ensure_app_naive_datetime(notification.created_at)
            or ensure_app_naive_datetime(now_in_app_timezone())
        )
        model.user_id = notification.recipient_id
        model.type = notification.type
        model.title = notification.title
        model.message = notification.message
        model.read = False
        model.read_at = None

    @staticmethod
    def _to_entity(model: NotificationModel) -> Notification:
        return Notification(
            id=model.id,
            recipient_id=model.user_id,
            title=model.title,
            message=model.message,
            type=model.type,
            read=bool(model.read),
            created_at=ensure_app_timezone(model.created_at),
            read_at=ensure_app_timezone(model.read_at),
        )


__all__ = ["NotificationRepository", "DEFAULT_LIST_LIMIT"]
