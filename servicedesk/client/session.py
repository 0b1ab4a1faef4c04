"""Notification state owned by a single UI session."""

from __future__ import annotations

import logging
from collections.abc import Callable

from servicedesk.application.use_cases.notifications.deep_links import resolve_deep_link
from servicedesk.config import get_settings
from servicedesk.domain.entities import DeepLink

from .cache import NotificationCache, NotificationGateway

logger = logging.getLogger(__name__)


class NotificationSession:
    """Explicit per-session context wrapping a :class:`NotificationCache`.

    Built once when a user signs in and handed to whatever renders the
    notification bell; nothing here is process-global.
    """

    def __init__(
        self,
        user_id: int,
        gateway: NotificationGateway,
        *,
        on_change: Callable[[], None] | None = None,
        poll_interval: float | None = None,
    ) -> None:
        self.user_id = user_id
        self.cache = NotificationCache(gateway, on_change=on_change)
        self.poll_interval = (
            poll_interval
            if poll_interval is not None
            else get_settings().client_poll_interval_seconds
        )

    @property
    def unread_count(self) -> int:
        return self.cache.unread_count

    async def start(self) -> None:
        """Load the first page of notifications."""

        await self.cache.refresh()

    async def run_polling(self) -> None:
        """Keep the cache fresh until the surrounding task group is cancelled."""

        await self.cache.poll(self.poll_interval)

    async def open(self, notification_id: int) -> DeepLink | None:
        """Handle a click: mark the notification read and return where to navigate.

        Returns ``None`` when the routing key has no target; the click then
        only marks the notification read.
        """

        notification = self.cache.get(notification_id)
        if notification is None or not notification.read:
            await self.cache.mark_as_read(notification_id)
            notification = self.cache.get(notification_id) or notification
        if notification is None:
            logger.debug("Opened notification %s not present in cache", notification_id)
            return None
        return resolve_deep_link(notification.type)


__all__ = ["NotificationSession"]
