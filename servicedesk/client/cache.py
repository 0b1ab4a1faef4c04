"""Per-session notification cache with optimistic read-state updates."""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable, Iterable, Sequence
from dataclasses import dataclass, field
from enum import Enum
from typing import Protocol

import anyio

from servicedesk.domain.entities import Notification, notification_sort_key
from servicedesk.domain.errors import NotificationError

logger = logging.getLogger(__name__)


class NotificationGateway(Protocol):
    """Remote operations the cache depends on."""

    async def list_notifications(self) -> Sequence[Notification]: ...

    async def mark_read(self, notification_id: int) -> None: ...

    async def mark_all_read(self) -> None: ...


class CacheState(str, Enum):
    IDLE = "idle"
    FETCHING = "fetching"
    READY = "ready"


class MutationState(str, Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    ROLLED_BACK = "rolled_back"


@dataclass
class PendingMutation:
    """A local read-state change waiting for the server's answer.

    ``notification_ids`` lists only the notifications this mutation flipped,
    so a rollback never touches rows another mutation already changed.
    """

    notification_ids: tuple[int, ...]
    state: MutationState = MutationState.PENDING
    error: NotificationError | None = field(default=None, repr=False)

    def confirm(self) -> None:
        self._transition(MutationState.CONFIRMED)

    def roll_back(self, error: NotificationError) -> None:
        self._transition(MutationState.ROLLED_BACK)
        self.error = error

    def _transition(self, state: MutationState) -> None:
        if self.state is not MutationState.PENDING:
            msg = f"Mutation already {self.state.value}"
            raise RuntimeError(msg)
        self.state = state


class NotificationCache:
    """Reconcile server notifications with optimistic local read flags.

    Refreshes and mutations share one lock, so a refresh requested while a
    mutation awaits confirmation runs only after that mutation settles. The
    ``on_change`` callback fires whenever the visible list or counter changes.
    """

    def __init__(
        self,
        gateway: NotificationGateway,
        *,
        on_change: Callable[[], None] | None = None,
        refresh_after_mutation: bool = True,
    ) -> None:
        self._gateway = gateway
        self._on_change = on_change
        self._refresh_after_mutation = refresh_after_mutation
        self._lock = anyio.Lock()
        self._state = CacheState.IDLE
        self._notifications: tuple[Notification, ...] = ()

    @property
    def state(self) -> CacheState:
        return self._state

    @property
    def notifications(self) -> tuple[Notification, ...]:
        return self._notifications

    @property
    def unread_count(self) -> int:
        return sum(1 for notification in self._notifications if not notification.read)

    def get(self, notification_id: int) -> Notification | None:
        for notification in self._notifications:
            if notification.id == notification_id:
                return notification
        return None

    async def refresh(self) -> None:
        """Fetch the server list and replace the cached one."""

        async with self._lock:
            await self._fetch()

    async def mark_as_read(self, notification_id: int) -> PendingMutation:
        """Flag ``notification_id`` read locally, then confirm it remotely."""

        async with self._lock:
            mutation = self._apply_local_read([notification_id])
            if not mutation.notification_ids and self.get(notification_id) is not None:
                mutation.confirm()
                return mutation
            await self._confirm(mutation, self._gateway.mark_read(notification_id))
            if self._refresh_after_mutation:
                await self._fetch_quietly()
        return mutation

    async def mark_all_as_read(self) -> PendingMutation:
        """Flag every cached unread notification read, then confirm remotely."""

        async with self._lock:
            unread_ids = [
                notification.id
                for notification in self._notifications
                if not notification.read and notification.id is not None
            ]
            mutation = self._apply_local_read(unread_ids)
            await self._confirm(mutation, self._gateway.mark_all_read())
            if self._refresh_after_mutation:
                await self._fetch_quietly()
        return mutation

    async def poll(self, interval: float) -> None:
        """Refresh every ``interval`` seconds until cancelled."""

        while True:
            try:
                await self.refresh()
            except NotificationError as exc:
                logger.warning("Notification refresh failed: %s", exc)
            await anyio.sleep(interval)

    async def _fetch(self) -> None:
        previous_state = self._state
        self._state = CacheState.FETCHING
        try:
            fetched = await self._gateway.list_notifications()
        except NotificationError:
            self._state = previous_state
            raise
        self._notifications = _ordered(fetched)
        self._state = CacheState.READY
        self._changed()

    async def _fetch_quietly(self) -> None:
        try:
            await self._fetch()
        except NotificationError as exc:
            logger.warning("Refresh after confirmed mutation failed: %s", exc)

    async def _confirm(
        self, mutation: PendingMutation, remote_call: Awaitable[None]
    ) -> None:
        try:
            await remote_call
        except NotificationError as exc:
            self._revert(mutation)
            mutation.roll_back(exc)
            logger.info(
                "Rolled back read state for %s: %s", list(mutation.notification_ids), exc
            )
            raise
        mutation.confirm()

    def _apply_local_read(self, notification_ids: Iterable[int]) -> PendingMutation:
        targets = set(notification_ids)
        flipped: list[int] = []
        updated: list[Notification] = []
        for notification in self._notifications:
            if notification.id in targets and not notification.read:
                flipped.append(notification.id)
                notification = notification.as_read()
            updated.append(notification)
        if flipped:
            self._notifications = tuple(updated)
            self._changed()
        return PendingMutation(notification_ids=tuple(flipped))

    def _revert(self, mutation: PendingMutation) -> None:
        if not mutation.notification_ids:
            return
        targets = set(mutation.notification_ids)
        self._notifications = tuple(
            notification.as_unread() if notification.id in targets else notification
            for notification in self._notifications
        )
        self._changed()

    def _changed(self) -> None:
        if self._on_change is not None:
            self._on_change()


def _ordered(notifications: Iterable[Notification]) -> tuple[Notification, ...]:
    return tuple(sorted(notifications, key=notification_sort_key, reverse=True))


__all__ = [
    "NotificationGateway",
    "CacheState",
    "MutationState",
    "PendingMutation",
    "NotificationCache",
]
