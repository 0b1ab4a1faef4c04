"""Fan domain events out to the users that should be notified."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass, field
from typing import Protocol

from servicedesk.domain.entities import DomainEvent, Notification
from servicedesk.domain.errors import TransportError, ValidationError
from servicedesk.utils import now_in_app_timezone

from .encoder import EncodedEvent, encode_event

logger = logging.getLogger(__name__)

WILDCARD_POLICY_KEY = "*"


class RecipientDirectory(Protocol):
    """User lookups needed to resolve recipients."""

    def list_ids_by_role_alias(self, alias: str) -> list[int]: ...

    def list_active_ids(self) -> list[int]: ...

    def filter_active_ids(self, user_ids: Iterable[int]) -> set[int]: ...


class NotificationStore(Protocol):
    """Persistence contract used by the router to create notification rows."""

    def create(self, notification: Notification) -> Notification: ...


RecipientSelector = Callable[[DomainEvent, RecipientDirectory], Iterable[int]]


def users_with_role(alias: str) -> RecipientSelector:
    """Select every active user holding the role ``alias``."""

    def select(event: DomainEvent, directory: RecipientDirectory) -> Iterable[int]:
        return directory.list_ids_by_role_alias(alias)

    return select


def context_user(key: str) -> RecipientSelector:
    """Select the user whose id is stored under ``key`` in the event context."""

    def select(event: DomainEvent, directory: RecipientDirectory) -> Iterable[int]:
        value = event.context.get(key)
        if value is None or isinstance(value, bool):
            return []
        try:
            return [int(value)]
        except (TypeError, ValueError):
            logger.warning(
                "Ignoring non numeric %s=%r for event %s", key, value, event.event_kind
            )
            return []

    return select


def all_active_users() -> RecipientSelector:
    """Select every active user."""

    def select(event: DomainEvent, directory: RecipientDirectory) -> Iterable[int]:
        return directory.list_active_ids()

    return select


def combine(*selectors: RecipientSelector) -> RecipientSelector:
    """Concatenate the output of ``selectors`` in order."""

    def select(event: DomainEvent, directory: RecipientDirectory) -> Iterable[int]:
        for selector in selectors:
            yield from selector(event, directory)

    return select


@dataclass(frozen=True)
class FailedDelivery:
    recipient_id: int
    error: Exception


@dataclass
class FanOutResult:
    """Outcome of delivering one event; failures are reported, never retried."""

    encoded: EncodedEvent
    delivered: list[Notification] = field(default_factory=list)
    failed: list[FailedDelivery] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failed

    @property
    def recipient_ids(self) -> list[int]:
        return [notification.recipient_id for notification in self.delivered]


class DeliveryRouter:
    """Resolve recipients through a policy mapping and create one row per recipient.

    ``policy`` maps an event kind to a :data:`RecipientSelector`. Lookup tries
    ``{action}_{entity}`` first, then ``{entity}``, then ``"*"``; an event with
    no matching entry has no recipients.
    """

    def __init__(
        self,
        policy: Mapping[str, RecipientSelector],
        directory: RecipientDirectory,
        *,
        exclude_actor: bool = True,
    ) -> None:
        self._policy = dict(policy)
        self._directory = directory
        self._exclude_actor = exclude_actor

    def selector_for(self, event: DomainEvent) -> RecipientSelector | None:
        for key in (event.event_kind, event.entity_kind.value, WILDCARD_POLICY_KEY):
            selector = self._policy.get(key)
            if selector is not None:
                return selector
        return None

    def resolve_recipients(self, event: DomainEvent) -> list[int]:
        selector = self.selector_for(event)
        if selector is None:
            return []

        candidates: list[int] = []
        for recipient_id in selector(event, self._directory):
            if not recipient_id or recipient_id in candidates:
                continue
            if self._exclude_actor and recipient_id == event.actor_id:
                continue
            candidates.append(recipient_id)
        if not candidates:
            return []

        active = self._directory.filter_active_ids(candidates)
        return [recipient_id for recipient_id in candidates if recipient_id in active]

    def build_notifications(
        self, event: DomainEvent, encoded: EncodedEvent | None = None
    ) -> list[Notification]:
        encoded = encoded or encode_event(event)
        created_at = now_in_app_timezone()
        return [
            Notification(
                id=None,
                recipient_id=recipient_id,
                title=encoded.title,
                message=encoded.message,
                type=encoded.type,
                read=False,
                created_at=created_at,
            )
            for recipient_id in self.resolve_recipients(event)
        ]

    def fan_out(self, event: DomainEvent, store: NotificationStore) -> FanOutResult:
        encoded = encode_event(event)
        result = FanOutResult(encoded=encoded)
        notifications = self.build_notifications(event, encoded)
        if not notifications:
            logger.debug("No recipients for %s; event dropped", event.event_kind)
            return result

        for notification in notifications:
            try:
                result.delivered.append(store.create(notification))
            except (TransportError, ValidationError) as exc:
                logger.warning(
                    "Could not deliver %s to user %s: %s",
                    encoded.type,
                    notification.recipient_id,
                    exc,
                )
                result.failed.append(
                    FailedDelivery(recipient_id=notification.recipient_id, error=exc)
                )
        logger.info(
            "Delivered %s to %d recipient(s), %d failed",
            encoded.type,
            len(result.delivered),
            len(result.failed),
        )
        return result


__all__ = [
    "RecipientDirectory",
    "NotificationStore",
    "RecipientSelector",
    "users_with_role",
    "context_user",
    "all_active_users",
    "combine",
    "FailedDelivery",
    "FanOutResult",
    "DeliveryRouter",
    "WILDCARD_POLICY_KEY",
]
