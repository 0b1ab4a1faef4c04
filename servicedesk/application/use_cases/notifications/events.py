"""Inbound trigger used by domain-action handlers to raise notifications."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from sqlalchemy.orm import Session

from servicedesk.config import get_settings
from servicedesk.domain.entities import DomainEvent, EntityKind, EventAction
from servicedesk.domain.errors import ValidationError
from servicedesk.infrastructure.repositories import (
    NotificationRepository,
    UserRepository,
)

from .policies import DEFAULT_POLICY
from .router import DeliveryRouter, FanOutResult, RecipientSelector


def build_router(
    session: Session,
    *,
    policy: Mapping[str, RecipientSelector] | None = None,
    exclude_actor: bool | None = None,
) -> DeliveryRouter:
    """Return a router backed by the user table of ``session``."""

    if exclude_actor is None:
        exclude_actor = get_settings().notification_exclude_actor
    return DeliveryRouter(
        policy if policy is not None else DEFAULT_POLICY,
        UserRepository(session),
        exclude_actor=exclude_actor,
    )


def emit(
    session: Session,
    action: EventAction | str,
    entity_kind: EntityKind | str,
    entity_id: int | str | None = None,
    *,
    actor_id: int | None = None,
    actor_name: str | None = None,
    context: Mapping[str, Any] | None = None,
    policy: Mapping[str, RecipientSelector] | None = None,
) -> FanOutResult:
    """Encode, route and persist notifications for one domain event.

    Zero resolved recipients is a successful no-op. Rows that fail to persist
    are listed in :attr:`FanOutResult.failed` and are not retried.
    """

    try:
        action = EventAction(action)
        entity_kind = EntityKind(entity_kind)
    except ValueError as exc:
        raise ValidationError(str(exc)) from exc

    event = DomainEvent(
        action=action,
        entity_kind=entity_kind,
        entity_id=entity_id,
        actor_id=actor_id,
        actor_name=actor_name,
        context=dict(context or {}),
    )
    return emit_event(session, event, policy=policy)


def emit_event(
    session: Session,
    event: DomainEvent,
    *,
    policy: Mapping[str, RecipientSelector] | None = None,
) -> FanOutResult:
    """Variant of :func:`emit` for callers that already built a :class:`DomainEvent`."""

    router = build_router(session, policy=policy)
    return router.fan_out(event, NotificationRepository(session))


__all__ = ["build_router", "emit", "emit_event"]
