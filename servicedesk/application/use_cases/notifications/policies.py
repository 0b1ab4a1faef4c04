"""Default recipient policy for service-desk events."""

from __future__ import annotations

from collections.abc import Mapping

from servicedesk.domain.entities import ROLE_ADMIN, EntityKind, EventAction

from .router import RecipientSelector, combine, context_user, users_with_role

ASSIGNEE_CONTEXT_KEY = "assignee_id"
SUPERVISOR_CONTEXT_KEY = "supervisor_id"


def _kind(action: EventAction, entity: EntityKind) -> str:
    return f"{action.value}_{entity.value}"


admins = users_with_role(ROLE_ADMIN)

# Deletions and collection-wide changes go to administrators only; entity
# events also reach the directly interested party named in the event context.
DEFAULT_POLICY: Mapping[str, RecipientSelector] = {
    EntityKind.COMPLAINT.value: combine(admins, context_user(ASSIGNEE_CONTEXT_KEY)),
    _kind(EventAction.DELETE, EntityKind.COMPLAINT): admins,
    EntityKind.EVALUATION.value: combine(admins, context_user(SUPERVISOR_CONTEXT_KEY)),
    EntityKind.TECHNICIAN_RECORD.value: combine(
        admins, context_user(SUPERVISOR_CONTEXT_KEY)
    ),
    EntityKind.SERVICE_REQUEST.value: combine(
        admins, context_user(ASSIGNEE_CONTEXT_KEY)
    ),
    _kind(EventAction.DELETE, EntityKind.SERVICE_REQUEST): admins,
}


__all__ = ["DEFAULT_POLICY", "ASSIGNEE_CONTEXT_KEY", "SUPERVISOR_CONTEXT_KEY"]
