"""Map notification routing keys to navigation targets.

The grammar is substring based on purpose: stored rows mix legacy bare types
(``create``, ``delete_request``) with ``{action}_{entity}:{id}`` keys, so an
exact parser would strand old notifications. Branches are checked in a fixed
order and the first match wins:

1. ``evaluation`` -> ``/evaluations?techId={id}`` (``/evaluations`` for lists)
2. ``technician`` -> same targets as evaluations
3. ``complaint`` without ``list`` -> ``/complaints/{id}``
4. exactly ``complaint_list`` or ``create`` -> ``/complaints``
5. exactly ``delete_request``, or ``request`` with ``list`` -> ``/requests``
6. ``request`` -> ``/requests/{id}``

A key containing both ``complaint`` and ``request`` therefore resolves as a
complaint. Anything unmatched, or a matched branch whose last segment is not
an integer id, yields ``None`` (no navigation).
"""

from __future__ import annotations

import logging

from servicedesk.domain.entities import (
    COLLECTION_SUFFIX,
    ROUTING_KEY_SEPARATOR,
    DeepLink,
    EntityKind,
)
from servicedesk.domain.errors import RoutingAmbiguity

logger = logging.getLogger(__name__)

COMPLAINTS_PATH = "/complaints"
EVALUATIONS_PATH = "/evaluations"
REQUESTS_PATH = "/requests"

_LIST_MARKER = COLLECTION_SUFFIX.lstrip("_")
_LEGACY_COMPLAINT_LIST_TYPES = frozenset({"complaint_list", "create"})
_LEGACY_REQUEST_LIST_TYPES = frozenset({"delete_request"})


def resolve_deep_link(notification_type: str | None) -> DeepLink | None:
    """Return the navigation target for ``notification_type`` or ``None``."""

    if not notification_type:
        return None
    try:
        return parse_deep_link(notification_type)
    except RoutingAmbiguity as exc:
        logger.warning("%s", exc)
        return None


def parse_deep_link(notification_type: str) -> DeepLink | None:
    """Strict variant of :func:`resolve_deep_link` that raises on ambiguous keys."""

    value = notification_type.strip()

    if EntityKind.EVALUATION.value in value:
        return _technician_link(value, EntityKind.EVALUATION)

    if EntityKind.TECHNICIAN_RECORD.value in value:
        return _technician_link(value, EntityKind.TECHNICIAN_RECORD)

    if EntityKind.COMPLAINT.value in value and _LIST_MARKER not in value:
        complaint_id = _last_segment_id(value)
        return DeepLink(
            path=f"{COMPLAINTS_PATH}/{complaint_id}",
            entity_kind=EntityKind.COMPLAINT,
            entity_id=complaint_id,
        )

    if value in _LEGACY_COMPLAINT_LIST_TYPES:
        return DeepLink(path=COMPLAINTS_PATH, entity_kind=EntityKind.COMPLAINT)

    if value in _LEGACY_REQUEST_LIST_TYPES or (
        EntityKind.SERVICE_REQUEST.value in value and _LIST_MARKER in value
    ):
        return DeepLink(path=REQUESTS_PATH, entity_kind=EntityKind.SERVICE_REQUEST)

    if EntityKind.SERVICE_REQUEST.value in value:
        request_id = _last_segment_id(value)
        return DeepLink(
            path=f"{REQUESTS_PATH}/{request_id}",
            entity_kind=EntityKind.SERVICE_REQUEST,
            entity_id=request_id,
        )

    return None


def _technician_link(value: str, kind: EntityKind) -> DeepLink:
    if ROUTING_KEY_SEPARATOR not in value and value.endswith(COLLECTION_SUFFIX):
        return DeepLink(path=EVALUATIONS_PATH, entity_kind=kind)
    technician_id = _last_segment_id(value)
    return DeepLink(
        path=f"{EVALUATIONS_PATH}?techId={technician_id}",
        entity_kind=kind,
        entity_id=technician_id,
    )


def _last_segment_id(value: str) -> int:
    segment = value.split(ROUTING_KEY_SEPARATOR)[-1].strip()
    try:
        return int(segment)
    except ValueError:
        raise RoutingAmbiguity(value, f"'{segment}' is not an entity id") from None


__all__ = [
    "COMPLAINTS_PATH",
    "EVALUATIONS_PATH",
    "REQUESTS_PATH",
    "parse_deep_link",
    "resolve_deep_link",
]
