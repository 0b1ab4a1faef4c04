"""Public helpers for emitting and reading domain notifications."""

from .deep_links import parse_deep_link, resolve_deep_link
from .encoder import (
    ICON_CREATE,
    ICON_DELETE,
    ICON_INFO,
    ICON_UPDATE,
    EncodedEvent,
    build_routing_key,
    encode_event,
    icon_for,
)
from .events import build_router, emit, emit_event
from .policies import DEFAULT_POLICY
from .router import (
    DeliveryRouter,
    FailedDelivery,
    FanOutResult,
    NotificationStore,
    RecipientDirectory,
    RecipientSelector,
    all_active_users,
    combine,
    context_user,
    users_with_role,
)
from .summary import NotificationSummary, summarize_notifications

__all__ = [
    "parse_deep_link",
    "resolve_deep_link",
    "EncodedEvent",
    "build_routing_key",
    "encode_event",
    "icon_for",
    "ICON_CREATE",
    "ICON_UPDATE",
    "ICON_DELETE",
    "ICON_INFO",
    "build_router",
    "emit",
    "emit_event",
    "DEFAULT_POLICY",
    "DeliveryRouter",
    "FailedDelivery",
    "FanOutResult",
    "NotificationStore",
    "RecipientDirectory",
    "RecipientSelector",
    "all_active_users",
    "combine",
    "context_user",
    "users_with_role",
    "NotificationSummary",
    "summarize_notifications",
]
