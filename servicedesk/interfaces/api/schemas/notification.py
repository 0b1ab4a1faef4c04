"""Pydantic models describing notification payloads."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class NotificationRead(BaseModel):
    """Representation of a notification delivered to the client."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    recipient_id: int
    title: str
    message: str
    type: str = Field(..., description="Routing key, e.g. create_complaint:42")
    read: bool = False
    created_at: datetime
    read_at: datetime | None = None
    link: str | None = Field(default=None, description="Deep-link target, if any")
    icon: str = Field(default="info", description="Display icon derived from the routing key")


class NotificationSummaryRead(BaseModel):
    unread_count: int
    unread_by_kind: dict[str, int] = Field(default_factory=dict)


class MarkAllReadResponse(BaseModel):
    updated: int = Field(..., description="Number of notifications flagged as read")


__all__ = ["NotificationRead", "NotificationSummaryRead", "MarkAllReadResponse"]
