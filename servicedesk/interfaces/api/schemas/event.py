"""Schemas for the domain event trigger endpoint."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field, field_validator

from servicedesk.domain.entities import ROUTING_KEY_SEPARATOR, EntityKind, EventAction


class DomainEventCreate(BaseModel):
    """Domain event reported by an external handler."""

    action: EventAction
    entity_kind: EntityKind
    entity_id: int | None = Field(
        default=None, description="Target entity; omit for collection-level events"
    )
    context: dict[str, Any] = Field(
        default_factory=dict,
        description="Routing hints such as assignee_id or supervisor_id, plus a label",
    )

    @field_validator("context")
    @classmethod
    def _label_is_text(cls, value: dict[str, Any]) -> dict[str, Any]:
        label = value.get("label")
        if label is not None and not isinstance(label, str):
            raise ValueError("context.label must be a string")
        return value


class FailedDeliveryRead(BaseModel):
    recipient_id: int
    error: str


class FanOutRead(BaseModel):
    type: str = Field(..., description=f"Routing key; entity ids never contain '{ROUTING_KEY_SEPARATOR}'")
    title: str
    message: str
    recipient_ids: list[int] = Field(default_factory=list)
    failed: list[FailedDeliveryRead] = Field(default_factory=list)


__all__ = ["DomainEventCreate", "FailedDeliveryRead", "FanOutRead"]
