"""Endpoint letting external producers raise domain events."""

from __future__ import annotations

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from servicedesk.application.use_cases.notifications import FanOutResult, emit
from servicedesk.domain.entities import User
from servicedesk.infrastructure.database import get_db
from servicedesk.interfaces.api.dependencies import require_admin
from servicedesk.interfaces.api.schemas import (
    DomainEventCreate,
    FailedDeliveryRead,
    FanOutRead,
)

router = APIRouter(prefix="/events", tags=["events"])


def _result_to_schema(result: FanOutResult) -> FanOutRead:
    return FanOutRead(
        type=result.encoded.type,
        title=result.encoded.title,
        message=result.encoded.message,
        recipient_ids=result.recipient_ids,
        failed=[
            FailedDeliveryRead(recipient_id=failure.recipient_id, error=str(failure.error))
            for failure in result.failed
        ],
    )


@router.post("/", response_model=FanOutRead, status_code=status.HTTP_202_ACCEPTED)
def raise_domain_event(
    payload: DomainEventCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin),
) -> FanOutRead:
    """Notify the recipients selected for the reported event."""

    result = emit(
        db,
        payload.action,
        payload.entity_kind,
        payload.entity_id,
        actor_id=current_user.id,
        actor_name=current_user.name,
        context=payload.context,
    )
    return _result_to_schema(result)


__all__ = ["router"]
