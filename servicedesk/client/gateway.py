"""HTTP access to the notification endpoints."""

from __future__ import annotations

import logging
from typing import Any

import httpx
from pydantic import ValidationError as PydanticValidationError

from servicedesk.domain.entities import Notification
from servicedesk.domain.errors import NotFoundError, TransportError, ValidationError
from servicedesk.interfaces.api.schemas import NotificationRead

logger = logging.getLogger(__name__)

NOTIFICATIONS_PATH = "/notifications/"


class HttpNotificationGateway:
    """Talk to the notification API through an ``httpx.AsyncClient``.

    Connection failures and 5xx answers become :class:`TransportError`, a 404
    becomes :class:`NotFoundError` and a 422 :class:`ValidationError`.
    """

    def __init__(self, client: httpx.AsyncClient) -> None:
        self._client = client

    async def aclose(self) -> None:
        await self._client.aclose()

    async def list_notifications(self) -> list[Notification]:
        payload = await self._request("GET", NOTIFICATIONS_PATH)
        if not isinstance(payload, list):
            raise TransportError("Unexpected notification list payload")
        try:
            return [_to_entity(NotificationRead.model_validate(item)) for item in payload]
        except PydanticValidationError as exc:
            raise TransportError(f"Malformed notification payload: {exc}") from exc

    async def mark_read(self, notification_id: int) -> None:
        await self._request("POST", f"{NOTIFICATIONS_PATH}{notification_id}/read")

    async def mark_all_read(self) -> None:
        await self._request("POST", f"{NOTIFICATIONS_PATH}read-all")

    async def _request(self, method: str, url: str) -> Any:
        try:
            response = await self._client.request(method, url)
        except httpx.HTTPError as exc:
            logger.warning("%s %s failed: %s", method, url, exc)
            raise TransportError(f"{method} {url} failed: {exc}") from exc

        if response.status_code == httpx.codes.NOT_FOUND:
            raise NotFoundError(_detail(response))
        if response.status_code == httpx.codes.UNPROCESSABLE_ENTITY:
            raise ValidationError(_detail(response))
        if response.is_error:
            raise TransportError(
                f"{method} {url} returned {response.status_code}: {_detail(response)}"
            )
        try:
            return response.json()
        except ValueError as exc:
            raise TransportError(f"{method} {url} returned invalid JSON") from exc


def _detail(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return response.text
    if isinstance(body, dict) and "detail" in body:
        return str(body["detail"])
    return str(body)


def _to_entity(schema: NotificationRead) -> Notification:
    return Notification(
        id=schema.id,
        recipient_id=schema.recipient_id,
        title=schema.title,
        message=schema.message,
        type=schema.type,
        read=schema.read,
        created_at=schema.created_at,
        read_at=schema.read_at,
    )


__all__ = ["HttpNotificationGateway", "NOTIFICATIONS_PATH"]
