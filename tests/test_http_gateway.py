import httpx
import pytest

from servicedesk.client import HttpNotificationGateway
from servicedesk.domain.errors import NotFoundError, TransportError, ValidationError

pytestmark = pytest.mark.anyio

BASE_URL = "http://desk.test"

NOTIFICATION_PAYLOAD = {
    "id": 7,
    "recipient_id": 1,
    "title": "New complaint",
    "message": "Ana added complaint #42.",
    "type": "create_complaint:42",
    "read": False,
    "created_at": "2024-03-01T09:00:00+00:00",
    "read_at": None,
    "link": "/complaints/42",
    "icon": "create",
}


def _gateway(handler):
    client = httpx.AsyncClient(base_url=BASE_URL, transport=httpx.MockTransport(handler))
    return HttpNotificationGateway(client)


async def test_list_notifications_parses_payload():
    requests = []

    def handler(request):
        requests.append(request)
        return httpx.Response(200, json=[NOTIFICATION_PAYLOAD])

    gateway = _gateway(handler)
    (notification,) = await gateway.list_notifications()
    await gateway.aclose()

    assert requests[0].method == "GET"
    assert requests[0].url.path == "/notifications/"
    assert notification.id == 7
    assert notification.type == "create_complaint:42"
    assert notification.read is False


async def test_mark_endpoints_use_post():
    paths = []

    def handler(request):
        paths.append((request.method, request.url.path))
        return httpx.Response(200, json={"updated": 1})

    gateway = _gateway(handler)
    await gateway.mark_read(7)
    await gateway.mark_all_read()
    await gateway.aclose()

    assert paths == [
        ("POST", "/notifications/7/read"),
        ("POST", "/notifications/read-all"),
    ]


@pytest.mark.parametrize(
    ("status_code", "error"),
    [
        (404, NotFoundError),
        (422, ValidationError),
        (500, TransportError),
        (503, TransportError),
    ],
)
async def test_error_statuses_are_mapped(status_code, error):
    gateway = _gateway(lambda request: httpx.Response(status_code, json={"detail": "nope"}))

    with pytest.raises(error, match="nope"):
        await gateway.mark_read(1)
    await gateway.aclose()


async def test_connection_failures_become_transport_errors():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    gateway = _gateway(handler)

    with pytest.raises(TransportError):
        await gateway.list_notifications()
    await gateway.aclose()


async def test_malformed_payload_is_a_transport_error():
    gateway = _gateway(lambda request: httpx.Response(200, json=[{"id": "x"}]))

    with pytest.raises(TransportError):
        await gateway.list_notifications()
    await gateway.aclose()
