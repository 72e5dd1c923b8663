import asyncio

import httpx
import pytest

from restfully import ApiError, ApiService, EntityModel, HttpxApiClient, MockApiClient

BASE_URL = "https://api.example.com"


class Order(EntityModel):
    id: int
    total: float


def test_get_request_async(service, mock_client):
    mock_client.enqueue(MockApiClient.json_response({"id": 3, "total": 9.5}))

    order = asyncio.run(service.get_request_async(Order, {"expand": "lines"}, "3"))

    assert order == Order(id=3, total=9.5)
    assert mock_client.last_request.endpoint == "v1/users/3"
    assert mock_client.last_request.parameters == {"expand": "lines"}


def test_post_request_async(service, mock_client, serializer):
    mock_client.enqueue(MockApiClient.json_response({"id": 4, "total": 1.0}))

    order = asyncio.run(service.post_request_async(Order, {"total": 1.0}))

    assert order.id == 4
    assert mock_client.last_request.body == serializer.serialize({"total": 1.0})


def test_async_error_is_raised(service, mock_client):
    rejected = MockApiClient.json_response({}, 400)
    mock_client.enqueue(rejected)

    with pytest.raises(ApiError) as exc_info:
        asyncio.run(service.get_request_async(Order))

    assert exc_info.value.response is rejected


def test_cancellation_interrupts_pending_request(serializer):
    client = MockApiClient(
        [MockApiClient.json_response({"id": 1, "total": 0})], delay=10
    )
    service = ApiService(BASE_URL, "v1/orders", client, serializer)

    async def scenario():
        cancellation = asyncio.Event()
        asyncio.get_running_loop().call_later(0.01, cancellation.set)
        with pytest.raises(asyncio.CancelledError):
            await service.get_request_async(Order, cancellation=cancellation)

    asyncio.run(scenario())

    assert client.requests == []


def test_cancelled_before_sending(service, mock_client):
    async def scenario():
        cancellation = asyncio.Event()
        cancellation.set()
        with pytest.raises(asyncio.CancelledError):
            await service.post_request_async(Order, {"id": 1}, cancellation=cancellation)

    asyncio.run(scenario())

    assert mock_client.requests == []


def test_unfired_cancellation_returns_result(service, mock_client):
    mock_client.enqueue(MockApiClient.json_response({"id": 5, "total": 2.0}))

    async def scenario():
        return await service.get_request_async(Order, cancellation=asyncio.Event())

    assert asyncio.run(scenario()).id == 5


def test_separate_async_client(serializer):
    def handler(request):
        return httpx.Response(200, json={"id": 1, "total": 1.0})

    sync_client = HttpxApiClient(httpx.Client(transport=httpx.MockTransport(handler)))
    async_client = MockApiClient([MockApiClient.json_response({"id": 2, "total": 2.0})])
    service = ApiService(
        BASE_URL, "v1/orders", sync_client, serializer, async_client=async_client
    )

    assert service.get_request(Order).id == 1
    assert asyncio.run(service.get_request_async(Order)).id == 2


def test_async_call_requires_async_transport(serializer):
    sync_only = HttpxApiClient(
        httpx.Client(transport=httpx.MockTransport(lambda request: httpx.Response(200)))
    )
    service = ApiService(BASE_URL, "v1/orders", sync_only, serializer)

    with pytest.raises(TypeError, match="does not support async requests"):
        asyncio.run(service.get_request_async(Order))
