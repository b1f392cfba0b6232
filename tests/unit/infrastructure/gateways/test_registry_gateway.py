from __future__ import annotations

import asyncio
import json
import time
from typing import List

import httpx
import pytest

from beacon.domain.entities.errors import (
    RegistrationRejectedError,
    RegistryTransportError,
)
from beacon.domain.entities.registration import HeartbeatResult
from beacon.infrastructure.gateways.registry_gateway import RegistryGateway


def _gateway(handler, timeout: float = 10.0) -> RegistryGateway:
    return RegistryGateway(
        "http://registry:8085/",
        timeout_seconds=timeout,
        transport=httpx.MockTransport(handler),
    )


@pytest.mark.asyncio
async def test_register_posts_descriptor(descriptor) -> None:
    requests: List[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        return httpx.Response(200, json={"status": "registered"})

    gateway = _gateway(handler)
    await gateway.register(descriptor)
    await gateway.close()

    assert len(requests) == 1
    request = requests[0]
    assert request.method == "POST"
    assert str(request.url) == "http://registry:8085/api/registry/register"
    assert request.headers["content-type"] == "application/json"
    body = json.loads(request.content)
    assert body["serviceName"] == "user-access-service"
    assert body["healthCheck"] == "http://localhost:9093/health"
    assert body["port"] == 9093


@pytest.mark.asyncio
async def test_register_accepts_any_2xx(descriptor) -> None:
    gateway = _gateway(lambda request: httpx.Response(201))

    await gateway.register(descriptor)
    await gateway.close()


@pytest.mark.asyncio
async def test_register_raises_rejected_on_non_2xx(descriptor) -> None:
    gateway = _gateway(
        lambda request: httpx.Response(422, text="serviceName is required")
    )

    with pytest.raises(RegistrationRejectedError) as exc:
        await gateway.register(descriptor)
    await gateway.close()

    assert exc.value.status_code == 422
    assert exc.value.body == "serviceName is required"


@pytest.mark.asyncio
async def test_register_wraps_connection_errors(descriptor) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("Connection refused", request=request)

    gateway = _gateway(handler)

    with pytest.raises(RegistryTransportError) as exc:
        await gateway.register(descriptor)
    await gateway.close()

    assert "Connection refused" in exc.value.reason


@pytest.mark.asyncio
async def test_heartbeat_posts_empty_body_to_service_path() -> None:
    requests: List[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        return httpx.Response(200)

    gateway = _gateway(handler)
    outcome = await gateway.heartbeat("user-access-service")
    await gateway.close()

    assert outcome.result is HeartbeatResult.ACCEPTED
    assert requests[0].method == "POST"
    assert requests[0].url.path == "/api/registry/heartbeat/user-access-service"
    assert json.loads(requests[0].content) == {}


@pytest.mark.asyncio
async def test_heartbeat_quotes_service_name() -> None:
    paths: List[str] = []

    def handler(request: httpx.Request) -> httpx.Response:
        paths.append(request.url.raw_path.decode())
        return httpx.Response(200)

    gateway = _gateway(handler)
    await gateway.heartbeat("billing/eu west")
    await gateway.close()

    assert paths == ["/api/registry/heartbeat/billing%2Feu%20west"]


@pytest.mark.asyncio
@pytest.mark.parametrize(
    ("status_code", "expected"),
    [
        (200, HeartbeatResult.ACCEPTED),
        (204, HeartbeatResult.ACCEPTED),
        (404, HeartbeatResult.NOT_FOUND),
        (400, HeartbeatResult.REJECTED),
        (503, HeartbeatResult.REJECTED),
    ],
)
async def test_heartbeat_classifies_status(status_code, expected) -> None:
    gateway = _gateway(lambda request: httpx.Response(status_code, text="body"))

    outcome = await gateway.heartbeat("svc")
    await gateway.close()

    assert outcome.result is expected
    assert outcome.status_code == status_code


@pytest.mark.asyncio
async def test_heartbeat_times_out_on_hung_registry() -> None:
    async def handler(request: httpx.Request) -> httpx.Response:
        await asyncio.sleep(30)
        return httpx.Response(200)  # pragma: no cover - never reached

    gateway = _gateway(handler, timeout=0.1)

    started = time.monotonic()
    with pytest.raises(RegistryTransportError) as exc:
        await gateway.heartbeat("svc")
    elapsed = time.monotonic() - started
    await gateway.close()

    assert elapsed < 2.0
    assert "0.1" in exc.value.reason


class _StubAsyncClient:
    instances: List["_StubAsyncClient"] = []

    def __init__(self, **kwargs) -> None:
        self.kwargs = kwargs
        self.closed = False
        _StubAsyncClient.instances.append(self)

    async def post(self, url: str, json: dict) -> httpx.Response:
        return httpx.Response(200, request=httpx.Request("POST", url))

    async def aclose(self) -> None:
        self.closed = True


@pytest.mark.asyncio
async def test_client_is_reused_and_released_on_close(monkeypatch) -> None:
    _StubAsyncClient.instances = []
    monkeypatch.setattr("httpx.AsyncClient", _StubAsyncClient)

    gateway = RegistryGateway("http://registry", timeout_seconds=10.0)
    await gateway.heartbeat("svc")
    await gateway.heartbeat("svc")
    await gateway.close()
    await gateway.close()

    assert len(_StubAsyncClient.instances) == 1
    client = _StubAsyncClient.instances[0]
    assert client.closed is True
    assert client.kwargs["timeout"] == httpx.Timeout(10.0)

    await gateway.heartbeat("svc")
    assert len(_StubAsyncClient.instances) == 2
    await gateway.close()
