from __future__ import annotations

import asyncio
from typing import Any, List, Optional, Sequence, Union

import pytest

from beacon.application.use_cases.service_descriptor import build_service_descriptor
from beacon.domain.entities.errors import RegistryError, SchedulerAlreadyRunningError
from beacon.domain.entities.registration import HeartbeatOutcome
from beacon.domain.entities.service_descriptor import ServiceDescriptor
from beacon.domain.gateways.registry_gateway import IRegistryGateway
from beacon.domain.ports.heartbeat_scheduler import TickCallback


RegisterScript = Union[None, Exception]
HeartbeatScript = Union[int, HeartbeatOutcome, RegistryError]


class FakeRegistryGateway(IRegistryGateway):
    """
    In-memory registry gateway.

    ``register_script`` and ``heartbeat_script`` are consumed one entry per
    call; the last entry repeats once the script runs out. Register entries
    that are exceptions are raised. Heartbeat entries may be HTTP status codes.
    """

    def __init__(
        self,
        register_script: Sequence[RegisterScript] = (None,),
        heartbeat_script: Sequence[HeartbeatScript] = (200,),
        heartbeat_delay: float = 0.0,
    ) -> None:
        self._register_script = list(register_script)
        self._heartbeat_script = list(heartbeat_script)
        self.heartbeat_delay = heartbeat_delay
        self.calls: List[str] = []
        self.register_calls: List[ServiceDescriptor] = []
        self.heartbeat_calls: List[str] = []
        self.heartbeat_times: List[float] = []
        self.close_calls = 0
        self.in_flight = 0
        self.max_in_flight = 0

    async def register(self, descriptor: ServiceDescriptor) -> None:
        self.calls.append("register")
        self.register_calls.append(descriptor)
        result = self._next(self._register_script)
        if isinstance(result, Exception):
            raise result

    async def heartbeat(self, service_name: str) -> HeartbeatOutcome:
        self.calls.append("heartbeat")
        self.heartbeat_calls.append(service_name)
        self.heartbeat_times.append(asyncio.get_running_loop().time())
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            if self.heartbeat_delay:
                await asyncio.sleep(self.heartbeat_delay)
            result = self._next(self._heartbeat_script)
        finally:
            self.in_flight -= 1
        if isinstance(result, RegistryError):
            raise result
        if isinstance(result, int):
            return HeartbeatOutcome.from_status(result, "" if result < 300 else "err")
        return result

    async def close(self) -> None:
        self.close_calls += 1

    @property
    def network_calls(self) -> int:
        return len(self.calls)

    @staticmethod
    def _next(script: List[Any]) -> Any:
        if len(script) > 1:
            return script.pop(0)
        return script[0]


class FakeHeartbeatScheduler:
    """Scheduler double that records lifecycle calls and fires ticks on demand."""

    def __init__(self) -> None:
        self.callback: Optional[TickCallback] = None
        self.start_calls = 0
        self.stop_calls = 0
        self._running = False

    @property
    def is_running(self) -> bool:
        return self._running

    def start(self, callback: TickCallback) -> None:
        if self._running:
            raise SchedulerAlreadyRunningError("already running")
        self.start_calls += 1
        self.callback = callback
        self._running = True

    async def stop(self) -> None:
        self.stop_calls += 1
        self._running = False

    async def tick(self) -> None:
        assert self.callback is not None
        await self.callback()


@pytest.fixture()
def descriptor() -> ServiceDescriptor:
    return build_service_descriptor(
        name="user-access-service",
        host="localhost",
        port=9093,
        operations=["validateUser", "getUserProfile", "authenticate", "authorize"],
        metadata={
            "type": "user-access-service",
            "language": "Python",
            "capabilities": ["user-validation", "authentication"],
        },
        framework="FastAPI",
        version="4.3.2",
    )


@pytest.fixture()
def fake_gateway() -> FakeRegistryGateway:
    return FakeRegistryGateway()


@pytest.fixture()
def fake_scheduler() -> FakeHeartbeatScheduler:
    return FakeHeartbeatScheduler()


@pytest.fixture()
def gateway_factory() -> type[FakeRegistryGateway]:
    return FakeRegistryGateway
