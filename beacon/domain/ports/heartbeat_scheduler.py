"""Domain port for the recurring heartbeat driver."""

from __future__ import annotations

from typing import Awaitable, Callable, Protocol

TickCallback = Callable[[], Awaitable[None]]


class IHeartbeatScheduler(Protocol):
    """Fixed-rate driver that invokes a tick callback until stopped."""

    @property
    def is_running(self) -> bool:
        ...

    def start(self, callback: TickCallback) -> None:
        """Begin firing ``callback``. Fails fast when already running."""
        ...

    async def stop(self) -> None:
        """Cancel future ticks and wait, bounded, for the in-flight one."""
        ...
