"""Fixed-rate heartbeat scheduler running on the asyncio event loop."""

from __future__ import annotations

import asyncio
import math
from typing import Optional

from beacon.domain.entities.errors import SchedulerAlreadyRunningError
from beacon.domain.ports.heartbeat_scheduler import IHeartbeatScheduler, TickCallback
from beacon.shared import get_logger

logger = get_logger(__name__)

# Upper bound on waiting for a cancelled tick to unwind.
_CANCEL_SETTLE_SECONDS = 1.0


class HeartbeatScheduler(IHeartbeatScheduler):
    """
    Drive a tick callback at a fixed rate from a single background task.

    Ticks are scheduled at ``start + initial_delay + n * interval``. A tick
    is awaited before the next one is considered, so ticks never overlap;
    scheduled times that pass while a tick is still running are skipped.
    """

    def __init__(
        self,
        interval_seconds: float = 30.0,
        *,
        initial_delay_seconds: Optional[float] = None,
        grace_period_seconds: float = 5.0,
    ) -> None:
        if interval_seconds <= 0:
            raise ValueError("interval_seconds must be greater than zero")
        if initial_delay_seconds is not None and initial_delay_seconds < 0:
            raise ValueError("initial_delay_seconds must not be negative")

        self._interval = float(interval_seconds)
        self._initial_delay = (
            self._interval if initial_delay_seconds is None else initial_delay_seconds
        )
        self._grace_period = grace_period_seconds
        self._task: Optional[asyncio.Task[None]] = None
        self._stop_event: Optional[asyncio.Event] = None
        self.ticks_fired = 0
        self.ticks_skipped = 0

    @property
    def interval(self) -> float:
        return self._interval

    @property
    def is_running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self, callback: TickCallback) -> None:
        if self.is_running:
            raise SchedulerAlreadyRunningError("Heartbeat scheduler is already running")

        self._stop_event = asyncio.Event()
        self._task = asyncio.get_running_loop().create_task(
            self._run(callback, self._stop_event), name="heartbeat-scheduler"
        )
        logger.info(
            "heartbeat_scheduler.started",
            interval_seconds=self._interval,
            initial_delay_seconds=self._initial_delay,
        )

    async def stop(self) -> None:
        task, stop_event = self._task, self._stop_event
        self._task = None
        self._stop_event = None
        if task is None or stop_event is None:
            return

        stop_event.set()
        done, _ = await asyncio.wait({task}, timeout=self._grace_period)
        if not done:
            task.cancel()
            await asyncio.wait({task}, timeout=_CANCEL_SETTLE_SECONDS)
            logger.warning(
                "heartbeat_scheduler.tick_abandoned",
                grace_period_seconds=self._grace_period,
            )
        logger.info(
            "heartbeat_scheduler.stopped",
            ticks_fired=self.ticks_fired,
            ticks_skipped=self.ticks_skipped,
        )

    async def _run(self, callback: TickCallback, stop_event: asyncio.Event) -> None:
        loop = asyncio.get_running_loop()
        next_fire = loop.time() + self._initial_delay

        while not stop_event.is_set():
            delay = next_fire - loop.time()
            if delay > 0:
                try:
                    await asyncio.wait_for(stop_event.wait(), timeout=delay)
                    return
                except asyncio.TimeoutError:
                    pass

            self.ticks_fired += 1
            try:
                await callback()
            except Exception as exc:
                logger.warning(
                    "heartbeat_scheduler.tick_failed", error=str(exc), exc_info=exc
                )

            next_fire += self._interval
            overdue = loop.time() - next_fire
            if overdue >= 0:
                skipped = math.floor(overdue / self._interval) + 1
                next_fire += skipped * self._interval
                self.ticks_skipped += skipped
                logger.warning(
                    "heartbeat_scheduler.ticks_skipped",
                    skipped=skipped,
                    interval_seconds=self._interval,
                )
