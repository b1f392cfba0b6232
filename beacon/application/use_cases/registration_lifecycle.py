"""
Registration lifecycle use case.

Ties the registry gateway and the heartbeat scheduler together: one
best-effort registration on start, unconditional heartbeats afterwards,
deferred re-registration when the registry forgets the instance, and a
clean, idempotent stop.
"""

from __future__ import annotations

from typing import Optional

from beacon.domain.entities.errors import (
    LifecycleStateError,
    RegistrationRejectedError,
    RegistryTransportError,
)
from beacon.domain.entities.registration import (
    HeartbeatOutcome,
    HeartbeatResult,
    LifecycleState,
    RegistrationStatus,
)
from beacon.domain.entities.service_descriptor import ServiceDescriptor
from beacon.domain.gateways.registry_gateway import IRegistryGateway
from beacon.domain.ports.heartbeat_scheduler import IHeartbeatScheduler
from beacon.shared import get_logger

logger = get_logger(__name__)


class RegistrationLifecycle:
    """Keeps one service instance registered and alive in the registry."""

    def __init__(
        self,
        descriptor: ServiceDescriptor,
        gateway: IRegistryGateway,
        scheduler: IHeartbeatScheduler,
        *,
        enabled: bool = True,
    ) -> None:
        self._descriptor = descriptor
        self._gateway = gateway
        self._scheduler = scheduler
        self._enabled = enabled
        self._state = LifecycleState.STOPPED
        self._registered = False
        self._reregistration_pending = False
        self._last_heartbeat: Optional[HeartbeatOutcome] = None
        self._last_heartbeat_error: Optional[str] = None

    @property
    def state(self) -> LifecycleState:
        return self._state

    @property
    def reregistration_pending(self) -> bool:
        return self._reregistration_pending

    def status(self) -> RegistrationStatus:
        return RegistrationStatus(
            service_name=self._descriptor.name,
            state=self._state,
            registered=self._registered,
            reregistration_pending=self._reregistration_pending,
            last_heartbeat=self._last_heartbeat,
            last_heartbeat_error=self._last_heartbeat_error,
        )

    async def start(self) -> None:
        """
        Register once, then start heartbeating regardless of the outcome.

        Raises:
            LifecycleStateError: If the lifecycle was already started.
        """
        if self._state is LifecycleState.DISABLED:
            return
        if not self._enabled:
            self._state = LifecycleState.DISABLED
            logger.info("registration.disabled", service=self._descriptor.name)
            return
        if self._state is not LifecycleState.STOPPED:
            raise LifecycleStateError(
                f"Registration lifecycle for {self._descriptor.name} "
                f"cannot start from state {self._state.value}",
                {"state": self._state.value},
            )

        self._state = LifecycleState.STARTING
        logger.info(
            "registration.starting",
            service=self._descriptor.name,
            endpoint=self._descriptor.endpoint,
        )

        try:
            await self._register()
            if self._state is not LifecycleState.STARTING:
                # stop() ran while the registration call was in flight
                return
            self._scheduler.start(self.heartbeat_tick)
        except BaseException:
            self._state = LifecycleState.STOPPED
            raise

        self._state = LifecycleState.RUNNING
        logger.info("registration.running", service=self._descriptor.name)

    async def heartbeat_tick(self) -> None:
        """Single scheduler tick. Never raises registry errors."""
        if self._reregistration_pending:
            if await self._register():
                self._reregistration_pending = False
                return

        try:
            outcome = await self._gateway.heartbeat(self._descriptor.name)
        except RegistryTransportError as exc:
            self._last_heartbeat_error = exc.message
            logger.warning(
                "heartbeat.transport_error",
                service=self._descriptor.name,
                error=exc.message,
            )
            return

        self._last_heartbeat = outcome
        self._last_heartbeat_error = None

        if outcome.accepted:
            self._reregistration_pending = False
            logger.debug("heartbeat.accepted", service=self._descriptor.name)
        elif outcome.result is HeartbeatResult.NOT_FOUND:
            self._registered = False
            self._reregistration_pending = True
            logger.warning(
                "heartbeat.not_found",
                service=self._descriptor.name,
                detail="will attempt re-registration on next heartbeat cycle",
            )
        else:
            logger.warning(
                "heartbeat.rejected",
                service=self._descriptor.name,
                status_code=outcome.status_code,
                body=outcome.body,
            )

    async def stop(self) -> None:
        """Stop heartbeating and release the gateway. Idempotent."""
        if self._state is LifecycleState.DISABLED:
            return

        was_running = self._state is LifecycleState.RUNNING
        self._state = LifecycleState.STOPPING
        try:
            await self._scheduler.stop()
        finally:
            await self._gateway.close()
            self._state = LifecycleState.STOPPED

        if was_running:
            logger.info("registration.stopped", service=self._descriptor.name)

    async def _register(self) -> bool:
        try:
            await self._gateway.register(self._descriptor)
        except RegistrationRejectedError as exc:
            self._registered = False
            logger.warning(
                "registration.rejected",
                service=self._descriptor.name,
                status_code=exc.status_code,
                body=exc.body,
            )
            return False
        except RegistryTransportError as exc:
            self._registered = False
            logger.warning(
                "registration.transport_error",
                service=self._descriptor.name,
                error=exc.message,
            )
            return False
        except Exception as exc:
            self._registered = False
            logger.warning(
                "registration.failed",
                service=self._descriptor.name,
                error=str(exc),
                exc_info=True,
            )
            return False

        self._registered = True
        logger.info(
            "registration.succeeded",
            service=self._descriptor.name,
            endpoint=self._descriptor.endpoint,
        )
        return True
