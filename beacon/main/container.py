"""
Dependency container injection module - Main Layer

Composition root wiring settings into the descriptor, the registry gateway,
the heartbeat scheduler and the registration lifecycle.
"""

from contextlib import asynccontextmanager

from dependency_injector import containers, providers

from beacon.application.use_cases.registration_lifecycle import RegistrationLifecycle
from beacon.application.use_cases.registration_status import (
    GetRegistrationStatusUseCase,
)
from beacon.application.use_cases.service_descriptor import build_service_descriptor
from beacon.infrastructure.gateways.registry_gateway import RegistryGateway
from beacon.infrastructure.services.heartbeat_scheduler import HeartbeatScheduler
from beacon.shared import get_logger

from .config import AppSettings

logger = get_logger(__name__)


class AppContainer(containers.DeclarativeContainer):
    """Composition Root using dependency-injector."""

    wiring_config = containers.WiringConfiguration(packages=["..presentation"])

    # Settings
    config = providers.Configuration()

    # Domain
    service_descriptor = providers.Singleton(
        build_service_descriptor,
        name=config.service.name,
        host=config.service.host,
        port=config.service.port.as_int(),
        operations=config.service.operations,
        metadata=config.service.metadata,
        framework=config.service.framework,
        version=config.service.version,
    )

    # Infrastructure
    registry_gateway = providers.Singleton(
        RegistryGateway,
        registry_url=config.registry.url,
        timeout_seconds=config.registry.request_timeout_seconds.as_float(),
    )

    heartbeat_scheduler = providers.Singleton(
        HeartbeatScheduler,
        interval_seconds=config.registration.heartbeat_interval_seconds.as_float(),
        initial_delay_seconds=config.registration.initial_heartbeat_delay_seconds,
        grace_period_seconds=config.registration.shutdown_grace_seconds.as_float(),
    )

    # Application (use cases)
    registration_lifecycle = providers.Singleton(
        RegistrationLifecycle,
        descriptor=service_descriptor,
        gateway=registry_gateway,
        scheduler=heartbeat_scheduler,
        enabled=config.registration.enabled,
    )

    get_registration_status_use_case = providers.Factory(
        GetRegistrationStatusUseCase,
        registration_lifecycle=registration_lifecycle,
    )


# -------------------------
# Global Container Instance
# -------------------------
_app_container: AppContainer | None = None


def init_container(settings: AppSettings) -> AppContainer:
    """Initialize global container with application settings."""

    global _app_container

    container = AppContainer()
    container.config.from_pydantic(settings)
    _app_container = container
    return container


def get_container() -> AppContainer:
    """Get the initialized global container."""

    if _app_container is None:
        raise RuntimeError("Container has not been initialized yet")

    return _app_container


@asynccontextmanager
async def app_lifespan():
    """
    Start the registration lifecycle on enter and stop it on exit.

    The initial registration is awaited here, so startup is delayed by at
    most one registry timeout. Registration failures never abort startup.
    """
    container = get_container()
    lifecycle = container.registration_lifecycle()

    await lifecycle.start()
    logger.info("container.registration.started", state=lifecycle.state.value)
    try:
        yield container
    finally:
        await lifecycle.stop()
        logger.info("container.registration.shutdown")
