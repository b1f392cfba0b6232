"""Registry gateway interface."""

from __future__ import annotations

from abc import ABC, abstractmethod

from beacon.domain.entities.registration import HeartbeatOutcome
from beacon.domain.entities.service_descriptor import ServiceDescriptor


class IRegistryGateway(ABC):
    """Defines the calls a service instance makes against the registry."""

    @abstractmethod
    async def register(self, descriptor: ServiceDescriptor) -> None:
        """
        Announce the instance described by ``descriptor``.

        Raises:
            RegistrationRejectedError: The registry answered with a non-2xx status.
            RegistryTransportError: The registry could not be reached in time.
        """
        raise NotImplementedError

    @abstractmethod
    async def heartbeat(self, service_name: str) -> HeartbeatOutcome:
        """
        Refresh the liveness of ``service_name``.

        Raises:
            RegistryTransportError: The registry could not be reached in time.
        """
        raise NotImplementedError

    @abstractmethod
    async def close(self) -> None:
        """Release pooled connections. Safe to call more than once."""
        raise NotImplementedError
