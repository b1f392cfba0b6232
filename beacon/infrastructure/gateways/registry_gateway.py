"""Registry gateway implementation - Infrastructure layer."""

from __future__ import annotations

import asyncio
from typing import Any, Dict, Optional
from urllib.parse import quote

import httpx

from beacon.application.dtos.registration_dto import RegistrationRequestDTO
from beacon.domain.entities.errors import (
    RegistrationRejectedError,
    RegistryTransportError,
)
from beacon.domain.entities.registration import HeartbeatOutcome
from beacon.domain.entities.service_descriptor import ServiceDescriptor
from beacon.domain.gateways.registry_gateway import IRegistryGateway
from beacon.shared import get_logger
from beacon.shared.consts import HEARTBEAT_PATH, REGISTER_PATH

logger = get_logger(__name__)


class RegistryGateway(IRegistryGateway):
    """HTTP client for the registry's register and heartbeat endpoints."""

    def __init__(
        self,
        registry_url: str,
        timeout_seconds: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize Registry Gateway.

        Args:
            registry_url: Base URL of the registry server
            timeout_seconds: Upper bound for a single register or heartbeat call
            transport: Optional httpx transport, used to stub the registry
        """
        self.registry_url = registry_url.rstrip("/")
        self.timeout = timeout_seconds
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    async def register(self, descriptor: ServiceDescriptor) -> None:
        url = f"{self.registry_url}{REGISTER_PATH}"
        body = RegistrationRequestDTO.from_domain(descriptor).to_body()

        logger.info(
            "registry.register.request",
            url=url,
            service=descriptor.name,
            endpoint=descriptor.endpoint,
        )
        logger.debug("registry.register.payload", payload=body)

        response = await self._post(url, body)
        if not response.is_success:
            raise RegistrationRejectedError(response.status_code, response.text)

        logger.info(
            "registry.register.response",
            service=descriptor.name,
            status_code=response.status_code,
        )

    async def heartbeat(self, service_name: str) -> HeartbeatOutcome:
        url = f"{self.registry_url}{HEARTBEAT_PATH}/{quote(service_name, safe='')}"

        response = await self._post(url, {})
        outcome = HeartbeatOutcome.from_status(
            response.status_code, "" if response.is_success else response.text
        )
        logger.debug(
            "registry.heartbeat.response",
            service=service_name,
            status_code=response.status_code,
            result=outcome.result.value,
        )
        return outcome

    async def close(self) -> None:
        client, self._client = self._client, None
        if client is not None:
            await client.aclose()
            logger.debug("registry.client.closed", url=self.registry_url)

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(
                timeout=httpx.Timeout(self.timeout),
                transport=self._transport,
                headers={"Content-Type": "application/json"},
            )
        return self._client

    async def _post(self, url: str, body: Dict[str, Any]) -> httpx.Response:
        client = self._get_client()
        try:
            # httpx bounds each phase separately; wait_for bounds the whole call.
            return await asyncio.wait_for(
                client.post(url, json=body), timeout=self.timeout
            )
        except asyncio.TimeoutError as e:
            raise RegistryTransportError(
                url, f"no response within {self.timeout}s"
            ) from e
        except httpx.RequestError as e:
            raise RegistryTransportError(url, str(e) or type(e).__name__) from e
