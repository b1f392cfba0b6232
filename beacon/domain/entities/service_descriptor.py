"""Immutable description of one registrable service instance."""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Mapping, Tuple

from beacon.shared.consts import HEALTH_CHECK_PATH


@dataclass(frozen=True, slots=True)
class ServiceDescriptor:
    """Name, address and advertised capabilities of a service instance."""

    name: str
    host: str
    port: int
    operations: Tuple[str, ...] = ()
    metadata: Mapping[str, Any] = field(
        default_factory=lambda: MappingProxyType({})
    )
    framework: str = "FastAPI"
    version: str = "1.0.0"

    @property
    def endpoint(self) -> str:
        return f"http://{self.host}:{self.port}"

    @property
    def health_check_url(self) -> str:
        return f"{self.endpoint}{HEALTH_CHECK_PATH}"
