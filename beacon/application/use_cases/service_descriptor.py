"""Builds the immutable service descriptor from configuration values."""

from __future__ import annotations

from types import MappingProxyType
from typing import Any, Iterable, Mapping, Optional

from beacon.domain.entities.errors import ConfigError
from beacon.domain.entities.service_descriptor import ServiceDescriptor


def build_service_descriptor(
    *,
    name: str,
    host: str,
    port: int,
    operations: Optional[Iterable[str]] = None,
    metadata: Optional[Mapping[str, Any]] = None,
    framework: str = "FastAPI",
    version: str = "1.0.0",
) -> ServiceDescriptor:
    """
    Validate configuration values and freeze them into a ``ServiceDescriptor``.

    Raises:
        ConfigError: If the name or host is blank, or the port is out of range.
    """
    name = (name or "").strip()
    host = (host or "").strip()

    if not name:
        raise ConfigError("Service name must not be empty")
    if not host or "/" in host or " " in host:
        raise ConfigError(
            f"Malformed service host: {host!r}", {"host": host}
        )
    if isinstance(port, bool) or not isinstance(port, int) or not 1 <= port <= 65535:
        raise ConfigError(
            f"Service port must be between 1 and 65535, got {port!r}",
            {"port": port},
        )

    return ServiceDescriptor(
        name=name,
        host=host,
        port=port,
        operations=tuple(operations or ()),
        metadata=_freeze(metadata or {}),
        framework=framework,
        version=version,
    )


def _freeze(value: Any) -> Any:
    """Recursively turn mappings into read-only proxies and sequences into tuples."""
    if isinstance(value, Mapping):
        return MappingProxyType({key: _freeze(item) for key, item in value.items()})
    if isinstance(value, (list, tuple, set, frozenset)):
        return tuple(_freeze(item) for item in value)
    return value
