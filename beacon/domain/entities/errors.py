"""
Domain Errors

Error taxonomy for registration and heartbeating. Registry errors are always
recoverable and never leave the lifecycle; configuration and lifecycle
errors are programming or deployment mistakes and do propagate.
"""

from typing import Any, Dict, Optional


class DomainError(Exception):
    """Base class for domain errors."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)


class ConfigError(DomainError):
    """Raised when registration settings are invalid. Fatal at startup."""


class RegistryError(DomainError):
    """Base class for failures talking to the registry."""


class RegistryTransportError(RegistryError):
    """Raised on connection refused, DNS failure or timeout."""

    def __init__(self, url: str, reason: str):
        super().__init__(
            f"Failed to communicate with registry at {url}: {reason}",
            {"url": url, "reason": reason},
        )
        self.url = url
        self.reason = reason


class RegistrationRejectedError(RegistryError):
    """Raised when the registry answers a registration with a non-2xx status."""

    def __init__(self, status_code: int, body: str):
        super().__init__(
            f"Registry rejected registration with HTTP {status_code}: {body}",
            {"status_code": status_code, "body": body},
        )
        self.status_code = status_code
        self.body = body


class LifecycleStateError(DomainError):
    """Raised when the registration lifecycle is driven out of order."""


class SchedulerAlreadyRunningError(LifecycleStateError):
    """Raised when a heartbeat scheduler is started twice."""
