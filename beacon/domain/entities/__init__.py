"""
Entities Package - Domain Layer
"""

from .errors import (
    ConfigError,
    DomainError,
    LifecycleStateError,
    RegistrationRejectedError,
    RegistryError,
    RegistryTransportError,
    SchedulerAlreadyRunningError,
)
from .registration import (
    HeartbeatOutcome,
    HeartbeatResult,
    LifecycleState,
    RegistrationStatus,
)
from .service_descriptor import ServiceDescriptor

__all__ = [
    "ConfigError",
    "DomainError",
    "HeartbeatOutcome",
    "HeartbeatResult",
    "LifecycleState",
    "LifecycleStateError",
    "RegistrationRejectedError",
    "RegistrationStatus",
    "RegistryError",
    "RegistryTransportError",
    "SchedulerAlreadyRunningError",
    "ServiceDescriptor",
]
