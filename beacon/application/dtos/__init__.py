"""
DTOs Package - Application Layer

Pydantic models used on the wire: registry request bodies and the host's
health payload.
"""

from .registration_dto import (
    HealthDTO,
    HeartbeatOutcomeDTO,
    RegistrationRequestDTO,
    RegistrationStatusDTO,
)

__all__ = [
    "HealthDTO",
    "HeartbeatOutcomeDTO",
    "RegistrationRequestDTO",
    "RegistrationStatusDTO",
]
