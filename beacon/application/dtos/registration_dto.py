"""DTOs for registry request bodies and the host's registration status."""

from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, List, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field

from beacon.domain.entities.registration import (
    HeartbeatOutcome,
    HeartbeatResult,
    LifecycleState,
    RegistrationStatus,
)
from beacon.domain.entities.service_descriptor import ServiceDescriptor


class RegistrationRequestDTO(BaseModel):
    """Body of ``POST /api/registry/register``."""

    service_name: str = Field(alias="serviceName")
    endpoint: str
    health_check: str = Field(alias="healthCheck")
    operations: List[str] = Field(default_factory=list)
    port: int
    framework: str
    version: str
    metadata: Dict[str, Any] = Field(default_factory=dict)

    model_config = ConfigDict(populate_by_name=True)

    @classmethod
    def from_domain(cls, descriptor: ServiceDescriptor) -> "RegistrationRequestDTO":
        return cls(
            service_name=descriptor.name,
            endpoint=descriptor.endpoint,
            health_check=descriptor.health_check_url,
            operations=list(descriptor.operations),
            port=descriptor.port,
            framework=descriptor.framework,
            version=descriptor.version,
            metadata=_thaw(descriptor.metadata),
        )

    def to_body(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True, mode="json")


def _thaw(value: Any) -> Any:
    if isinstance(value, Mapping):
        return {key: _thaw(item) for key, item in value.items()}
    if isinstance(value, tuple):
        return [_thaw(item) for item in value]
    return value


class HeartbeatOutcomeDTO(BaseModel):
    """Serializable view of the last heartbeat answer."""

    result: HeartbeatResult = Field(description="Classified registry answer")
    status_code: int = Field(description="HTTP status returned by the registry")
    received_at: datetime = Field(description="When the answer was received")

    @classmethod
    def from_domain(cls, outcome: HeartbeatOutcome) -> "HeartbeatOutcomeDTO":
        return cls(
            result=outcome.result,
            status_code=outcome.status_code,
            received_at=outcome.received_at,
        )


class RegistrationStatusDTO(BaseModel):
    """Registration section of the host's ``/health`` payload."""

    state: LifecycleState = Field(description="Registration lifecycle state")
    registered: bool = Field(
        description="Whether the last registration attempt was accepted"
    )
    reregistration_pending: bool = Field(
        description="Registry forgot this instance, re-registration is queued"
    )
    last_heartbeat: Optional[HeartbeatOutcomeDTO] = None
    last_heartbeat_error: Optional[str] = None

    @classmethod
    def from_domain(cls, status: RegistrationStatus) -> "RegistrationStatusDTO":
        return cls(
            state=status.state,
            registered=status.registered,
            reregistration_pending=status.reregistration_pending,
            last_heartbeat=(
                HeartbeatOutcomeDTO.from_domain(status.last_heartbeat)
                if status.last_heartbeat
                else None
            ),
            last_heartbeat_error=status.last_heartbeat_error,
        )


class HealthDTO(BaseModel):
    """DTO representing the host's ``/health`` response payload."""

    status: str = Field(default="up", description="Process liveness")
    service: str = Field(description="Registered service name")
    registration: RegistrationStatusDTO

    model_config = {
        "json_schema_extra": {
            "example": {
                "status": "up",
                "service": "user-access-service",
                "registration": {
                    "state": "running",
                    "registered": True,
                    "reregistration_pending": False,
                    "last_heartbeat": {
                        "result": "accepted",
                        "status_code": 200,
                        "received_at": "2024-09-09T12:00:00Z",
                    },
                    "last_heartbeat_error": None,
                },
            }
        }
    }
