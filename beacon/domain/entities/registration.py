"""
Registration domain entities.

Value objects describing heartbeat responses and the observable state of
the registration lifecycle.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Optional


class LifecycleState(str, Enum):
    """States of the registration lifecycle."""

    STOPPED = "stopped"
    STARTING = "starting"
    RUNNING = "running"
    STOPPING = "stopping"
    DISABLED = "disabled"


class HeartbeatResult(str, Enum):
    """How the registry answered a heartbeat."""

    ACCEPTED = "accepted"
    NOT_FOUND = "not_found"
    REJECTED = "rejected"


@dataclass(frozen=True, slots=True)
class HeartbeatOutcome:
    """Classified registry answer to a heartbeat call."""

    result: HeartbeatResult
    status_code: int
    body: str = ""
    received_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @classmethod
    def from_status(cls, status_code: int, body: str = "") -> "HeartbeatOutcome":
        if 200 <= status_code < 300:
            result = HeartbeatResult.ACCEPTED
        elif status_code == 404:
            result = HeartbeatResult.NOT_FOUND
        else:
            result = HeartbeatResult.REJECTED
        return cls(result=result, status_code=status_code, body=body)

    @property
    def accepted(self) -> bool:
        return self.result is HeartbeatResult.ACCEPTED


@dataclass(slots=True)
class RegistrationStatus:
    """Point-in-time snapshot of the registration lifecycle."""

    service_name: str
    state: LifecycleState
    registered: bool = False
    reregistration_pending: bool = False
    last_heartbeat: Optional[HeartbeatOutcome] = None
    last_heartbeat_error: Optional[str] = None
