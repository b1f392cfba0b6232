from __future__ import annotations

import pytest

from beacon.domain.entities.errors import (
    RegistrationRejectedError,
    RegistryError,
    RegistryTransportError,
)
from beacon.domain.entities.registration import HeartbeatOutcome, HeartbeatResult


@pytest.mark.parametrize("status_code", [200, 201, 204, 299])
def test_heartbeat_outcome_accepts_2xx(status_code: int) -> None:
    outcome = HeartbeatOutcome.from_status(status_code)

    assert outcome.result is HeartbeatResult.ACCEPTED
    assert outcome.accepted is True


def test_heartbeat_outcome_distinguishes_not_found() -> None:
    outcome = HeartbeatOutcome.from_status(404, "unknown service")

    assert outcome.result is HeartbeatResult.NOT_FOUND
    assert outcome.body == "unknown service"
    assert outcome.accepted is False


@pytest.mark.parametrize("status_code", [302, 400, 409, 500, 503])
def test_heartbeat_outcome_rejects_other_statuses(status_code: int) -> None:
    outcome = HeartbeatOutcome.from_status(status_code, "nope")

    assert outcome.result is HeartbeatResult.REJECTED
    assert outcome.status_code == status_code


def test_registry_errors_carry_details() -> None:
    rejected = RegistrationRejectedError(422, "invalid payload")
    transport = RegistryTransportError("http://registry", "connection refused")

    assert isinstance(rejected, RegistryError)
    assert isinstance(transport, RegistryError)
    assert rejected.details == {"status_code": 422, "body": "invalid payload"}
    assert "HTTP 422" in str(rejected)
    assert transport.reason == "connection refused"
    assert "http://registry" in transport.message
