"""Use case for reporting registration state on the host's health endpoint."""

from beacon.application.dtos.registration_dto import HealthDTO, RegistrationStatusDTO
from beacon.application.use_cases.registration_lifecycle import RegistrationLifecycle


class GetRegistrationStatusUseCase:
    """Use case responsible for returning the host health payload."""

    def __init__(self, registration_lifecycle: RegistrationLifecycle) -> None:
        self._lifecycle = registration_lifecycle

    async def execute(self) -> HealthDTO:
        status = self._lifecycle.status()
        return HealthDTO(
            service=status.service_name,
            registration=RegistrationStatusDTO.from_domain(status),
        )
