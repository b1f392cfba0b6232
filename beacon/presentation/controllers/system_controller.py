"""System endpoint exposing the host's health and registration state."""

from dependency_injector.wiring import Provide, inject
from fastapi import APIRouter, Depends

from beacon.application.dtos.registration_dto import HealthDTO
from beacon.application.use_cases.registration_status import (
    GetRegistrationStatusUseCase,
)
from beacon.shared import get_logger

logger = get_logger(__name__)

router = APIRouter(tags=["System"])


@router.get("/health", response_model=HealthDTO)
@inject
async def health(
    get_registration_status_use_case: GetRegistrationStatusUseCase = Depends(
        Provide["get_registration_status_use_case"]
    ),
) -> HealthDTO:
    """Report that the process is serving, with the registration state attached."""
    health_status = await get_registration_status_use_case.execute()
    logger.debug(
        "health.check.success",
        registration_state=health_status.registration.state.value,
    )
    return health_status
