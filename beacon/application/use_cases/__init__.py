"""
Use Cases Package - Application Layer
"""

from .registration_lifecycle import RegistrationLifecycle
from .registration_status import GetRegistrationStatusUseCase
from .service_descriptor import build_service_descriptor

__all__ = [
    "GetRegistrationStatusUseCase",
    "RegistrationLifecycle",
    "build_service_descriptor",
]
