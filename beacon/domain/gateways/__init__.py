"""
Gateways Package - Domain Layer

Interfaces for communicating with the registry. The HTTP implementation
lives in the infrastructure layer.
"""

from .registry_gateway import IRegistryGateway

__all__ = ["IRegistryGateway"]
