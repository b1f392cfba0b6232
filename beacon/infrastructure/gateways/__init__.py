"""
Gateways Package - Infrastructure Layer

Concrete implementations of the gateway interfaces defined in the domain
layer.
"""

from .registry_gateway import RegistryGateway

__all__ = ["RegistryGateway"]
