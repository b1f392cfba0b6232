"""
Presentation module - Presentation Layer

HTTP surface the host service exposes for the registry: the health check
advertised in the registration payload.
"""
