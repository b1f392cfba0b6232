"""
Domain module - Domain Layer

Holds the service descriptor, heartbeat outcomes, lifecycle states, the
error taxonomy and the contracts (gateways and ports) that the
infrastructure layer implements. It has no framework dependencies.
"""
