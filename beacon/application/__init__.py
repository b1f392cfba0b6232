"""
Application module - Application Layer

Use cases that assemble the service descriptor and drive registration and
heartbeating, plus the DTOs exchanged with the registry and the host API.
"""
