"""
Beacon - service registration and heartbeat client.

Layer Structure:
- Domain: Service descriptor, heartbeat outcomes, errors and gateway contracts
- Application: Descriptor builder, registration lifecycle and DTOs
- Infrastructure: HTTP registry gateway and asyncio heartbeat scheduler
- Presentation: Host-side health endpoint
- Shared: Cross-cutting concerns and shared utilities
- Main: Composition root, application entry point and configuration
"""
