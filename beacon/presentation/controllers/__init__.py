"""
Controllers Package - Presentation Layer

FastAPI routers mapping HTTP requests onto application use cases.
"""

from .system_controller import router as system_router

__all__ = ["system_router"]
