"""
Main module - Main/Composition Root Layer

Sets up configuration, logging and the dependency container, and exposes the
FastAPI application whose lifespan drives registration.
"""

from .config import AppSettings, get_settings
from .container import AppContainer, get_container, init_container

__all__ = [
    "AppSettings",
    "get_settings",
    "AppContainer",
    "init_container",
    "get_container",
]
