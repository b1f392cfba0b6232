"""Infrastructure services."""

from .heartbeat_scheduler import HeartbeatScheduler

__all__ = ["HeartbeatScheduler"]
