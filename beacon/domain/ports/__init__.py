"""Ports Package - Domain Layer"""

from .heartbeat_scheduler import IHeartbeatScheduler, TickCallback

__all__ = ["IHeartbeatScheduler", "TickCallback"]
