"""
Infrastructure module - Infrastructure Layer

Concrete implementations of the domain contracts: the httpx registry
gateway and the asyncio heartbeat scheduler.
"""
