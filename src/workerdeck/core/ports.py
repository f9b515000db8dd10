# src/workerdeck/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the core.

The scheduler depends on Protocols instead of concrete implementations.
This keeps the console front-end and the simulated work swappable and makes testing easier.
"""

from collections.abc import Awaitable, Callable
from typing import Protocol

WorkBody = Callable[[], Awaitable[float]]
# Async unit of work. Returns its own duration in seconds.
# Cancellation arrives as asyncio.CancelledError at the body's await points.


class LogSink(Protocol):
    """
    Activity log the workers report into.

    Called from any coroutine (and from the console thread), so implementations
    must tolerate concurrent calls. The sink stamps the time itself.
    """

    def log_message(self, text: str) -> None: ...
