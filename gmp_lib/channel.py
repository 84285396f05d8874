"""
gmp_lib/channel.py

Single-flight command gate.

GMP carries no request ids, so a response can only be matched to the
command in flight. CommandChannel admits one operation at a time and queues
the rest in submission order (asyncio.Lock wakes waiters FIFO). The gate
itself never fails; errors surface from the guarded operation and the gate
is released either way.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Awaitable, Callable, Optional, TypeVar

T = TypeVar("T")

logger = logging.getLogger(__name__)


class CommandChannel:
    def __init__(self, *, name: str = "gmp") -> None:
        self._name = name
        self._lock = asyncio.Lock()
        self._waiting = 0
        self._current: Optional[str] = None

    @property
    def in_flight(self) -> bool:
        return self._lock.locked()

    @property
    def pending(self) -> int:
        """Number of operations queued behind the one in flight."""
        return self._waiting

    @property
    def current(self) -> Optional[str]:
        return self._current

    async def run(self, operation: Callable[[], Awaitable[T]], *, label: Optional[str] = None) -> T:
        self._waiting += 1
        try:
            await self._lock.acquire()
        finally:
            self._waiting -= 1
        self._current = label
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug("%s channel: start %s (queued=%d)", self._name, label or "command", self._waiting)
        try:
            return await operation()
        finally:
            self._current = None
            self._lock.release()


__all__ = ["CommandChannel"]
