"""
Keyed Lock
Per-key asyncio locks that serialize work on one key without blocking other keys
"""
import asyncio
from contextlib import asynccontextmanager
from typing import AsyncIterator, Dict


class KeyedLock:
    """
    Hands out one asyncio.Lock per key.

    Locks are reference-counted and dropped once no task holds or waits on
    them, so the table only grows with the number of keys in flight.
    """

    def __init__(self):
        self._locks: Dict[str, asyncio.Lock] = {}
        self._waiters: Dict[str, int] = {}

    @asynccontextmanager
    async def hold(self, key: str) -> AsyncIterator[None]:
        lock = self._locks.get(key)
        if lock is None:
            lock = asyncio.Lock()
            self._locks[key] = lock
        self._waiters[key] = self._waiters.get(key, 0) + 1

        try:
            async with lock:
                yield
        finally:
            self._waiters[key] -= 1
            if self._waiters[key] == 0:
                del self._waiters[key]
                del self._locks[key]

    def active_keys(self) -> int:
        """Number of keys currently held or waited on"""
        return len(self._locks)
