from __future__ import annotations

import asyncio
from contextlib import asynccontextmanager
from datetime import date
from typing import AsyncIterator

SlotKey = tuple[str, date, str]


class SlotAdmissionGate:
    """One asyncio lock per (room, date, slot) so read-decide-write runs single-file."""

    def __init__(self, *, enabled: bool = True) -> None:
        self.enabled = enabled
        self._locks: dict[SlotKey, asyncio.Lock] = {}
        self._waiters: dict[SlotKey, int] = {}

    @asynccontextmanager
    async def hold(self, room_id: str, day: date, slot_id: str) -> AsyncIterator[None]:
        if not self.enabled:
            yield
            return

        key = (room_id, day, slot_id)
        lock = self._locks.setdefault(key, asyncio.Lock())
        self._waiters[key] = self._waiters.get(key, 0) + 1
        try:
            async with lock:
                yield
        finally:
            self._waiters[key] -= 1
            if self._waiters[key] == 0:
                del self._waiters[key]
                del self._locks[key]

    def active_keys(self) -> set[SlotKey]:
        return set(self._locks)
