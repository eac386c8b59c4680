from __future__ import annotations

import threading
import time
from collections.abc import Callable
from dataclasses import dataclass

from . import config
from .models import AudioInfo


@dataclass(frozen=True)
class CacheEntry:
    data: AudioInfo
    timestamp: float


class ResponseCache:
    """In-memory extraction results with lazy expiry.

    Stale entries are dropped when they are looked up, and swept in bulk
    whenever a write pushes the cache past ``max_entries``. There is no
    background timer, so the cache may stay above the ceiling until the
    entries in it actually expire.
    """

    def __init__(
        self,
        ttl: float = config.CACHE_TTL_SECONDS,
        max_entries: int = config.CACHE_MAX_ENTRIES,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.ttl = ttl
        self.max_entries = max_entries
        self._clock = clock
        self._entries: dict[str, CacheEntry] = {}
        self._lock = threading.Lock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def get(self, key: str) -> AudioInfo | None:
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            if self._clock() - entry.timestamp < self.ttl:
                return entry.data
            del self._entries[key]
            return None

    def set(self, key: str, value: AudioInfo) -> None:
        with self._lock:
            now = self._clock()
            self._entries[key] = CacheEntry(data=value, timestamp=now)
            if len(self._entries) > self.max_entries:
                self._sweep(now)

    def _sweep(self, now: float) -> None:
        stale_keys = [
            key
            for key, entry in self._entries.items()
            if now - entry.timestamp > self.ttl
        ]
        for key in stale_keys:
            del self._entries[key]
