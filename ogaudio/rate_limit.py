from __future__ import annotations

import threading
import time
from collections.abc import Callable
from dataclasses import dataclass

from . import config


@dataclass
class RateWindowEntry:
    window_start: float
    count: int


class RateLimiter:
    """Fixed-window request counter keyed by client identity.

    Rejected calls are still counted, so a client that keeps calling stays
    rejected until its window rolls over.
    """

    def __init__(
        self,
        max_requests: int = config.RATE_LIMIT_MAX,
        window: float = config.RATE_LIMIT_WINDOW_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.max_requests = max_requests
        self.window = window
        self._clock = clock
        self._windows: dict[str, RateWindowEntry] = {}
        self._lock = threading.Lock()

    def allow(self, client_id: str) -> bool:
        with self._lock:
            now = self._clock()
            entry = self._windows.get(client_id)
            if entry is None or now - entry.window_start > self.window:
                self._windows[client_id] = RateWindowEntry(window_start=now, count=1)
                return True
            entry.count += 1
            return entry.count <= self.max_requests
