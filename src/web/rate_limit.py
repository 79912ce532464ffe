"""Fixed-window request rate limiter for the web API."""

from __future__ import annotations

import threading
import time
from typing import Callable


class RateLimiter:
    """Allows at most ``limit`` requests per client in each ``window_seconds``.

    Safe to share between request threads.
    """

    def __init__(
        self,
        limit: int,
        window_seconds: float = 60.0,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.limit = max(1, limit)
        self.window_seconds = window_seconds
        self._clock = clock
        self._windows: dict[str, tuple[float, int]] = {}
        self._last_prune = clock()
        self._lock = threading.Lock()

    def allow(self, client: str) -> bool:
        """Record a request from ``client``; False when over the limit."""
        with self._lock:
            now = self._clock()
            if now - self._last_prune >= self.window_seconds:
                self._prune(now)
            started, count = self._windows.get(client, (now, 0))
            if now - started >= self.window_seconds:
                started, count = now, 0
            if count >= self.limit:
                self._windows[client] = (started, count)
                return False
            self._windows[client] = (started, count + 1)
            return True

    def _prune(self, now: float) -> None:
        """Drop windows that have expired. Caller holds the lock."""
        self._windows = {
            client: window
            for client, window in self._windows.items()
            if now - window[0] < self.window_seconds
        }
        self._last_prune = now

    def reset(self) -> None:
        with self._lock:
            self._windows.clear()
