"""
Tiny fixed-window rate limiter keyed by client address.
Why: keep a single crawler from monopolizing the browser.
"""

import threading
import time
from typing import Callable, Dict, Tuple


class RateLimiter:
    def __init__(
        self,
        max_requests: int = 100,
        window_seconds: int = 15 * 60,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.max_requests = max_requests
        self.window_seconds = window_seconds
        self._clock = clock
        self._windows: Dict[str, Tuple[float, int]] = {}  # client -> (window_start, count)
        self._last_prune = clock()
        self._lock = threading.Lock()

    def _prune(self, now: float) -> None:
        # Caller holds the lock; runs at most once per window
        if now - self._last_prune < self.window_seconds:
            return
        expired = [c for c, (start, _) in self._windows.items() if now - start >= self.window_seconds]
        for client in expired:
            del self._windows[client]
        self._last_prune = now

    def allow(self, client: str) -> bool:
        now = self._clock()
        with self._lock:
            self._prune(now)
            start, count = self._windows.get(client, (now, 0))
            if now - start >= self.window_seconds:
                start, count = now, 0
            if count >= self.max_requests:
                self._windows[client] = (start, count)
                return False
            self._windows[client] = (start, count + 1)
            return True

    def retry_after(self, client: str) -> int:
        """Seconds until the client's current window resets."""
        now = self._clock()
        with self._lock:
            start, _ = self._windows.get(client, (now, 0))
        return max(0, int(start + self.window_seconds - now))

    def tracked_clients(self) -> int:
        with self._lock:
            return len(self._windows)

    def reset(self) -> None:
        with self._lock:
            self._windows.clear()
            self._last_prune = self._clock()
