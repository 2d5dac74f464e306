"""
In-memory TTL cache for rendered pages.
Why: avoid repeated browser renders of the same URL within the TTL.
"""

import threading
import time
from typing import Callable, Dict, Optional, Tuple

_Entry = Tuple[str, float]  # (html, expires_at)


class RenderCache:
    def __init__(
        self,
        ttl_seconds: float = 3600,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._data: Dict[str, _Entry] = {}
        self._lock = threading.Lock()
        self._hits = 0
        self._misses = 0

    def _expired(self, expires_at: float, now: float) -> bool:
        # expires_at == 0 marks an entry without TTL
        return bool(expires_at) and now >= expires_at

    def get(self, key: str) -> Optional[str]:
        now = self._clock()
        with self._lock:
            entry = self._data.get(key)
            if entry is None:
                self._misses += 1
                return None
            value, expires_at = entry
            if self._expired(expires_at, now):
                del self._data[key]
                self._misses += 1
                return None
            self._hits += 1
            return value

    def set(self, key: str, value: str) -> None:
        expires_at = self._clock() + self.ttl_seconds if self.ttl_seconds > 0 else 0.0
        with self._lock:
            self._data[key] = (value, expires_at)

    def delete(self, key: str) -> int:
        with self._lock:
            return 1 if self._data.pop(key, None) is not None else 0

    def clear(self) -> None:
        with self._lock:
            self._data.clear()

    def purge_expired(self) -> int:
        """Drop every expired entry. Returns how many were removed."""
        now = self._clock()
        with self._lock:
            stale = [k for k, (_, exp) in self._data.items() if self._expired(exp, now)]
            for key in stale:
                del self._data[key]
        return len(stale)

    def stats(self) -> Dict[str, int]:
        """Snapshot of hit/miss counters and live entry sizes.

        Counters cover the whole process lifetime; clear() does not reset them.
        """
        now = self._clock()
        with self._lock:
            live = [
                (k, v) for k, (v, exp) in self._data.items() if not self._expired(exp, now)
            ]
            return {
                "hits": self._hits,
                "misses": self._misses,
                "keys": len(live),
                "ksize": sum(len(k) for k, _ in live),
                "vsize": sum(len(v) for _, v in live),
            }

    def __len__(self) -> int:
        return self.stats()["keys"]
