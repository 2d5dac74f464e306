"""
In-memory metrics for /metrics endpoint (rough p50/p95).
Why: quick visibility into render load without Prometheus.
"""

from collections import deque
from typing import Deque, Dict, List

_MAX_LATENCY_SAMPLES = 1000


def _percentile(values: List[int], p: float) -> int:
    if not values:
        return 0
    idx = max(0, min(len(values) - 1, int(len(values) * p)))
    return sorted(values)[idx]


class _Metrics:
    def __init__(self, max_samples: int = _MAX_LATENCY_SAMPLES) -> None:
        self.total_requests = 0
        self.total_errors = 0
        self.cache_hits = 0
        self.renders = 0
        self.render_failures = 0
        self._latencies: Deque[int] = deque(maxlen=max_samples)

    def increment_requests(self) -> None:
        self.total_requests += 1

    def increment_errors(self) -> None:
        self.total_errors += 1

    def record_cache_hit(self) -> None:
        self.cache_hits += 1

    def record_render(self, ok: bool) -> None:
        self.renders += 1
        if not ok:
            self.render_failures += 1

    def record_latency(self, ms: int) -> None:
        self._latencies.append(ms)

    def snapshot(self) -> Dict[str, int]:
        lat = list(self._latencies)
        return {
            "total_requests": self.total_requests,
            "total_errors": self.total_errors,
            "cache_hits": self.cache_hits,
            "renders": self.renders,
            "render_failures": self.render_failures,
            "p50_ms": _percentile(lat, 0.50),
            "p95_ms": _percentile(lat, 0.95),
        }


metrics = _Metrics()
