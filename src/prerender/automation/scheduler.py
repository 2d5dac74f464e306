"""
APScheduler job that sweeps expired entries out of the render cache.
"""

import logging

from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.interval import IntervalTrigger

from prerender.core.cache import RenderCache

logger = logging.getLogger(__name__)


class CacheSweeper:
    """Periodic expiry sweep; reclaims memory only, get() already enforces TTL."""

    def __init__(self, cache: RenderCache, interval_seconds: int = 600):
        self.cache = cache
        self.interval_seconds = interval_seconds
        self.scheduler = AsyncIOScheduler()

    def sweep(self) -> int:
        removed = self.cache.purge_expired()
        if removed:
            logger.info(f"Cache sweep removed {removed} expired entries")
        return removed

    @property
    def running(self) -> bool:
        return self.scheduler.running

    def start(self):
        """Start the sweep; must be called from inside a running event loop."""
        self.scheduler.add_job(
            self.sweep,
            trigger=IntervalTrigger(seconds=self.interval_seconds),
            id='render_cache_sweep',
            replace_existing=True
        )
        self.scheduler.start()
        logger.info(f"Cache sweeper started (every {self.interval_seconds}s)")

    def stop(self):
        if self.scheduler.running:
            self.scheduler.shutdown(wait=False)
            logger.info("Cache sweeper stopped")
