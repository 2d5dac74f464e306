"""Orchestrator: single entry point for render requests.

Validates the URL, serves from the render cache when possible, otherwise
drives the renderer and stores the fresh markup.
"""

from dataclasses import dataclass
from typing import Optional
from urllib.parse import urlsplit, urlunsplit

from prerender.core.cache import RenderCache
from prerender.core.errors import InvalidInput, RenderFailed
from prerender.core.logging import get_logger
from prerender.core.metrics import _Metrics, metrics as default_metrics
from prerender.render.renderer import Renderer, RenderOptions

logger = get_logger(__name__)

DEFAULT_KEY_PREFIX = "prerender:"


@dataclass(frozen=True)
class RenderResult:
    html: str
    cache_hit: bool


def normalize_url(url: str) -> str:
    """Lower-case scheme and host; userinfo, path, query and fragment are kept as-is.

    Unparseable input is only stripped so it still maps to a stable key.
    """
    url = url.strip()
    try:
        parts = urlsplit(url)
    except ValueError:
        return url
    userinfo, at, hostport = parts.netloc.rpartition("@")
    return urlunsplit(
        (parts.scheme.lower(), userinfo + at + hostport.lower(), parts.path, parts.query, parts.fragment)
    )


def validate_url(url: Optional[str]) -> str:
    """Return the stripped URL or raise InvalidInput.

    Only absolute URLs (scheme + host) are accepted.
    """
    if url is None or not url.strip():
        raise InvalidInput("URL parameter is required")
    url = url.strip()
    try:
        parts = urlsplit(url)
        host = parts.hostname
    except ValueError:
        raise InvalidInput("Invalid URL provided")
    if not parts.scheme or not host:
        raise InvalidInput("Invalid URL provided")
    return url


class RenderOrchestrator:
    def __init__(
        self,
        cache: RenderCache,
        renderer: Renderer,
        options: Optional[RenderOptions] = None,
        key_prefix: str = DEFAULT_KEY_PREFIX,
        metrics: Optional[_Metrics] = None,
    ) -> None:
        self.cache = cache
        self.renderer = renderer
        self.options = options or RenderOptions()
        self.key_prefix = key_prefix
        self.metrics = metrics or default_metrics

    def cache_key(self, url: str) -> str:
        return f"{self.key_prefix}{normalize_url(url)}"

    async def render(self, url: Optional[str]) -> RenderResult:
        """Serve cached markup or render ``url`` fresh.

        Raises:
            InvalidInput: the URL is missing or not absolute.
            RenderFailed: the renderer failed; nothing is cached.
        """
        target = validate_url(url)
        key = self.cache_key(target)

        cached = self.cache.get(key)
        if cached is not None:
            logger.info(f"Cache hit for: {target}", extra={"url": target, "cache": "HIT"})
            self.metrics.record_cache_hit()
            return RenderResult(html=cached, cache_hit=True)

        logger.info(f"Prerendering: {target}", extra={"url": target, "cache": "MISS"})
        try:
            html = await self.renderer.render(target, self.options)
        except RenderFailed as e:
            self.metrics.record_render(ok=False)
            logger.error(f"Prerender error for {target}: {e.message}")
            raise
        except Exception as e:
            self.metrics.record_render(ok=False)
            logger.error(f"Prerender error for {target}: {e}", exc_info=True)
            raise RenderFailed(str(e)) from e

        self.metrics.record_render(ok=True)
        self.cache.set(key, html)
        logger.info(f"Successfully prerendered: {target}")
        return RenderResult(html=html, cache_hit=False)

    def invalidate(self, url: Optional[str] = None) -> str:
        """Drop one URL's cached render, or everything when ``url`` is empty."""
        if url:
            self.cache.delete(self.cache_key(url))
            logger.info(f"Cache cleared for {url}")
            return f"Cache cleared for {url}"
        self.cache.clear()
        logger.info("All cache cleared")
        return "All cache cleared"
