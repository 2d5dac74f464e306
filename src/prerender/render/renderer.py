"""
Headless-browser renderer built on Playwright's async API.

One Chromium process is launched per render and always closed afterwards,
so a crashed or hung page never leaks into the next request.
"""

from contextlib import asynccontextmanager
from dataclasses import dataclass, field
from typing import AsyncIterator, List, Protocol

from playwright.async_api import Browser, Playwright, async_playwright

from prerender.config.settings import DEFAULT_BROWSER_ARGS, DEFAULT_USER_AGENT, RenderSettings
from prerender.core.errors import RenderFailed
from prerender.core.logging import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class Viewport:
    width: int = 1200
    height: int = 800


@dataclass(frozen=True)
class RenderOptions:
    navigation_timeout_ms: int = 30000
    settle_delay_ms: int = 2000
    viewport: Viewport = Viewport()
    user_agent: str = DEFAULT_USER_AGENT
    browser_args: List[str] = field(default_factory=lambda: list(DEFAULT_BROWSER_ARGS))

    @classmethod
    def from_settings(cls, render_settings: RenderSettings) -> "RenderOptions":
        return cls(
            navigation_timeout_ms=render_settings.navigation_timeout_ms,
            settle_delay_ms=render_settings.settle_delay_ms,
            viewport=Viewport(render_settings.viewport_width, render_settings.viewport_height),
            user_agent=render_settings.user_agent,
            browser_args=list(render_settings.browser_args),
        )


class Renderer(Protocol):
    async def render(self, url: str, options: RenderOptions) -> str:
        """Return the fully rendered markup of ``url`` or raise RenderFailed."""
        ...


@asynccontextmanager
async def browser_session(playwright: Playwright, args: List[str]) -> AsyncIterator[Browser]:
    """Launch headless Chromium and close it on every exit path.

    A failing close is logged and never replaces the render's own outcome.
    """
    browser = await playwright.chromium.launch(headless=True, args=args)
    try:
        yield browser
    finally:
        try:
            await browser.close()
        except Exception as e:
            logger.warning(f"Failed to close browser session: {e}")


class PlaywrightRenderer:
    async def render(self, url: str, options: RenderOptions) -> str:
        try:
            async with async_playwright() as p:
                async with browser_session(p, options.browser_args) as browser:
                    page = await browser.new_page(
                        user_agent=options.user_agent,
                        viewport={
                            "width": options.viewport.width,
                            "height": options.viewport.height,
                        },
                    )
                    await page.goto(
                        url,
                        wait_until="networkidle",
                        timeout=options.navigation_timeout_ms,
                    )
                    # Let deferred client-side work finish after network-idle
                    await page.wait_for_timeout(options.settle_delay_ms)
                    return await page.content()
        except RenderFailed:
            raise
        except Exception as e:
            raise RenderFailed(str(e)) from e
