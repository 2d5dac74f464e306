"""Browser rendering backends."""

from .renderer import PlaywrightRenderer, Renderer, RenderOptions, Viewport, browser_session

__all__ = ["PlaywrightRenderer", "Renderer", "RenderOptions", "Viewport", "browser_session"]
