"""Shared test doubles for the render path."""

from typing import List, Optional

import pytest

from prerender.core.cache import RenderCache
from prerender.core.errors import RenderFailed


class FakeClock:
    def __init__(self, now: float = 1_000.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FakeRenderer:
    """Renderer double that records calls and returns canned markup or fails."""

    def __init__(self, html: str = "<html>FRESH</html>", error: Optional[str] = None) -> None:
        self.html = html
        self.error = error
        self.calls: List[str] = []
        self.options = []

    async def render(self, url, options) -> str:
        self.calls.append(url)
        self.options.append(options)
        if self.error is not None:
            raise RenderFailed(self.error)
        return self.html


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def cache(clock):
    return RenderCache(ttl_seconds=3600, clock=clock)


@pytest.fixture
def renderer():
    return FakeRenderer()


@pytest.fixture
def make_renderer():
    return FakeRenderer
