"""FastAPI app serving prerendered HTML to crawlers."""

from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import HTMLResponse, JSONResponse

from prerender import __version__
from prerender.automation.scheduler import CacheSweeper
from prerender.config.settings import Settings, settings as default_settings
from prerender.core.cache import RenderCache
from prerender.core.errors import InvalidInput, RenderFailed
from prerender.core.metrics import metrics
from prerender.core.middleware import ObservabilityMiddleware, RateLimitMiddleware
from prerender.core.rate_limit import RateLimiter
from prerender.core.schemas import (
    CacheStats,
    ClearCacheRequest,
    ErrorResponse,
    HealthResponse,
    MessageResponse,
)
from prerender.orchestrator import RenderOrchestrator
from prerender.render.renderer import PlaywrightRenderer, Renderer, RenderOptions


def create_app(
    settings: Optional[Settings] = None,
    cache: Optional[RenderCache] = None,
    renderer: Optional[Renderer] = None,
) -> FastAPI:
    """Build the app around an explicitly owned cache and renderer.

    Tests pass their own cache and renderer doubles; production uses the
    Playwright renderer and a fresh cache sized from settings.
    """
    settings = settings or default_settings
    cache = cache if cache is not None else RenderCache(ttl_seconds=settings.cache.ttl_seconds)
    orchestrator = RenderOrchestrator(
        cache=cache,
        renderer=renderer or PlaywrightRenderer(),
        options=RenderOptions.from_settings(settings.render),
        key_prefix=settings.cache.key_prefix,
    )
    sweeper = CacheSweeper(cache, interval_seconds=settings.cache.check_period_seconds)
    limiter = RateLimiter(
        max_requests=settings.rate_limit.max_requests,
        window_seconds=settings.rate_limit.window_seconds,
    )

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        sweeper.start()
        try:
            yield
        finally:
            sweeper.stop()
            limiter.reset()
            cache.clear()

    app = FastAPI(title="Prerender Service", version=__version__, lifespan=lifespan)
    app.state.settings = settings
    app.state.cache = cache
    app.state.orchestrator = orchestrator
    app.state.sweeper = sweeper
    app.state.limiter = limiter

    # Last added runs outermost
    if settings.rate_limit.enabled:
        app.add_middleware(RateLimitMiddleware, limiter=limiter)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.server.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(ObservabilityMiddleware)

    @app.exception_handler(InvalidInput)
    async def invalid_input_handler(request: Request, exc: InvalidInput) -> JSONResponse:
        return JSONResponse(
            ErrorResponse(error=exc.message).model_dump(exclude_none=True),
            status_code=exc.status_code,
        )

    @app.exception_handler(RenderFailed)
    async def render_failed_handler(request: Request, exc: RenderFailed) -> JSONResponse:
        return JSONResponse(
            ErrorResponse(error="Failed to prerender page", message=exc.message).model_dump(),
            status_code=exc.status_code,
        )

    @app.get("/render", response_class=HTMLResponse)
    async def render(request: Request, url: Optional[str] = None) -> HTMLResponse:
        """Return rendered markup for ``url``; cache status only in a header."""
        result = await request.app.state.orchestrator.render(url)
        return HTMLResponse(
            content=result.html,
            headers={"X-Prerender-Cache": "HIT" if result.cache_hit else "MISS"},
        )

    @app.post("/clear-cache", response_model=MessageResponse)
    async def clear_cache(
        request: Request, body: Optional[ClearCacheRequest] = None
    ) -> MessageResponse:
        message = request.app.state.orchestrator.invalidate(body.url if body else None)
        return MessageResponse(message=message)

    @app.get("/health", response_model=HealthResponse)
    async def health(request: Request) -> HealthResponse:
        """Health check with cache statistics."""
        return HealthResponse(cache_stats=CacheStats(**request.app.state.cache.stats()))

    @app.get("/metrics")
    async def get_metrics() -> JSONResponse:
        return JSONResponse(metrics.snapshot())

    return app


app = create_app()
