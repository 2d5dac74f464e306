"""Configuration settings for the prerender service."""
import os
from dataclasses import dataclass, field
from typing import List

from dotenv import load_dotenv

load_dotenv()

DEFAULT_USER_AGENT = "Mozilla/5.0 (compatible; PrerenderBot/1.0)"

# Container-friendly Chromium flags
DEFAULT_BROWSER_ARGS = [
    "--no-sandbox",
    "--disable-setuid-sandbox",
    "--disable-dev-shm-usage",
    "--disable-accelerated-2d-canvas",
    "--no-first-run",
    "--no-zygote",
    "--disable-gpu",
]


def _env_int(name: str, default: int) -> int:
    return int(os.getenv(name, default))


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


def _env_list(name: str, default: str) -> List[str]:
    return [item.strip() for item in os.getenv(name, default).split(",") if item.strip()]


@dataclass
class ServerSettings:
    host: str = field(default_factory=lambda: os.getenv("HOST", "0.0.0.0"))
    port: int = field(default_factory=lambda: _env_int("PORT", 3000))
    cors_origins: List[str] = field(default_factory=lambda: _env_list("CORS_ORIGINS", "*"))
    log_level: str = field(default_factory=lambda: os.getenv("LOG_LEVEL", "INFO").upper())


@dataclass
class CacheSettings:
    ttl_seconds: int = field(default_factory=lambda: _env_int("CACHE_TTL_SECONDS", 3600))
    # Interval of the background sweep that drops expired entries
    check_period_seconds: int = field(
        default_factory=lambda: _env_int("CACHE_CHECK_PERIOD_SECONDS", 600)
    )
    key_prefix: str = field(default_factory=lambda: os.getenv("CACHE_KEY_PREFIX", "prerender:"))


@dataclass
class RenderSettings:
    navigation_timeout_ms: int = field(
        default_factory=lambda: _env_int("RENDER_NAVIGATION_TIMEOUT_MS", 30000)
    )
    # Extra wait after network-idle for deferred client-side work
    settle_delay_ms: int = field(default_factory=lambda: _env_int("RENDER_SETTLE_DELAY_MS", 2000))
    viewport_width: int = field(default_factory=lambda: _env_int("RENDER_VIEWPORT_WIDTH", 1200))
    viewport_height: int = field(default_factory=lambda: _env_int("RENDER_VIEWPORT_HEIGHT", 800))
    user_agent: str = field(default_factory=lambda: os.getenv("RENDER_USER_AGENT", DEFAULT_USER_AGENT))
    browser_args: List[str] = field(default_factory=lambda: list(DEFAULT_BROWSER_ARGS))


@dataclass
class RateLimitSettings:
    enabled: bool = field(default_factory=lambda: _env_bool("RATE_LIMIT_ENABLED", True))
    max_requests: int = field(default_factory=lambda: _env_int("RATE_LIMIT_MAX_REQUESTS", 100))
    window_seconds: int = field(default_factory=lambda: _env_int("RATE_LIMIT_WINDOW_SECONDS", 15 * 60))


@dataclass
class Settings:
    server: ServerSettings = field(default_factory=ServerSettings)
    cache: CacheSettings = field(default_factory=CacheSettings)
    render: RenderSettings = field(default_factory=RenderSettings)
    rate_limit: RateLimitSettings = field(default_factory=RateLimitSettings)


settings = Settings()
