"""Entry point for running the prerender service.

Usage:
    uv run python -m prerender
"""

import uvicorn

from prerender.api.app import app
from prerender.config.settings import settings
from prerender.core.logging import get_logger, setup_logging

logger = get_logger("prerender")


def main() -> None:
    setup_logging(settings.server.log_level)
    logger.info(f"Prerender service running on port {settings.server.port}")
    logger.info("Usage: GET /render?url=https://example.com")
    uvicorn.run(app, host=settings.server.host, port=settings.server.port, log_config=None)


if __name__ == "__main__":
    main()
