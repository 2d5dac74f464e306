"""Prerender service: headless-browser rendering with a TTL cache."""

__version__ = "1.0.0"
