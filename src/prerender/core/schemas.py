"""
Pydantic models for API boundaries.
Why: contract-first JSON shapes for the control endpoints.
"""

from typing import Optional

from pydantic import BaseModel


class ClearCacheRequest(BaseModel):
    url: Optional[str] = None


class MessageResponse(BaseModel):
    message: str


class CacheStats(BaseModel):
    hits: int
    misses: int
    keys: int
    ksize: int
    vsize: int


class HealthResponse(BaseModel):
    status: str = "healthy"
    cache_stats: CacheStats


class ErrorResponse(BaseModel):
    error: str
    message: Optional[str] = None
