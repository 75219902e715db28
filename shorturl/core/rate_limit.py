"""
Rate Limiting Configuration

This module provides rate limiting functionality for API endpoints.

Design Decisions:
- Uses slowapi for rate limiting (lightweight, FastAPI-compatible)
- IP-based limiting
- One Limiter per application, built from that application's Settings,
  so two apps in the same process never share counters or limits
"""

from fastapi import Request
from fastapi.responses import JSONResponse
from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from slowapi.util import get_remote_address

from shorturl.core.setting import Settings


def create_limiter(settings: Settings) -> Limiter:
    """
    Build the limiter for one application.

    Uses IP address for rate limiting. Counters live in the limiter's own
    in-memory storage.
    """
    return Limiter(key_func=get_remote_address, enabled=settings.RATE_LIMIT_ENABLED)


async def rate_limit_exceeded_handler(request: Request, exc: RateLimitExceeded) -> JSONResponse:
    """Render a rate limit hit in the standard error envelope."""
    return JSONResponse(
        status_code=429,
        content={"success": False, "error": "Too many requests", "message": str(exc.detail)},
    )
