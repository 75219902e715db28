"""
Bearer Token Authentication

FastAPI dependency guarding the create endpoint. The gate is skipped in
test mode and when no API_TOKEN is configured; otherwise the request must
carry "Authorization: Bearer <API_TOKEN>".
"""

import logging
import secrets
from typing import Optional

from fastapi import Request

from shorturl.core.exceptions import UnauthorizedError
from shorturl.core.setting import Settings

logger = logging.getLogger(__name__)

MISSING_HEADER_MESSAGE = "Missing or invalid Authorization header. Use Bearer token."
INVALID_TOKEN_MESSAGE = "Invalid API token"


def check_bearer_token(settings: Settings, authorization: Optional[str] = None) -> None:
    """
    Check an Authorization header value against the configured token.

    Raises:
        UnauthorizedError: If a token is required and the header is
            missing, not a Bearer header, or carries the wrong token
    """
    if settings.is_test:
        return

    if not settings.API_TOKEN:
        logger.warning("API_TOKEN is not set. Authentication is disabled.")
        return

    if not authorization or not authorization.startswith("Bearer "):
        raise UnauthorizedError(MISSING_HEADER_MESSAGE)

    token = authorization[len("Bearer "):].strip()
    if not secrets.compare_digest(token.encode(), settings.API_TOKEN.encode()):
        raise UnauthorizedError(INVALID_TOKEN_MESSAGE)


async def require_auth(request: Request) -> None:
    """
    Dependency that enforces the bearer token on a route.

    Usage:
        @router.post("/endpoint", dependencies=[Depends(require_auth)])
    """
    check_bearer_token(
        request.app.state.settings,
        request.headers.get("Authorization"),
    )
