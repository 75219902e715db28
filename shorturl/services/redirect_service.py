"""
Redirect Service

This service handles URL redirection logic.

The public redirect path must not reveal why a slug failed: malformed,
unknown and unreadable slugs all come back as None and the endpoint
answers a bare 404.
"""

import logging
from typing import Optional

from shorturl.core.exceptions import (
    InvalidSlugError,
    ShortURLNotFoundError,
    StorageError,
)
from shorturl.services.url_service import ShortURLService

logger = logging.getLogger(__name__)


class RedirectService:
    """Resolves slugs to redirect targets."""

    def __init__(self, url_service: ShortURLService):
        self.url_service = url_service

    async def get_redirect_url(self, slug: str) -> Optional[str]:
        """
        Get the stored URL for redirection.

        Returns:
            The stored URL verbatim, or None if the slug cannot be resolved
        """
        try:
            record = await self.url_service.get_short_url(slug)
        except InvalidSlugError:
            logger.warning(f"Redirect for invalid slug format: {slug}")
            return None
        except ShortURLNotFoundError:
            logger.warning(f"Redirect for unknown slug: {slug}")
            return None
        except StorageError:
            logger.error(f"Error redirecting {slug}", exc_info=True)
            return None

        logger.info(f"Redirecting {slug} to {record.url}")
        return record.url
