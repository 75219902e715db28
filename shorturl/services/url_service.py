"""
Short URL Service

This service handles the core business logic for short URLs:
- Creating a slug -> URL mapping (custom or generated slug)
- Looking up the URL behind a slug

Design Decisions:
- Input is validated before it reaches the service; the service only
  re-checks slug format on the lookup path
- Collision check is a plain get followed by put. The store has no
  conditional write, so two concurrent creates of the same slug can both
  pass the check and the later put overwrites the earlier one
- No retries: a failed put surfaces immediately as StorageError
"""

import logging
from dataclasses import dataclass
from typing import Optional

from shorturl.core.exceptions import (
    InvalidSlugError,
    ShortURLNotFoundError,
    SlugConflictError,
)
from shorturl.core.validators import validate_slug
from shorturl.db.interface import KeyValueStore
from shorturl.services.slug_generator import SlugGenerator

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ShortURLRecord:
    """A slug together with the URL it points at."""
    url: str
    slug: str
    short_url: str

    def to_dict(self) -> dict:
        return {"url": self.url, "slug": self.slug, "shortUrl": self.short_url}


class ShortURLService:
    """
    Core business logic for creating and resolving short URLs.

    Separated from API layer for testability; the store and base URL are
    injected so tests run against MemoryStore.
    """

    def __init__(
        self,
        store: KeyValueStore,
        base_url: str,
        slug_generator: Optional[SlugGenerator] = None,
    ):
        """
        Initialize the short URL service.

        Args:
            store: Key-value store holding slug -> URL
            base_url: Public base URL short links are built on
            slug_generator: Generator for slugs the caller does not supply
        """
        self.store = store
        self.base_url = base_url.rstrip("/")
        self.slug_generator = slug_generator or SlugGenerator()

    def build_short_url(self, slug: str) -> str:
        return f"{self.base_url}/{slug}"

    async def create_short_url(self, url: str, slug: Optional[str] = None) -> ShortURLRecord:
        """
        Create a new short URL.

        Args:
            url: Validated absolute URL
            slug: Validated, lowercased custom slug, or None to generate one

        Returns:
            ShortURLRecord for the new mapping

        Raises:
            SlugConflictError: If the slug is already assigned
            StorageError: If the store cannot be read or written
        """
        slug = slug or self.slug_generator.generate()
        logger.info(f"Creating short URL for {url} with slug {slug}")

        existing_url = await self.store.get(slug)
        if existing_url is not None:
            logger.warning(f"Slug already in use: {slug}")
            raise SlugConflictError(slug)

        await self.store.put(slug, url)

        record = ShortURLRecord(url=url, slug=slug, short_url=self.build_short_url(slug))
        logger.info(f"Short URL created: {record.short_url}")
        return record

    async def get_short_url(self, slug: str) -> ShortURLRecord:
        """
        Look up a slug taken from a request path.

        The slug is checked against the slug format rules first and then
        looked up verbatim, since generated slugs are mixed-case.

        Raises:
            InvalidSlugError: If the slug is malformed
            ShortURLNotFoundError: If the slug is not assigned
            StorageError: If the store cannot be read
        """
        validation = validate_slug(slug)
        if not validation.ok:
            raise InvalidSlugError(slug, validation.errors["slug"])

        url = await self.store.get(slug)
        if url is None:
            raise ShortURLNotFoundError(slug)

        return ShortURLRecord(url=url, slug=slug, short_url=self.build_short_url(slug))
