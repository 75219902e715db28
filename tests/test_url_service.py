"""Tests for the short URL and redirect services."""

import re

import pytest

from shorturl.core.exceptions import (
    InvalidSlugError,
    ShortURLNotFoundError,
    SlugConflictError,
    StorageError,
)
from shorturl.main import build_url_service
from shorturl.services.redirect_service import RedirectService
from shorturl.services.slug_generator import SlugGenerator
from shorturl.services.url_service import ShortURLRecord, ShortURLService

from tests.conftest import FailingStore, TEST_BASE_URL, make_settings


class FixedSlugGenerator(SlugGenerator):
    """Generator that hands out a fixed sequence of slugs."""

    def __init__(self, *slugs):
        super().__init__()
        self.slugs = list(slugs)

    def generate(self, length=None):
        return self.slugs.pop(0)


@pytest.fixture
def service(store):
    return ShortURLService(store, base_url=TEST_BASE_URL)


class TestCreateShortURL:
    """Test ShortURLService.create_short_url."""

    @pytest.mark.asyncio
    async def test_generates_slug(self, service, store):
        record = await service.create_short_url("https://example.com")

        assert re.fullmatch(r"[A-Za-z0-9]{6}", record.slug)
        assert record.short_url == f"{TEST_BASE_URL}/{record.slug}"
        assert await store.get(record.slug) == "https://example.com"

    @pytest.mark.asyncio
    async def test_custom_slug(self, service, store):
        record = await service.create_short_url("https://example.com", "test123")

        assert record == ShortURLRecord(
            url="https://example.com",
            slug="test123",
            short_url=f"{TEST_BASE_URL}/test123",
        )
        assert await store.get("test123") == "https://example.com"

    @pytest.mark.asyncio
    async def test_conflict_keeps_first_url(self, service, store):
        await service.create_short_url("https://example.com", "test123")

        with pytest.raises(SlugConflictError):
            await service.create_short_url("https://other.example.com", "test123")

        assert await store.get("test123") == "https://example.com"

    @pytest.mark.asyncio
    async def test_generated_slug_collision_is_a_conflict(self, store):
        """A generated slug that is already taken is reported, not retried."""
        await store.put("AAAAAA", "https://taken.example.com")
        service = ShortURLService(
            store,
            base_url=TEST_BASE_URL,
            slug_generator=FixedSlugGenerator("AAAAAA"),
        )

        with pytest.raises(SlugConflictError):
            await service.create_short_url("https://example.com")

    @pytest.mark.asyncio
    async def test_storage_failure_on_put(self):
        service = ShortURLService(FailingStore(fail_get=False), base_url=TEST_BASE_URL)

        with pytest.raises(StorageError):
            await service.create_short_url("https://example.com", "test123")

    def test_base_url_trailing_slash(self, store):
        service = ShortURLService(store, base_url="https://sho.rt/")
        assert service.build_short_url("abc") == "https://sho.rt/abc"

    def test_short_url_from_settings(self, store):
        """Test that the configured base URL reaches the service as the only short URL builder."""
        service = build_url_service(make_settings(BASE_URL="https://sho.rt/"), store)
        assert service.build_short_url("abc") == "https://sho.rt/abc"

    def test_to_dict(self):
        record = ShortURLRecord(url="https://example.com", slug="abc", short_url="https://sho.rt/abc")
        assert record.to_dict() == {
            "url": "https://example.com",
            "slug": "abc",
            "shortUrl": "https://sho.rt/abc",
        }


class TestGetShortURL:
    """Test ShortURLService.get_short_url."""

    @pytest.mark.asyncio
    async def test_found(self, service):
        await service.create_short_url("https://example.com", "test123")

        record = await service.get_short_url("test123")
        assert record.url == "https://example.com"
        assert record.short_url == f"{TEST_BASE_URL}/test123"

    @pytest.mark.asyncio
    async def test_lookup_is_verbatim(self, service, store):
        """Mixed-case generated slugs are looked up as given."""
        await store.put("AbC123", "https://example.com")

        record = await service.get_short_url("AbC123")
        assert record.slug == "AbC123"

    @pytest.mark.asyncio
    async def test_not_found(self, service):
        with pytest.raises(ShortURLNotFoundError):
            await service.get_short_url("missing")

    @pytest.mark.asyncio
    @pytest.mark.parametrize("slug", ["ab", "bad slug", "api", "a" * 51])
    async def test_invalid_slug(self, service, slug):
        with pytest.raises(InvalidSlugError):
            await service.get_short_url(slug)


class TestRedirectService:
    """Test RedirectService.get_redirect_url."""

    @pytest.mark.asyncio
    async def test_returns_stored_url(self, service):
        await service.create_short_url("https://example.com/path?q=1", "test123")

        redirect_service = RedirectService(service)
        assert await redirect_service.get_redirect_url("test123") == "https://example.com/path?q=1"

    @pytest.mark.asyncio
    async def test_invalid_and_missing_are_none(self, service):
        redirect_service = RedirectService(service)
        assert await redirect_service.get_redirect_url("no") is None
        assert await redirect_service.get_redirect_url("missing") is None

    @pytest.mark.asyncio
    async def test_storage_failure_is_none(self):
        service = ShortURLService(FailingStore(), base_url=TEST_BASE_URL)
        assert await RedirectService(service).get_redirect_url("test123") is None
