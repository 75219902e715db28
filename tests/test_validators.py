"""Tests for request and slug validation."""

import pytest

from shorturl.core.validators import (
    INVALID_BODY,
    INVALID_URL,
    SLUG_INVALID,
    SLUG_REQUIRED,
    SLUG_RESERVED,
    SLUG_TOO_LONG,
    SLUG_TOO_SHORT,
    UNKNOWN_FIELD,
    URL_REQUIRED,
    check_slug,
    check_url,
    is_absolute_url,
    validate_create_request,
    validate_slug,
)


class TestURLValidation:
    """Test URL checks."""

    def test_valid_urls(self):
        """Test that absolute URLs are accepted."""
        valid_urls = [
            "http://example.com",
            "https://example.com",
            "https://www.example.com/path/to/page",
            "http://subdomain.example.com:8080/path?query=value",
            "http://localhost:3000",
            "ftp://files.example.com/archive.zip",
        ]
        for url in valid_urls:
            assert is_absolute_url(url), f"Should be valid: {url}"
            assert check_url(url) is None

    def test_invalid_urls(self):
        """Test that relative or malformed URLs are rejected."""
        invalid_urls = [
            "invalid-url",
            "example.com",  # Missing scheme
            "/relative/path",
            "http://",  # Missing host
            "https://exa mple.com",
            "http://example.com:notaport",
            "javascript:alert(1)",
        ]
        for url in invalid_urls:
            assert not is_absolute_url(url), f"Should be invalid: {url}"
            assert check_url(url) == INVALID_URL

    def test_hostless_urls_rejected(self):
        """Test that absolute URLs without a host are rejected on purpose."""
        for url in ["mailto:user@example.com", "javascript:alert(1)", "data:text/plain,hello"]:
            assert not is_absolute_url(url), f"Should be invalid: {url}"
            assert check_url(url) == INVALID_URL

    def test_unusual_characters_accepted(self):
        """Test that characters the redirect must pass through unchanged are valid."""
        for url in ["https://example.com/a|b", "https://example.com/?q={x}", "https://example.com/caf\u00e9"]:
            assert check_url(url) is None

    def test_missing_url(self):
        assert check_url(None) == URL_REQUIRED

    def test_non_string_url(self):
        assert check_url(42) == INVALID_URL

    def test_url_length_limit(self):
        """Test the 2000 character limit."""
        base = "https://example.com/"
        assert check_url(base + "a" * (2000 - len(base))) is None
        assert check_url(base + "a" * (2001 - len(base))) == INVALID_URL


class TestSlugValidation:
    """Test slug checks, in rule order."""

    def test_valid_slugs(self):
        for slug in ["abc", "test123", "my-link", "my_link", "A" * 50]:
            assert check_slug(slug) is None, f"Should be valid: {slug}"

    def test_empty_slug(self):
        assert check_slug("") == SLUG_REQUIRED

    def test_length_limits(self):
        assert check_slug("ab") == SLUG_TOO_SHORT
        assert check_slug("a" * 51) == SLUG_TOO_LONG

    @pytest.mark.parametrize("slug", ["test 123", "test@123", "hello/world", "naïve", "tab\there"])
    def test_invalid_characters(self, slug):
        assert check_slug(slug) == SLUG_INVALID

    @pytest.mark.parametrize("slug", ["api", "API", "Admin", "dashboard", "LOGIN", "static"])
    def test_reserved_slugs_any_case(self, slug):
        assert check_slug(slug) == SLUG_RESERVED

    def test_first_failing_rule_wins(self):
        """A short slug with bad characters reports the length rule."""
        assert check_slug("a!") == SLUG_TOO_SHORT

    def test_non_string_slug(self):
        assert check_slug(None) == SLUG_INVALID
        assert check_slug(123) == SLUG_INVALID

    def test_validate_slug_lowercases(self):
        result = validate_slug("MyLink")
        assert result.ok
        assert result.value == {"slug": "mylink"}

    def test_validate_slug_errors(self):
        result = validate_slug("x")
        assert not result.ok
        assert result.errors == {"slug": SLUG_TOO_SHORT}


class TestCreateRequestValidation:
    """Test strict validation of the create body."""

    def test_url_only(self):
        result = validate_create_request({"url": "https://example.com"})
        assert result.ok
        assert result.value == {"url": "https://example.com"}

    def test_url_and_slug(self):
        result = validate_create_request({"url": "https://example.com", "slug": "Test123"})
        assert result.ok
        assert result.value == {"url": "https://example.com", "slug": "test123"}

    def test_missing_url(self):
        result = validate_create_request({})
        assert result.errors == {"url": URL_REQUIRED}

    def test_null_url(self):
        result = validate_create_request({"url": None})
        assert result.errors == {"url": INVALID_URL}

    def test_errors_for_every_failing_field(self):
        result = validate_create_request({"url": "invalid-url", "slug": "a b c"})
        assert result.errors == {"url": INVALID_URL, "slug": SLUG_INVALID}

    def test_unknown_fields_rejected(self):
        result = validate_create_request({"url": "https://example.com", "expires": 10})
        assert not result.ok
        assert result.errors == {"expires": UNKNOWN_FIELD}

    def test_non_object_body(self):
        for body in [None, [], "https://example.com"]:
            result = validate_create_request(body)
            assert result.errors == {"body": INVALID_BODY}
