"""
Input Validators

Explicit per-field validation for the create body and for slug path
segments. Each field check returns the first failing message (or None),
and the object-level validators collect them into a field -> message map.

Slug rules, in evaluation order:
- present but empty -> required
- 3 to 50 characters
- only [a-zA-Z0-9_-]
- not a reserved word (compared lowercased)
Accepted slugs are normalized to lowercase.
"""

import re
from dataclasses import dataclass, field
from typing import Any, Dict, Optional
from urllib.parse import urlparse


URL_REQUIRED = "URL is required"
INVALID_URL = "Please enter a valid URL"
SLUG_REQUIRED = "Short URL code is required"
SLUG_INVALID = (
    "Short URL code can only contain English letters, numbers, "
    "hyphens(-) and underscores(_)"
)
SLUG_TOO_SHORT = "Short URL code must be at least 3 characters"
SLUG_TOO_LONG = "Short URL code cannot exceed 50 characters"
SLUG_RESERVED = "This short URL code is reserved"
UNKNOWN_FIELD = "Unrecognized field"
INVALID_BODY = "Invalid JSON body"

MAX_URL_LENGTH = 2000
MIN_SLUG_LENGTH = 3
MAX_SLUG_LENGTH = 50

SLUG_PATTERN = re.compile(r"^[a-zA-Z0-9_-]+$")
# Scheme per RFC 3986: ALPHA *( ALPHA / DIGIT / "+" / "-" / "." )
SCHEME_PATTERN = re.compile(r"^[a-zA-Z][a-zA-Z0-9+.-]*$")

RESERVED_SLUGS = frozenset({
    "api",
    "admin",
    "dashboard",
    "login",
    "register",
    "static",
    "assets",
    "images",
    "css",
    "js",
    "favicon.ico",
    "robots.txt",
    "sitemap.xml",
})

ALLOWED_FIELDS = ("url", "slug")


@dataclass
class ValidationResult:
    """Outcome of validating a request object."""
    value: Dict[str, str] = field(default_factory=dict)
    errors: Dict[str, str] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return not self.errors


def is_absolute_url(url: str) -> bool:
    """
    Check that a string parses as an absolute URL.

    An absolute URL needs a scheme and a host. Host-less absolute URLs such
    as mailto:, javascript: and data: parse but are deliberately rejected.
    Whitespace and control characters anywhere in the string are rejected.
    """
    if not url or any(ch.isspace() or ord(ch) < 0x20 for ch in url):
        return False

    try:
        result = urlparse(url)
        # Accessing .port raises on a malformed port component
        result.port
    except ValueError:
        return False

    if not result.scheme or not SCHEME_PATTERN.match(result.scheme):
        return False

    return bool(result.hostname)


def check_url(url: Any) -> Optional[str]:
    """Return the first failing message for a url value, or None."""
    if url is None:
        return URL_REQUIRED
    if not isinstance(url, str):
        return INVALID_URL
    if not is_absolute_url(url):
        return INVALID_URL
    if len(url) > MAX_URL_LENGTH:
        return INVALID_URL
    return None


def check_slug(slug: Any) -> Optional[str]:
    """Return the first failing message for a slug value, or None."""
    if not isinstance(slug, str):
        return SLUG_INVALID
    if slug == "":
        return SLUG_REQUIRED
    if len(slug) < MIN_SLUG_LENGTH:
        return SLUG_TOO_SHORT
    if len(slug) > MAX_SLUG_LENGTH:
        return SLUG_TOO_LONG
    if not SLUG_PATTERN.match(slug):
        return SLUG_INVALID
    if slug.lower() in RESERVED_SLUGS:
        return SLUG_RESERVED
    return None


def validate_slug(slug: Any) -> ValidationResult:
    """
    Validate a slug on its own, as used by the lookup paths.

    Returns:
        ValidationResult with value {"slug": <lowercased>} on success
    """
    message = check_slug(slug)
    if message:
        return ValidationResult(errors={"slug": message})
    return ValidationResult(value={"slug": slug.lower()})


def validate_create_request(body: Any) -> ValidationResult:
    """
    Strictly validate a create request body.

    Unknown keys are rejected, url is required, slug is optional but must
    pass every slug rule when present.
    """
    if not isinstance(body, dict):
        return ValidationResult(errors={"body": INVALID_BODY})

    errors: Dict[str, str] = {}
    value: Dict[str, str] = {}

    if "url" not in body:
        url_error = URL_REQUIRED
    elif body["url"] is None:
        url_error = INVALID_URL
    else:
        url_error = check_url(body["url"])
    if url_error:
        errors["url"] = url_error
    else:
        value["url"] = body["url"]

    if "slug" in body:
        slug_error = check_slug(body["slug"])
        if slug_error:
            errors["slug"] = slug_error
        else:
            value["slug"] = body["slug"].lower()

    for key in body:
        if key not in ALLOWED_FIELDS:
            errors[str(key)] = UNKNOWN_FIELD

    return ValidationResult(value=value, errors=errors)
