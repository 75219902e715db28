"""
Custom Exceptions

This module defines the error taxonomy of the service. Every exception
carries the HTTP status and the public error message it is rendered with,
so the exception handlers in shorturl.main stay generic.
"""

from typing import Dict, Optional


class ShortURLException(Exception):
    """Base exception for the short URL service."""

    status_code = 500
    public_message = "Internal server error"

    @property
    def message(self) -> str:
        return self.public_message


class ValidationFailedError(ShortURLException):
    """Raised when a request body fails field validation."""

    status_code = 400
    public_message = "Validation failed"

    def __init__(self, errors: Dict[str, str]):
        self.errors = errors
        super().__init__(f"Validation failed: {errors}")


class InvalidSlugError(ShortURLException):
    """Raised when a slug path segment is malformed."""

    status_code = 400
    public_message = "Invalid short URL code"

    def __init__(self, slug: str, reason: str = ""):
        self.slug = slug
        self.reason = reason
        super().__init__(f"Invalid slug '{slug}': {reason}")


class SlugConflictError(ShortURLException):
    """Raised when a slug is already assigned to a URL."""

    status_code = 400
    public_message = "This short URL is already in use"

    def __init__(self, slug: str):
        self.slug = slug
        super().__init__(f"Slug '{slug}' is already in use")


class ShortURLNotFoundError(ShortURLException):
    """Raised when a slug is not found in the store."""

    status_code = 404
    public_message = "Specified short URL not found"

    def __init__(self, slug: str):
        self.slug = slug
        super().__init__(f"Slug '{slug}' not found")


class UnauthorizedError(ShortURLException):
    """Raised by the auth gate when the bearer token is missing or wrong."""

    status_code = 401
    public_message = "Unauthorized"

    def __init__(self, message: str):
        self.detail = message
        super().__init__(message)


class StorageError(ShortURLException):
    """Raised when a key-value store operation fails."""

    status_code = 500
    public_message = "Storage error"

    def __init__(self, message: str, original_error: Optional[Exception] = None):
        self.original_error = original_error
        super().__init__(f"Storage error: {message}")
