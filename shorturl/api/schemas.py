"""
API Request and Response Schemas

Pydantic models describing the JSON envelopes the API returns. Request
bodies are validated by shorturl.core.validators instead of a model, so the
exact per-field messages are preserved; ShortenRequest documents the body
shape for the OpenAPI schema only.
"""

from typing import Dict, Optional

from pydantic import BaseModel, ConfigDict, Field


class ShortenRequest(BaseModel):
    """Request body for the create endpoint."""
    model_config = ConfigDict(extra="forbid")

    url: str = Field(..., description="The long URL to shorten", max_length=2000)
    slug: Optional[str] = Field(
        None,
        description="Custom slug (3-50 characters of [a-zA-Z0-9_-])",
        min_length=3,
        max_length=50,
    )


class ShortURLData(BaseModel):
    """A short URL mapping as returned by the API."""
    url: str = Field(..., description="The original long URL")
    slug: str = Field(..., description="The short code")
    shortUrl: str = Field(..., description="The complete short URL")


class ShortURLResponse(BaseModel):
    """Success envelope for create and detail endpoints."""
    success: bool = True
    data: ShortURLData


class ErrorResponse(BaseModel):
    """Error envelope shared by every JSON endpoint."""
    success: bool = False
    error: str
    errors: Optional[Dict[str, str]] = None
    message: Optional[str] = None
