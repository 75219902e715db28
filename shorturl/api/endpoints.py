"""
FastAPI Endpoints for the Short URL Service

Endpoints only handle:
- Request parsing and validation
- Rate limiting and the auth gate
- Mapping service outcomes to HTTP responses

All business logic is in ShortURLService. Domain exceptions that escape an
endpoint are rendered by the handlers registered in shorturl.main.

Routes are registered per application by build_router(), which wraps each
endpoint with that application's limiter. Route order matters:
/api/urls/{slug} is registered before the catch-all /{slug} redirect.
"""

import logging
from urllib.parse import quote

from fastapi import APIRouter, Depends, Request, Response, status
from fastapi.responses import JSONResponse, PlainTextResponse
from slowapi import Limiter

from shorturl.api.schemas import ErrorResponse, ShortenRequest, ShortURLData, ShortURLResponse
from shorturl.core.auth import require_auth
from shorturl.core.exceptions import (
    InvalidSlugError,
    ShortURLNotFoundError,
    StorageError,
    ValidationFailedError,
)
from shorturl.core.setting import Settings
from shorturl.core.validators import validate_create_request
from shorturl.services.redirect_service import RedirectService
from shorturl.services.url_service import ShortURLRecord, ShortURLService

logger = logging.getLogger(__name__)


def get_url_service(request: Request) -> ShortURLService:
    return request.app.state.url_service


def error_response(status_code: int, error: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(error=error).model_dump(exclude_none=True),
    )


def record_response(record: ShortURLRecord, status_code: int = status.HTTP_200_OK) -> JSONResponse:
    body = ShortURLResponse(data=ShortURLData(**record.to_dict()))
    return JSONResponse(status_code=status_code, content=body.model_dump())


def header_safe_location(url: str) -> str:
    """Percent-encode only the non-ASCII characters; everything else is kept as stored."""
    return "".join(char if char.isascii() else quote(char, safe="") for char in url)


async def create_short_url(
    request: Request,  # Required for rate limiting (slowapi expects parameter named 'request')
    url_service: ShortURLService = Depends(get_url_service),
) -> JSONResponse:
    """
    Create a new short URL.

    Returns:
        201 with the created mapping

    Raises:
        ValidationFailedError: If the body fails validation (400)
        SlugConflictError: If the slug is already in use (400)
    """
    try:
        body = await request.json()
    except ValueError:
        body = None

    validation = validate_create_request(body)
    if not validation.ok:
        logger.warning(f"POST /api/urls - validation failed {validation.errors}")
        raise ValidationFailedError(validation.errors)

    url = validation.value["url"]
    slug = validation.value.get("slug")
    logger.info(f"POST /api/urls - received URL: {url}, requested slug: {slug or '[auto-generated]'}")

    try:
        record = await url_service.create_short_url(url, slug)
    except StorageError:
        logger.error("Error creating short URL", exc_info=True)
        return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, "Error creating short URL")

    return record_response(record, status_code=status.HTTP_201_CREATED)


async def get_short_url_details(
    slug: str,
    request: Request,
    url_service: ShortURLService = Depends(get_url_service),
) -> JSONResponse:
    """
    Get the mapping behind a slug.

    Raises:
        InvalidSlugError: If the slug format is invalid (400)
        ShortURLNotFoundError: If the slug is not assigned (404)
    """
    try:
        record = await url_service.get_short_url(slug)
    except InvalidSlugError:
        logger.warning(f"GET /api/urls/{slug} - invalid slug")
        raise
    except ShortURLNotFoundError:
        logger.warning(f"GET /api/urls/{slug} - not found")
        raise
    except StorageError:
        logger.error("Error fetching URL details", exc_info=True)
        return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, "Error getting short URL details")

    logger.info(f"GET /api/urls/{slug} - found: {record.short_url}")
    return record_response(record)


async def redirect_by_slug(
    slug: str,
    request: Request,
    url_service: ShortURLService = Depends(get_url_service),
) -> Response:
    """
    Redirect to the original URL for a slug.

    Malformed and unknown slugs both answer a bare 404 so the public
    redirect path does not reveal the slug rules. The Location header is
    the stored URL as-is; RedirectResponse would re-quote it.
    """
    original_url = await RedirectService(url_service).get_redirect_url(slug)
    if original_url is None:
        return PlainTextResponse("404 Not Found", status_code=status.HTTP_404_NOT_FOUND)

    return Response(
        status_code=status.HTTP_302_FOUND,
        headers={"Location": header_safe_location(original_url)},
    )


def build_router(limiter: Limiter, settings: Settings) -> APIRouter:
    """
    Register the short URL endpoints, rate limited by the given limiter.

    Args:
        limiter: The application's own limiter
        settings: Supplies the create and read limits
    """
    router = APIRouter()

    router.add_api_route(
        "/api/urls",
        limiter.limit(settings.RATE_LIMIT_CREATE)(create_short_url),
        methods=["POST"],
        response_model=ShortURLResponse,
        status_code=status.HTTP_201_CREATED,
        dependencies=[Depends(require_auth)],
        responses={
            400: {"model": ErrorResponse, "description": "Validation failed or slug in use"},
            401: {"model": ErrorResponse, "description": "Missing or invalid bearer token"},
            500: {"model": ErrorResponse, "description": "Storage failure"},
        },
        openapi_extra={
            "requestBody": {
                "required": True,
                "content": {"application/json": {"schema": ShortenRequest.model_json_schema()}},
            }
        },
        summary="Create a short URL",
        description="Takes a long URL and an optional custom slug and returns the short URL",
    )

    router.add_api_route(
        "/api/urls/{slug}",
        limiter.limit(settings.RATE_LIMIT_READ)(get_short_url_details),
        methods=["GET"],
        response_model=ShortURLResponse,
        responses={
            400: {"model": ErrorResponse, "description": "Malformed slug"},
            404: {"model": ErrorResponse, "description": "Slug not found"},
            500: {"model": ErrorResponse, "description": "Storage failure"},
        },
        summary="Get short URL details",
        description="Returns the original URL and short URL for a slug",
    )

    router.add_api_route(
        "/{slug}",
        limiter.limit(settings.RATE_LIMIT_READ)(redirect_by_slug),
        methods=["GET"],
        status_code=status.HTTP_302_FOUND,
        response_class=Response,
        responses={
            302: {"description": "Redirect to the stored URL"},
            404: {"description": "Slug malformed or not found"},
        },
        summary="Redirect to original URL",
        description="Takes a slug and redirects to the original long URL",
    )

    return router
