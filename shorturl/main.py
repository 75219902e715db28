"""
FastAPI Application Entry Point

This module builds the FastAPI application and configures:
- API routes
- Middleware (logging, CORS)
- Rate limiting
- Exception handlers rendering the {success, error, errors?} envelope
- Store lifecycle

Settings and (optionally) a store are passed into create_app(), so tests
build isolated apps without touching the environment.

Run locally with:
    uvicorn shorturl.main:app --reload
"""

from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse
from slowapi.errors import RateLimitExceeded

from shorturl.api import endpoints
from shorturl.api.schemas import ErrorResponse
from shorturl.core.exceptions import ShortURLException, UnauthorizedError, ValidationFailedError
from shorturl.core.rate_limit import create_limiter, rate_limit_exceeded_handler
from shorturl.core.setting import Settings, get_settings
from shorturl.db import KeyValueStore, create_store
from shorturl.middleware.logging import add_logging_middleware, configure_logging
from shorturl.services.slug_generator import SlugGenerator
from shorturl.services.url_service import ShortURLService

HEALTH_MESSAGE = "Short URL Service API is running!"


def build_url_service(settings: Settings, store: KeyValueStore) -> ShortURLService:
    return ShortURLService(
        store,
        base_url=settings.BASE_URL,
        slug_generator=SlugGenerator(settings.SLUG_LENGTH),
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Open the configured store on startup and close it on shutdown."""
    owns_store = app.state.store is None
    if owns_store:
        app.state.store = await create_store(app.state.settings)
        app.state.url_service = build_url_service(app.state.settings, app.state.store)
    yield
    if owns_store:
        await app.state.store.close()


async def short_url_exception_handler(request: Request, exc: ShortURLException) -> JSONResponse:
    """Render domain exceptions in the standard error envelope."""
    body = ErrorResponse(error=exc.message)
    if isinstance(exc, ValidationFailedError):
        body.errors = exc.errors
    if isinstance(exc, UnauthorizedError):
        body.message = exc.detail
    return JSONResponse(status_code=exc.status_code, content=body.model_dump(exclude_none=True))


def create_app(settings: Optional[Settings] = None, store: Optional[KeyValueStore] = None) -> FastAPI:
    """
    Build the application.

    Args:
        settings: Configuration (loaded from the environment when omitted)
        store: Pre-built store; when omitted the lifespan creates one from settings
    """
    settings = settings or get_settings()
    configure_logging(settings.LOG_LEVEL)

    # Title and description are used in auto-generated API documentation
    app = FastAPI(
        title="Short URL Service",
        description="Create short URLs that redirect to long ones",
        version="1.0.0",
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )

    app.state.settings = settings
    app.state.store = store
    if store is not None:
        app.state.url_service = build_url_service(settings, store)

    app.state.limiter = create_limiter(settings)
    app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)
    app.add_exception_handler(ShortURLException, short_url_exception_handler)

    add_logging_middleware(app)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=False,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization"],
        expose_headers=["Content-Length"],
        max_age=600,
    )

    # Health endpoints defined before router to match before catch-all route
    @app.get("/", tags=["Health"], response_class=PlainTextResponse)
    async def root():
        """Root endpoint for health checks."""
        return HEALTH_MESSAGE

    @app.get("/health", tags=["Health"])
    async def health_check():
        """Health check endpoint for monitoring."""
        return {"status": "healthy"}

    app.include_router(endpoints.build_router(app.state.limiter, settings), tags=["Short URLs"])

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=8000)
