"""FastAPI application entry point."""
import logging
import os
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse

from api.errors import build_server_error_handler, request_validation_handler
from api.middleware import (
    AccessLogMiddleware,
    ErrorResponseMiddleware,
    SecurityHeadersMiddleware,
)
from api.routers import bookmarks, health
from core.config import Settings, get_settings
from core.logging_config import configure_logging
from db.session import build_engine, build_session_factory

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Dispose of the engine's connection pool on shutdown."""
    try:
        yield
    finally:
        await app.state.engine.dispose()
        logger.info("Database engine disposed")


def create_app(settings: Settings | None = None) -> FastAPI:
    """
    Build the application.

    The engine and session factory are attached to `app.state` so each app
    instance owns its database handle; error verbosity is fixed here from
    `settings.verbose_errors`.
    """
    settings = settings or get_settings()
    configure_logging(settings)

    app = FastAPI(
        title="Bookmarks API",
        description="Create, list, fetch and delete bookmarks.",
        version="0.1.0",
        lifespan=lifespan,
    )

    engine = build_engine(settings)
    app.state.settings = settings
    app.state.engine = engine
    app.state.session_factory = build_session_factory(engine)

    server_error_handler = build_server_error_handler(settings.verbose_errors)

    # Last added runs first: access log wraps everything else
    app.add_middleware(ErrorResponseMiddleware, handler=server_error_handler)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["Location"],
    )
    app.add_middleware(SecurityHeadersMiddleware)
    app.add_middleware(AccessLogMiddleware, short=settings.is_production)

    app.add_exception_handler(RequestValidationError, request_validation_handler)
    # Fallback for failures in the outer middleware itself
    app.add_exception_handler(Exception, server_error_handler)

    app.include_router(health.router)
    app.include_router(bookmarks.router)

    @app.get("/", response_class=PlainTextResponse, include_in_schema=False)
    async def root() -> str:
        return "Hello, world!"

    logger.info(
        "Application created",
        extra={"environment": settings.environment},
    )
    return app


app = create_app()


def run() -> None:
    """Serve the default app with uvicorn."""
    import uvicorn

    host = os.getenv("HOST", "0.0.0.0")
    port = int(os.getenv("PORT") or "8000")
    uvicorn.run("api.main:app", host=host, port=port)
