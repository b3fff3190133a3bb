"""
FastAPI application factory and configuration.

This module creates the FastAPI application instance,
configures static content, exception handlers, and lifespan events.
"""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse, PlainTextResponse, Response
from fastapi.staticfiles import StaticFiles
from psycopg_pool import ConnectionPool

from src.adapters.repository.postgres import run_migrations
from src.api import pages
from src.api.dependencies import build_email_sender
from src.api.routes import router as accounts_router
from src.config.logging_config import configure_logging
from src.config.settings import get_settings
from src.domain.exceptions import DependencyError

logger = logging.getLogger(__name__)

# OpenAPI tags for documentation grouping
tags_metadata = [
    {
        "name": "accounts",
        "description": "Register, confirm and log in game accounts",
    },
]


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    FastAPI lifespan context manager.

    Manages application startup and shutdown:
    - Creates database connection pool on startup
    - Runs migrations on startup
    - Builds the configured email sender
    - Closes connection pool on shutdown
    """
    settings = get_settings()

    logger.info("Starting application...")
    logger.info("Connecting to database...")

    pool = ConnectionPool(
        conninfo=settings.database_url,
        min_size=settings.pool_min_size,
        max_size=settings.pool_max_size,
        open=True,
    )

    logger.info("Running database migrations...")
    try:
        run_migrations(pool)

        # Store shared resources in app state for dependency injection
        app.state.pool = pool
        app.state.email_sender = build_email_sender(settings)
        logger.info("Mail backend: %s", settings.mail_backend)

        logger.info("Application startup complete")

        yield

        logger.info("Shutting down application...")
    finally:
        pool.close()
    logger.info("Database connection pool closed")


app = FastAPI(
    title="game-accounts",
    description="Account registration backend for the game's companion website",
    version="0.1.0",
    openapi_tags=tags_metadata,
    lifespan=lifespan,
)

app.include_router(accounts_router)
app.include_router(pages.router)
app.mount(
    "/public",
    StaticFiles(directory=get_settings().public_dir, check_dir=False),
    name="public",
)


def server_error_response(request: Request) -> Response:
    """Opaque 500 in the shape the caller expects (JSON for the game client)."""
    if request.url.path == "/login":
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"success": False, "message": "Server error"},
        )
    return PlainTextResponse("Server error", status_code=status.HTTP_500_INTERNAL_SERVER_ERROR)


@app.exception_handler(DependencyError)
async def dependency_error_handler(request: Request, exc: DependencyError) -> Response:
    """Account store or mail provider failure that reached the route boundary."""
    logger.error("%s %s failed: %s", request.method, request.url.path, exc, exc_info=exc)
    return server_error_response(request)


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception) -> Response:
    """Anything unexpected: log with traceback, reveal nothing to the client."""
    logger.error("Unhandled error on %s %s", request.method, request.url.path, exc_info=exc)
    return server_error_response(request)


@app.get("/health", response_class=PlainTextResponse)
async def health_check() -> str:
    """Liveness probe for the hosting platform."""
    return "OK"


def run() -> None:
    """Start the server with uvicorn using PORT/HOST from settings."""
    import uvicorn

    settings = get_settings()
    configure_logging(settings.log_level)
    uvicorn.run(app, host=settings.host, port=settings.port, access_log=False)


if __name__ == "__main__":
    run()
