"""FastAPI application entry point."""

import logging
from collections.abc import Callable
from contextlib import asynccontextmanager

from fastapi import FastAPI
from sqlalchemy.orm import Session

from user_directory.api import users
from user_directory.config import Settings, get_settings
from user_directory.database import SessionLocal, init_db
from user_directory.middleware.api_key import ApiKeyMiddleware
from user_directory.middleware.request_logging import RequestLoggingMiddleware


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Handle application startup and shutdown events."""
    if app.state.create_tables:
        init_db()
    yield


def create_app(
    settings: Settings | None = None,
    session_factory: Callable[[], Session] | None = None,
) -> FastAPI:
    """Build the application.

    Request pipeline, outermost first: request logging, API key check, routes.
    """
    settings = settings or get_settings()
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    explorer_enabled = not settings.is_production
    app = FastAPI(
        title="User Directory API",
        description="User records behind a static API key, with request audit logging",
        version="0.1.0",
        lifespan=lifespan,
        docs_url="/docs" if explorer_enabled else None,
        redoc_url="/redoc" if explorer_enabled else None,
        openapi_url="/openapi.json" if explorer_enabled else None,
    )
    # Tests bring their own schema and session factory
    app.state.create_tables = session_factory is None

    # Starlette runs the last added middleware first
    app.add_middleware(
        ApiKeyMiddleware,
        settings=settings,
        session_factory=session_factory or SessionLocal,
    )
    app.add_middleware(RequestLoggingMiddleware)

    # Register routers
    app.include_router(users.router)

    @app.get("/health")
    async def health_check():
        """Health check endpoint."""
        return {"status": "healthy", "environment": settings.environment}

    return app


app = create_app()
