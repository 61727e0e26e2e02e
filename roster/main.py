"""
Application entry point.

Creates the FastAPI application and wires together:
- Routers (one per bounded context)
- Error handlers (centralized domain-to-error-code mapping)
- Security middleware (headers, rate limiting)
- Logging configuration
- The Database (connection pool) lifecycle

No business logic belongs here.
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import Depends, FastAPI

from roster.core.config import Settings, settings as default_settings
from roster.core.database import Database
from roster.interfaces.health import router as health_router
from roster.interfaces.membership.router import router as membership_router
from roster.shared.errors.handlers import register_error_handlers
from roster.shared.logging import configure_logging
from roster.shared.security.headers import SecurityHeadersMiddleware
from roster.shared.security.rate_limiting import (
    RateLimitExceededError,
    RateLimitGuard,
    build_limiter,
    rate_limit_exceeded_handler,
)

logger = logging.getLogger(__name__)


def _build_lifespan(database: Database, app_settings: Settings, owns_database: bool):
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Application lifespan: prepare the schema, release the pool on exit."""
        if app_settings.create_schema_on_startup:
            database.create_schema()
        logger.info("%s %s started.", app_settings.project_name, app_settings.version)

        yield

        if owns_database:
            database.dispose()

    return lifespan


def create_app(
    app_settings: Optional[Settings] = None,
    database: Optional[Database] = None,
) -> FastAPI:
    """Create and configure the FastAPI application.

    Registers routers, error handlers, and security middleware.
    This is the composition root of the application.

    Args:
        app_settings: Settings to use. Defaults to the environment settings.
        database: A ready Database. When omitted one is built from settings
            and disposed at shutdown; an injected one is left to its owner.

    Returns:
        A fully configured FastAPI application instance.
    """
    app_settings = app_settings or default_settings
    configure_logging(level=app_settings.log_level, sql_echo=app_settings.db_echo)

    owns_database = database is None
    if database is None:
        database = Database.from_settings(app_settings)

    limiter = build_limiter(app_settings)
    rate_limit = RateLimitGuard(limiter, app_settings.rate_limit_default)

    app = FastAPI(
        title=app_settings.project_name,
        version=app_settings.version,
        docs_url="/docs" if app_settings.debug else None,
        redoc_url="/redoc" if app_settings.debug else None,
        lifespan=_build_lifespan(database, app_settings, owns_database),
        dependencies=[Depends(rate_limit)],
    )
    app.state.settings = app_settings
    app.state.database = database

    # --- Rate Limiting ---
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceededError, rate_limit_exceeded_handler)

    # --- Security Middleware ---
    app.add_middleware(SecurityHeadersMiddleware)

    # --- Error Handlers ---
    register_error_handlers(app)

    # --- Routers ---
    app.include_router(health_router, prefix="/api/v1")
    app.include_router(membership_router, prefix="/api/v1")

    return app


app = create_app()
