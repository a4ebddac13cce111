"""
admin_console.api.app

FastAPI app factory for the admin console service.

Responsibilities:
- Build the FastAPI application and register routers/middleware/error handlers.
- Initialize and dispose shared infrastructure (DB engine/session factory).
- Provide a single composition root where cross-cutting concerns live.
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from admin_console import __version__
from admin_console.api.errors import install_error_handlers
from admin_console.api.routers.blogs import router as blogs_router
from admin_console.api.routers.dev_auth import router as dev_auth_router
from admin_console.api.routers.health import router as health_router
from admin_console.api.routers.session import router as session_router
from admin_console.api.routers.users import router as users_router
from admin_console.auth.rate_limit import RateLimiter
from admin_console.db.init_db import init_db
from admin_console.db.session import create_engine, create_sessionmaker
from admin_console.observability.logging import configure_logging, get_logger
from admin_console.observability.middleware import RequestContextMiddleware
from admin_console.settings import Settings, get_settings

log = get_logger(__name__)


def create_app(*, settings: Settings) -> FastAPI:
    configure_logging(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        log.info("startup", env=settings.env)
        engine = create_engine(settings)
        app.state.engine = engine
        app.state.sessionmaker = create_sessionmaker(engine)
        await init_db(engine)
        try:
            yield
        finally:
            await engine.dispose()
            log.info("shutdown")

    app = FastAPI(
        title="Admin Console",
        version=__version__,
        docs_url="/docs",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )
    # Dependencies resolve `get_settings`; point them at this instance.
    app.dependency_overrides[get_settings] = lambda: settings
    app.state.public_lookup_limiter = RateLimiter(
        max_attempts=settings.public_lookup_max_attempts,
        window_seconds=settings.public_lookup_window_seconds,
    )

    install_error_handlers(app)
    app.add_middleware(RequestContextMiddleware)
    app.include_router(health_router, tags=["health"])
    app.include_router(session_router)
    app.include_router(users_router)
    app.include_router(blogs_router)
    if settings.env != "prod":
        app.include_router(dev_auth_router)

    return app


# --- Module Notes -----------------------------------------------------------
# Business logic stays in services; this module only wires them to HTTP.
