"""FastAPI application factory and main entry point."""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

import config
import logging_config
from api import router as api_router
from api.middleware import IdentityMiddleware, RateLimitMiddleware
from api.responses import register_exception_handlers
from auth.identity import build_identity_resolver
from auth.rate_limit import build_rate_limiter
from db import close_db, init_db

# Setup logging
logging_config.setup_logging(config.settings.LOG_LEVEL)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Lifespan context manager for startup and shutdown events.
    """
    # Startup
    await init_db()
    yield
    # Shutdown
    await close_db()


def create_app(settings: config.Settings = config.settings) -> FastAPI:
    """
    Build the FastAPI application.

    The identity resolver and rate limiter are chosen here, once, and kept on
    ``app.state`` where the middleware finds them.
    """
    app = FastAPI(
        title="Taskboard Backend",
        description="Owner-scoped projects and kanban tasks",
        version="0.1.0",
        lifespan=lifespan,
    )

    app.state.identity_resolver = build_identity_resolver(settings)
    app.state.rate_limiter = build_rate_limiter(settings)

    register_exception_handlers(app)

    # Last added runs first: CORS, then rate limiting, then identity
    app.add_middleware(IdentityMiddleware)
    app.add_middleware(RateLimitMiddleware, path_prefix=settings.API_PREFIX)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization", "X-User-Id", "X-User-Email", "X-User-Name"],
    )

    # Include API router
    app.include_router(api_router.api_router, prefix=settings.API_PREFIX)

    @app.get("/")
    async def root():
        """Root endpoint."""
        return {
            "message": "Taskboard Backend API",
            "version": "0.1.0",
        }

    return app


# Create FastAPI app
app = create_app()
