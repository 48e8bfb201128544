"""
ChannelHub API Application Entry Point

FastAPI application setup with all routers, middleware, and lifecycle management.

Application Architecture:
=========================
┌─────────────────────────────────────────────────────────────────────────────┐
│                           CHANNELHUB API                                    │
├─────────────────────────────────────────────────────────────────────────────┤
│                                                                             │
│   ┌─────────────────────────────────────────────────────────────┐          │
│   │                    Middleware Stack                          │          │
│   │  ┌─────────────────────────────────────────────────────┐    │          │
│   │  │ CORS Middleware                                      │    │          │
│   │  │ Request Logging (request id context)                 │    │          │
│   │  │ Error Handler                                        │    │          │
│   │  └─────────────────────────────────────────────────────┘    │          │
│   └─────────────────────────────────────────────────────────────┘          │
│                              │                                              │
│                              ▼                                              │
│   ┌─────────────────────────────────────────────────────────────┐          │
│   │                       Routers                                │          │
│   │  ┌──────────┐ ┌──────────┐ ┌──────────┐ ┌──────────┐       │          │
│   │  │  Health  │ │   Auth   │ │  Users   │ │ Channels │       │          │
│   │  └──────────┘ └──────────┘ └──────────┘ └──────────┘       │          │
│   └─────────────────────────────────────────────────────────────┘          │
│                              │                                              │
│                              ▼                                              │
│   ┌─────────────────────────────────────────────────────────────┐          │
│   │           Process-wide collaborators (app.state)             │          │
│   │  ┌──────────┐ ┌─────────────┐ ┌────────────┐                │          │
│   │  │ Database │ │ MediaStore  │ │ TokenCodec │                │          │
│   │  └──────────┘ └─────────────┘ └────────────┘                │          │
│   └─────────────────────────────────────────────────────────────┘          │
│                                                                             │
└─────────────────────────────────────────────────────────────────────────────┘

Lifecycle:
==========
1. Application starts → lifespan startup
2. Database handle created (unless one was injected) and checked
3. Application serves requests
4. Application stops → lifespan shutdown
5. Database connections closed (only if the lifespan created them)

Usage:
======
    # Run with uvicorn
    uvicorn channelhub.api.main:app --host 0.0.0.0 --port 8000 --reload

    # Or programmatically (tests inject their own collaborators)
    from channelhub.api.main import create_application
    app = create_application(database=Database("sqlite+aiosqlite://"), media_store=fake)
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from channelhub.config.settings import settings
from channelhub.shared.adapters.media_store import MediaStore, S3MediaStore
from channelhub.shared.core.logging import logger
from channelhub.shared.db import Database
from channelhub.shared.services.token_service import TokenCodec
from channelhub.api.middleware import LoggingMiddleware, setup_exception_handlers
from channelhub.api.routes import register_routes


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Application lifespan context manager.

    Handles startup and shutdown events for the application.

    Startup:
    - Create the Database handle and verify connectivity

    Shutdown:
    - Close database connections
    """
    # ═══════════════════════════════════════════════════════════════════════════
    # STARTUP
    # ═══════════════════════════════════════════════════════════════════════════
    logger.info(
        "Starting ChannelHub API",
        app_name=settings.APP_NAME,
        version=settings.APP_VERSION,
        environment=settings.APP_ENV,
    )

    owns_database = app.state.database is None
    if owns_database:
        app.state.database = Database.from_settings(settings)
    await app.state.database.connect()

    logger.info("ChannelHub API started successfully")

    yield

    # ═══════════════════════════════════════════════════════════════════════════
    # SHUTDOWN
    # ═══════════════════════════════════════════════════════════════════════════
    logger.info("Shutting down ChannelHub API")

    if owns_database:
        await app.state.database.dispose()
        app.state.database = None

    logger.info("ChannelHub API shutdown complete")


def create_application(
    database: Optional[Database] = None,
    media_store: Optional[MediaStore] = None,
    token_codec: Optional[TokenCodec] = None,
) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        database: Store handle to use instead of one built from settings
        media_store: Image storage to use instead of S3
        token_codec: Token signing configuration to use instead of settings

    Returns:
        Configured FastAPI application instance

    This factory function:
    1. Creates the FastAPI app with settings
    2. Attaches the process-wide collaborators to app.state
    3. Adds middleware (CORS, request logging)
    4. Sets up exception handlers
    5. Registers all routes
    """
    app = FastAPI(
        title=settings.APP_NAME,
        description="Channel accounts, sessions and subscriptions",
        version=settings.APP_VERSION,
        # Only show docs in development
        docs_url="/docs" if settings.DEBUG else None,
        redoc_url="/redoc" if settings.DEBUG else None,
        # Use lifespan for startup/shutdown
        lifespan=lifespan,
    )

    app.state.database = database
    app.state.media_store = media_store or S3MediaStore.from_settings(settings)
    app.state.token_codec = token_codec or TokenCodec.from_settings(settings)

    # ═══════════════════════════════════════════════════════════════════════════
    # MIDDLEWARE
    # ═══════════════════════════════════════════════════════════════════════════

    # CORS Middleware - Must be added first
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Request id log context, bound before any handler logs
    app.add_middleware(LoggingMiddleware)

    # ═══════════════════════════════════════════════════════════════════════════
    # EXCEPTION HANDLERS
    # ═══════════════════════════════════════════════════════════════════════════

    setup_exception_handlers(app)

    # ═══════════════════════════════════════════════════════════════════════════
    # ROUTES
    # ═══════════════════════════════════════════════════════════════════════════

    register_routes(app)

    return app


# Create the application instance
app = create_application()
