"""
Route Registration

Centralizes all route registration for the FastAPI application.

Route Hierarchy:
================
    /health, /ready, /live       → Health check endpoints
    /api/v1/users                → Registration, login, refresh, logout
    /api/v1/users/me...          → Current user's account and history
    /api/v1/users/channels/...   → Channel profiles and subscriptions

Usage:
======
    from channelhub.api.routes import register_routes

    app = FastAPI()
    register_routes(app)
"""

from fastapi import FastAPI

from channelhub.api.handlers import (
    auth_handler,
    channel_handler,
    health_handler,
    user_handler,
)
from channelhub.config.settings import settings


def register_routes(app: FastAPI) -> None:
    """
    Register all API routes.

    Args:
        app: FastAPI application instance
    """
    users_prefix = f"{settings.API_PREFIX}/users"

    # Health check endpoints (no prefix, root level)
    app.include_router(
        health_handler.router,
        tags=["Health"],
    )

    # Authentication endpoints
    app.include_router(
        auth_handler.router,
        prefix=users_prefix,
        tags=["Authentication"],
    )

    # Current user endpoints
    app.include_router(
        user_handler.router,
        prefix=users_prefix,
        tags=["Users"],
    )

    # Channel endpoints
    app.include_router(
        channel_handler.router,
        prefix=users_prefix,
        tags=["Channels"],
    )
