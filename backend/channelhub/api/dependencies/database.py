"""
Database Dependency

FastAPI dependency for database sessions.

This module provides the get_db dependency that yields async database sessions
to route handlers. Sessions come from the Database handle the application
stores on ``app.state.database``; they are committed on success and rolled
back on error.

Usage:
======
    from channelhub.api.dependencies.database import DbSession

    @router.get("/me")
    async def me(db: DbSession):
        repo = UserRepository(db)
        ...
"""

from typing import Annotated, AsyncGenerator

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from channelhub.shared.core.exceptions import ServiceUnavailableError
from channelhub.shared.db import Database


def get_database(request: Request) -> Database:
    """Database handle created at startup."""
    database = getattr(request.app.state, "database", None)
    if database is None:
        raise ServiceUnavailableError("Database is not initialized")
    return database


async def get_db(
    database: Annotated[Database, Depends(get_database)],
) -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency for database sessions.

    Yields an async database session for the duration of the request.
    The session is automatically:
    - Committed on success
    - Rolled back on exception
    - Closed after the request

    Yields:
        AsyncSession: Database session for the current request
    """
    async for session in database.session():
        yield session


# Type alias for cleaner route signatures
DbSession = Annotated[AsyncSession, Depends(get_db)]
