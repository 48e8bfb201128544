"""
Base Repository

This module provides a generic base repository with common CRUD operations.
All entity-specific repositories inherit from this class.

What This Provides:
===================
- get(id)        → Fetch single record by UUID
- create()       → Create new record
- update()       → Update existing record
- save()         → Flush changes made to a loaded instance
- _execute()     → Run a statement with a timeout and one retry

Generic Type Pattern:
=====================
    class UserRepository(BaseRepository[User]):
        pass

    repo = UserRepository(db)
    user = await repo.get(id)  # Returns User, not Any!

Bounded Store Calls:
====================
Every statement goes through _execute(), and every flush and refresh through
_flush() / _refresh(). All three share one path:

    ┌──────────────┐  timeout   ┌──────────┐  timeout   ┌──────────────────────────┐
    │ 1st attempt  │ ─────────► │ backoff  │ ─────────► │ ServiceUnavailableError  │
    └──────────────┘            │ 2nd try  │            │ (503, kind=UNAVAILABLE)  │
                                └──────────┘            └──────────────────────────┘

No request can hang on the database for longer than roughly two timeouts
plus the backoff.

flush() vs commit():
====================
- flush(): Sends SQL to database but doesn't commit transaction
- commit(): Called by the get_db() dependency after the handler completes
  Repository methods use flush() to allow request-level transactions
"""

import asyncio
from typing import Any, Awaitable, Callable, Generic, Optional, Type, TypeVar
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.engine import Result
from sqlalchemy.exc import DBAPIError, IntegrityError, InvalidRequestError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql import Executable

from channelhub.config.settings import settings
from channelhub.shared.core.exceptions import ServiceUnavailableError
from channelhub.shared.core.logging import logger
from channelhub.shared.models.base import Base


# TypeVar bound to Base ensures we only work with SQLAlchemy models
ModelType = TypeVar("ModelType", bound=Base)
T = TypeVar("T")


class BaseRepository(Generic[ModelType]):
    """
    Generic base repository providing common CRUD operations.

    Type Parameter:
        ModelType: The SQLAlchemy model class this repository manages

    Attributes:
        model: The SQLAlchemy model class
        session: The async database session
        timeout: Seconds allowed for one statement attempt
        retry_backoff: Seconds to wait before the single retry
    """

    def __init__(self, model: Type[ModelType], session: AsyncSession) -> None:
        self.model = model
        self.session = session
        self.timeout = settings.DATABASE_STATEMENT_TIMEOUT_SECONDS
        self.retry_backoff = settings.DATABASE_RETRY_BACKOFF_SECONDS

    # ═══════════════════════════════════════════════════════════════════════════
    # BOUNDED STORE CALLS
    # ═══════════════════════════════════════════════════════════════════════════

    async def _bounded(self, operation: Callable[[], Awaitable[T]], action: str) -> T:
        """
        Await a session call with a timeout, retrying once on timeout.

        ``operation`` is called again for the retry, so it must produce a
        fresh awaitable on every call.

        Raises:
            ServiceUnavailableError: If both attempts time out, or the retry
                finds the connection broken by the cancelled first attempt
        """
        for attempt in (1, 2):
            try:
                return await asyncio.wait_for(operation(), timeout=self.timeout)
            except asyncio.TimeoutError:
                logger.warning(
                    "Database call timed out",
                    action=action,
                    table=self.model.__tablename__,
                    attempt=attempt,
                    timeout=self.timeout,
                )
                if attempt == 1:
                    await asyncio.sleep(self.retry_backoff)
            except IntegrityError:
                raise
            except (DBAPIError, InvalidRequestError) as e:
                if attempt == 1:
                    raise
                logger.warning(
                    "Database connection unusable after timeout",
                    action=action,
                    table=self.model.__tablename__,
                    error=str(e),
                )
                raise ServiceUnavailableError("Database did not respond in time") from e

        raise ServiceUnavailableError("Database did not respond in time")

    async def _execute(self, statement: Executable) -> Result:
        """
        Execute a statement with a timeout, retrying once on timeout.

        Args:
            statement: Any SQLAlchemy executable (select, update, delete, insert)

        Returns:
            The SQLAlchemy Result
        """
        return await self._bounded(lambda: self.session.execute(statement), "execute")

    async def _flush(self) -> None:
        await self._bounded(self.session.flush, "flush")

    async def _refresh(self, instance: ModelType) -> None:
        await self._bounded(lambda: self.session.refresh(instance), "refresh")

    # ═══════════════════════════════════════════════════════════════════════════
    # READ OPERATIONS
    # ═══════════════════════════════════════════════════════════════════════════

    async def get(self, record_id: UUID) -> Optional[ModelType]:
        """
        Get a single record by its UUID.

        Args:
            record_id: The UUID of the record to fetch

        Returns:
            The model instance if found, None otherwise

        SQL Generated:
            SELECT * FROM users WHERE id = '550e8400-...'
        """
        result = await self._execute(select(self.model).where(self.model.id == record_id))
        return result.scalar_one_or_none()

    # ═══════════════════════════════════════════════════════════════════════════
    # WRITE OPERATIONS
    # ═══════════════════════════════════════════════════════════════════════════

    async def create(self, **kwargs: Any) -> ModelType:
        """
        Create a new record.

        Adds the instance, flushes to get DB-generated values and refreshes.

        Example:
            user = await repo.create(handle="alice", email="alice@example.com", ...)
            print(user.id)          # UUID generated on flush
            print(user.created_at)  # Timestamp set by DB
        """
        instance = self.model(**kwargs)
        self.session.add(instance)
        return await self.save(instance)

    async def update(
        self,
        record_id: UUID,
        **kwargs: Any,
    ) -> Optional[ModelType]:
        """
        Update a record by ID.

        Only fields that exist on the model and are not None are applied.

        Returns:
            Updated model instance, or None if not found
        """
        instance = await self.get(record_id)
        if not instance:
            return None

        for field, value in kwargs.items():
            if hasattr(instance, field) and value is not None:
                setattr(instance, field, value)

        return await self.save(instance)

    async def save(self, instance: ModelType) -> ModelType:
        """
        Flush pending changes and reload the instance, both bounded.

        Use after changing attributes on a loaded instance directly.
        """
        await self._flush()
        await self._refresh(instance)
        return instance
