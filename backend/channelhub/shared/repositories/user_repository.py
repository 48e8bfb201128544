"""
User Repository

Database operations specific to the User model.
Extends BaseRepository with identity lookups and refresh-token writes.

Common Operations:
==================
- get_by_handle()          → Find user by channel handle
- get_by_email()           → Find user by email address
- get_by_identifier()      → Find user by handle OR email (login)
- email_exists()           → Uniqueness check (optionally excluding one user)
- handle_exists()          → Uniqueness check
- set_refresh_token()      → Unconditional overwrite (issue / revoke)
- swap_refresh_token()     → Compare-and-swap (rotate)

Refresh Token Writes:
=====================
Rotation must never let two callers both "win" with the same presented token.
swap_refresh_token() runs a single conditional UPDATE:

    UPDATE users SET refresh_token = :new
    WHERE id = :id AND refresh_token = :expected

and reports whether a row matched. A concurrent rotation or a logout that
changed the column first makes the WHERE clause fail and the caller loses.
"""

from typing import Optional
from uuid import UUID

from sqlalchemy import or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from channelhub.shared.repositories.base import BaseRepository
from channelhub.shared.models.user import User


class UserRepository(BaseRepository[User]):
    """Repository for User database operations."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(User, session)

    # ═══════════════════════════════════════════════════════════════════════════
    # LOOKUP METHODS
    # ═══════════════════════════════════════════════════════════════════════════

    async def get_by_email(self, email: str) -> Optional[User]:
        """
        Get user by email address.

        Emails are stored lower-cased; the argument is normalised the same way.

        SQL Generated:
            SELECT * FROM users WHERE email = 'alice@example.com'
        """
        result = await self._execute(select(User).where(User.email == email.strip().lower()))
        return result.scalar_one_or_none()

    async def get_by_handle(self, handle: str) -> Optional[User]:
        """Get user by channel handle (case-insensitive)."""
        result = await self._execute(select(User).where(User.handle == handle.strip().lower()))
        return result.scalar_one_or_none()

    async def get_by_identifier(self, identifier: str) -> Optional[User]:
        """
        Get user whose handle or email equals the identifier.

        Handles cannot contain "@", so at most one row can match.
        """
        value = identifier.strip().lower()
        result = await self._execute(
            select(User).where(or_(User.handle == value, User.email == value)).limit(1)
        )
        return result.scalar_one_or_none()

    async def email_exists(self, email: str, exclude_id: Optional[UUID] = None) -> bool:
        """
        Check if email already exists.

        Args:
            email: Email address to check
            exclude_id: Ignore this user (profile updates keeping their own email)
        """
        user = await self.get_by_email(email)
        return user is not None and user.id != exclude_id

    async def handle_exists(self, handle: str) -> bool:
        """Check if handle is already taken."""
        user = await self.get_by_handle(handle)
        return user is not None

    # ═══════════════════════════════════════════════════════════════════════════
    # REFRESH TOKEN
    # ═══════════════════════════════════════════════════════════════════════════

    async def set_refresh_token(self, user_id: UUID, token: Optional[str]) -> bool:
        """
        Overwrite the stored refresh token (None clears it).

        Returns:
            True if the user exists
        """
        result = await self._execute(
            update(User)
            .where(User.id == user_id)
            .values(refresh_token=token)
        )
        return result.rowcount == 1

    async def swap_refresh_token(self, user_id: UUID, expected: str, new: str) -> bool:
        """
        Atomically replace ``expected`` with ``new``.

        Returns:
            True if the stored value was ``expected`` and has been replaced,
            False if another writer changed it first
        """
        result = await self._execute(
            update(User)
            .where(User.id == user_id, User.refresh_token == expected)
            .values(refresh_token=new)
        )
        return result.rowcount == 1
