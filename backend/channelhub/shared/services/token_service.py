"""
Token Service

Issues, verifies, rotates and revokes access/refresh token pairs.

Session State Machine (per user):
=================================

    ┌───────────┐  issue()   ┌──────────┐  rotate(t)  ┌───────────┐
    │ NoSession │ ─────────► │  Active  │ ──────────► │  Active'  │ ──┐
    └───────────┘            └──────────┘             └───────────┘   │ rotate(t')
          ▲                       │ revoke()                │         │
          │                       ▼                         ▼         │
          │                  ┌──────────┐  revoke()                   │
          └───────────────── │ Revoked  │ ◄───────────────────────────┘
               issue()       └──────────┘

- issue(): unconditional overwrite, so any earlier refresh token dies
  (one active session per user)
- rotate(): use-once; the presented token must equal the stored one and is
  replaced through a compare-and-swap UPDATE
- revoke(): clears the stored token

Failure Taxonomy:
=================
Every refresh failure surfaces as AuthenticationError with the same public
message. The private AuthFailure reason (expired, malformed, user_not_found,
token_mismatch, rotation_race, ...) is logged and kept on the exception.

Usage:
======
    codec = TokenCodec.from_settings(settings)
    service = TokenService(session, codec)

    pair = await service.issue(user)
    new_pair = await service.rotate(pair.refresh_token)
    await service.revoke(user.id)
"""

import hmac
from datetime import timedelta
from typing import Any, NoReturn, Optional
from uuid import UUID

import jwt
from sqlalchemy.ext.asyncio import AsyncSession

from channelhub.config.settings import Settings, settings as default_settings
from channelhub.shared.core.exceptions import AuthenticationError, AuthFailure, InternalError
from channelhub.shared.core.logging import get_logger
from channelhub.shared.models.user import User
from channelhub.shared.repositories.user_repository import UserRepository
from channelhub.shared.schemas.user import TokenPair
from channelhub.shared.utils.security import SecurityUtils, TokenDecodeError


logger = get_logger("channelhub.tokens")

ACCESS = "access"
REFRESH = "refresh"

INVALID_REFRESH_MESSAGE = "Refresh token is invalid, expired or already used"


class TokenCodec:
    """
    Signing and verification primitives.

    Holds the two secrets and lifetimes. Has no store access, which lets the
    Session Guard depend on it alone.
    """

    def __init__(
        self,
        access_secret: str,
        refresh_secret: str,
        access_ttl: timedelta,
        refresh_ttl: timedelta,
        algorithm: str = "HS256",
    ) -> None:
        self.access_secret = access_secret
        self.refresh_secret = refresh_secret
        self.access_ttl = access_ttl
        self.refresh_ttl = refresh_ttl
        self.algorithm = algorithm

    @classmethod
    def from_settings(cls, settings: Settings = default_settings) -> "TokenCodec":
        return cls(
            access_secret=settings.ACCESS_TOKEN_SECRET,
            refresh_secret=settings.REFRESH_TOKEN_SECRET,
            access_ttl=timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES),
            refresh_ttl=timedelta(days=settings.REFRESH_TOKEN_EXPIRE_DAYS),
            algorithm=settings.JWT_ALGORITHM,
        )

    def create_access_token(self, user: User) -> str:
        return SecurityUtils.create_token(
            data={"user_id": str(user.id), "email": user.email, "handle": user.handle},
            secret_key=self.access_secret,
            token_type=ACCESS,
            expires_delta=self.access_ttl,
            algorithm=self.algorithm,
        )

    def create_refresh_token(self, user: User) -> str:
        return SecurityUtils.create_token(
            data={"user_id": str(user.id)},
            secret_key=self.refresh_secret,
            token_type=REFRESH,
            expires_delta=self.refresh_ttl,
            algorithm=self.algorithm,
        )

    def decode_access_token(self, token: str) -> dict[str, Any]:
        """Raises TokenDecodeError."""
        return SecurityUtils.decode_token(token, self.access_secret, ACCESS, self.algorithm)

    def decode_refresh_token(self, token: str) -> dict[str, Any]:
        """Raises TokenDecodeError."""
        return SecurityUtils.decode_token(token, self.refresh_secret, REFRESH, self.algorithm)

    def create_pair(self, user: User) -> TokenPair:
        """
        Sign a new access/refresh pair.

        Raises:
            InternalError: If signing fails (misconfigured secret or algorithm)
        """
        try:
            return TokenPair(
                access_token=self.create_access_token(user),
                refresh_token=self.create_refresh_token(user),
                expires_in=int(self.access_ttl.total_seconds()),
            )
        except (jwt.PyJWTError, NotImplementedError, TypeError) as e:
            logger.error("Token signing failed", user_id=str(user.id), error=str(e))
            raise InternalError("Something went wrong while generating tokens") from e


class TokenService:
    """
    Token lifecycle operations backed by the users table.

    Attributes:
        session: Database session
        repo: UserRepository instance
        codec: TokenCodec used for signing and verification
    """

    def __init__(self, session: AsyncSession, codec: Optional[TokenCodec] = None) -> None:
        self.session = session
        self.repo = UserRepository(session)
        self.codec = codec or TokenCodec.from_settings()

    async def issue(self, user: User) -> TokenPair:
        """
        Start a session: sign a pair and store the refresh token.

        Overwrites any refresh token stored before, so only the newest
        session for the user can be refreshed.

        Args:
            user: The authenticated user

        Returns:
            TokenPair with both tokens
        """
        pair = self.codec.create_pair(user)
        await self.repo.set_refresh_token(user.id, pair.refresh_token)
        logger.info("Session issued", user_id=str(user.id))
        return pair

    async def rotate(self, presented: Optional[str]) -> TokenPair:
        """
        Exchange a refresh token for a new pair (use-once).

        Args:
            presented: Refresh token sent by the client

        Returns:
            New TokenPair; the presented token is dead afterwards

        Raises:
            AuthenticationError: For every kind of invalid, expired, unknown
                or already-used token
        """
        if not presented:
            self._reject(AuthFailure.MISSING, message="Unauthorized request")

        try:
            payload = self.codec.decode_refresh_token(presented)
        except TokenDecodeError as e:
            self._reject(AuthFailure.EXPIRED if e.expired else AuthFailure.MALFORMED, detail=str(e))

        user_id = _parse_user_id(payload.get("user_id"))
        if user_id is None:
            self._reject(AuthFailure.MALFORMED, detail="user_id claim missing")

        user = await self.repo.get(user_id)
        if user is None:
            self._reject(AuthFailure.USER_NOT_FOUND, user_id=user_id)

        stored = user.refresh_token or ""
        if not hmac.compare_digest(stored.encode(), presented.encode()):
            self._reject(AuthFailure.TOKEN_MISMATCH, user_id=user_id)

        pair = self.codec.create_pair(user)
        swapped = await self.repo.swap_refresh_token(user.id, expected=presented, new=pair.refresh_token)
        if not swapped:
            self._reject(AuthFailure.ROTATION_RACE, user_id=user_id)

        logger.info("Refresh token rotated", user_id=str(user.id))
        return pair

    async def revoke(self, user_id: UUID) -> None:
        """End the user's session by clearing the stored refresh token."""
        await self.repo.set_refresh_token(user_id, None)
        logger.info("Session revoked", user_id=str(user_id))

    def _reject(
        self,
        reason: AuthFailure,
        user_id: Optional[UUID] = None,
        detail: Optional[str] = None,
        message: str = INVALID_REFRESH_MESSAGE,
    ) -> NoReturn:
        logger.warning(
            "Refresh token rejected",
            reason=reason.value,
            user_id=str(user_id) if user_id else None,
            detail=detail,
        )
        raise AuthenticationError(message, reason=reason)


def _parse_user_id(value: Any) -> Optional[UUID]:
    try:
        return UUID(str(value))
    except (TypeError, ValueError):
        return None
