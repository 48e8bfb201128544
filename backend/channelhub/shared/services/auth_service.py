"""
Authentication Service

Business logic for registration, login, token refresh and logout.

Service Pattern:
================
AuthService is the orchestration layer the handlers call. It combines:
- CredentialService (user records, password checks)
- TokenService (session issue / rotate / revoke)
- MediaStore (avatar and cover uploads at registration)

Registration Flow:
==================
    validate fields + confirm_password
            │
            ▼
    handle / email free? ──no──► ConflictError (nothing uploaded)
            │ yes
            ▼
    upload avatar (+ cover)
            │
            ▼
    create user ──fails──► uploaded files deleted (best effort), error re-raised

Usage:
======
    from channelhub.shared.services.auth_service import AuthService

    service = AuthService(db, media_store)
    profile = await service.register(handle, email, display_name, password, password, avatar)
    result = await service.login("alice", password)
    pair = await service.refresh(result.refresh_token)
"""

from typing import Optional
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from channelhub.shared.adapters.media_store import MediaStore, MediaUpload
from channelhub.shared.core.exceptions import ServiceUnavailableError, ValidationError
from channelhub.shared.core.logging import get_logger
from channelhub.shared.schemas.user import AuthResponse, TokenPair, UserResponse
from channelhub.shared.services.credential_service import CredentialService
from channelhub.shared.services.token_service import TokenCodec, TokenService


logger = get_logger("channelhub.auth")


class AuthService:
    """
    Service for authentication-related business logic.

    Handles:
    - User registration with avatar upload
    - Login by handle or email
    - Refresh token rotation
    - Logout

    Attributes:
        session: Database session
        credentials: CredentialService instance
        tokens: TokenService instance
        media_store: Image storage used at registration
    """

    def __init__(
        self,
        session: AsyncSession,
        media_store: Optional[MediaStore] = None,
        codec: Optional[TokenCodec] = None,
    ) -> None:
        """
        Initialize AuthService.

        Args:
            session: Async database session
            media_store: Image storage (required for register)
            codec: Token signing configuration (defaults to settings)
        """
        self.session = session
        self.media_store = media_store
        self.credentials = CredentialService(session, media_store)
        self.tokens = TokenService(session, codec)

    async def register(
        self,
        handle: str,
        email: str,
        display_name: str,
        password: str,
        confirm_password: str,
        avatar: Optional[MediaUpload],
        cover_image: Optional[MediaUpload] = None,
    ) -> UserResponse:
        """
        Register a new user.

        Args:
            handle: Desired channel handle
            email: Email address
            display_name: Public display name
            password: Plain text password (will be hashed)
            confirm_password: Must equal password
            avatar: Required avatar image
            cover_image: Optional cover image

        Returns:
            UserResponse for the created account

        Raises:
            ValidationError: Invalid fields, password mismatch, missing avatar
            DuplicateResourceError: If handle or email is taken
            ExternalServiceError: If the media store rejects an upload
        """
        if password != confirm_password:
            raise ValidationError("Passwords do not match", details={"field": "confirm_password"})

        if avatar is None or not avatar.data:
            raise ValidationError("Avatar file is required", details={"field": "avatar"})

        await self.credentials.check_available(handle, email, display_name, password)

        if self.media_store is None:
            raise ServiceUnavailableError("Media storage is not configured")

        avatar_url = await self.media_store.store(avatar.data, avatar.filename, avatar.content_type)
        uploaded = [avatar_url]

        try:
            cover_image_url = None
            if cover_image is not None and cover_image.data:
                cover_image_url = await self.media_store.store(
                    cover_image.data, cover_image.filename, cover_image.content_type
                )
                uploaded.append(cover_image_url)

            return await self.credentials.create(
                handle=handle,
                email=email,
                display_name=display_name,
                password=password,
                avatar_url=avatar_url,
                cover_image_url=cover_image_url,
            )
        except Exception:
            for url in uploaded:
                await self.credentials.discard_media(url)
            raise

    async def login(self, identifier: str, password: str) -> AuthResponse:
        """
        Authenticate by handle or email and start a session.

        Raises:
            ValidationError: If the identifier is blank
            UserNotFoundError: If no user matches the identifier
            AuthenticationError: If the password is wrong
        """
        user = await self.credentials.verify(identifier, password)
        # Snapshot before issue(): its bulk UPDATE may expire timestamp columns
        profile = UserResponse.from_user(user)
        pair = await self.tokens.issue(user)

        logger.info("User logged in", user_id=str(user.id))
        return AuthResponse(**pair.model_dump(), user=profile)

    async def refresh(self, refresh_token: Optional[str]) -> TokenPair:
        """
        Rotate a refresh token.

        Raises:
            AuthenticationError: If the token is missing, invalid or already used
        """
        return await self.tokens.rotate(refresh_token)

    async def logout(self, user_id: UUID) -> None:
        """End the user's session."""
        await self.tokens.revoke(user_id)
