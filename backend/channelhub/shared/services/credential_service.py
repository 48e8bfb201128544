"""
Credential Service

Owns user records: creation, credential verification, profile reads and
updates, password changes and avatar / cover image replacement.

Identity Rules:
===============
- handle and email are unique across all users (checked before writing,
  enforced again by unique indexes)
- passwords are stored only as bcrypt hashes
- output is always a UserResponse, which has no password or refresh-token field

Image Replacement:
==================
    1. store the new file        (failure → ExternalServiceError, nothing changed)
    2. point the record at it    (failure → new file deleted, best effort)
    3. delete the old file       (failure → warning logged, request succeeds)

Usage:
======
    service = CredentialService(db, media_store)

    profile = await service.create(handle, email, display_name, password, avatar_url)
    user = await service.verify("alice", "S3cret!pass")
"""

from typing import Optional
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from channelhub.shared.adapters.media_store import MediaStore, MediaUpload
from channelhub.shared.core.exceptions import (
    AuthenticationError,
    AuthFailure,
    DuplicateResourceError,
    ServiceUnavailableError,
    UserNotFoundError,
    ValidationError,
)
from channelhub.shared.core.logging import get_logger
from channelhub.shared.models.user import User
from channelhub.shared.repositories.user_repository import UserRepository
from channelhub.shared.schemas.user import UserResponse
from channelhub.shared.utils.security import SecurityUtils
from channelhub.shared.utils.validators import (
    check_password_strength,
    normalize_display_name,
    normalize_email,
    normalize_handle,
)


logger = get_logger("channelhub.credentials")


class CredentialService:
    """
    Service for user records and credentials.

    Attributes:
        session: Database session
        repo: UserRepository instance
        media_store: Image storage, required only for avatar / cover updates
    """

    def __init__(self, session: AsyncSession, media_store: Optional[MediaStore] = None) -> None:
        self.session = session
        self.repo = UserRepository(session)
        self.media_store = media_store

    # ═══════════════════════════════════════════════════════════════════════════
    # REGISTRATION
    # ═══════════════════════════════════════════════════════════════════════════

    async def check_available(
        self,
        handle: str,
        email: str,
        display_name: str,
        password: str,
    ) -> tuple[str, str, str]:
        """
        Validate new-account fields and make sure handle and email are free.

        Lets callers reject a registration before uploading any media.

        Returns:
            Normalised (handle, email, display_name)

        Raises:
            ValidationError: If a field breaks a format or policy rule
            DuplicateResourceError: If handle or email is taken
        """
        handle = normalize_handle(handle)
        email = normalize_email(email)
        display_name = normalize_display_name(display_name)
        check_password_strength(password)

        if await self.repo.handle_exists(handle) or await self.repo.email_exists(email):
            raise DuplicateResourceError("User with email or handle already exists")

        return handle, email, display_name

    async def create(
        self,
        handle: str,
        email: str,
        display_name: str,
        password: str,
        avatar_url: str,
        cover_image_url: Optional[str] = None,
    ) -> UserResponse:
        """
        Create a user record.

        Args:
            handle: Channel handle (stored lower-cased)
            email: Email address (stored lower-cased)
            display_name: Public display name
            password: Plain text password (hashed before storage)
            avatar_url: Reference returned by the media store
            cover_image_url: Optional cover image reference

        Returns:
            UserResponse for the new account

        Raises:
            ValidationError: If a field is invalid or the avatar is missing
            DuplicateResourceError: If handle or email is taken
        """
        if not avatar_url:
            raise ValidationError("Avatar file is required", details={"field": "avatar"})

        handle, email, display_name = await self.check_available(handle, email, display_name, password)

        user = await self.repo.create(
            handle=handle,
            email=email,
            display_name=display_name,
            password_hash=SecurityUtils.hash_password(password),
            avatar_url=avatar_url,
            cover_image_url=cover_image_url or None,
        )

        logger.info("User created", user_id=str(user.id), handle=user.handle)
        return UserResponse.from_user(user)

    # ═══════════════════════════════════════════════════════════════════════════
    # VERIFICATION & READS
    # ═══════════════════════════════════════════════════════════════════════════

    async def verify(self, identifier: str, password: str) -> User:
        """
        Check a handle-or-email / password pair.

        Raises:
            ValidationError: If the identifier is blank
            UserNotFoundError: If no user has that handle or email
            AuthenticationError: If the password is wrong
        """
        if not identifier or not identifier.strip():
            raise ValidationError("Email or handle is required", details={"field": "identifier"})

        user = await self.repo.get_by_identifier(identifier)
        if user is None:
            raise UserNotFoundError(message="User does not exist")

        if not SecurityUtils.verify_password(password, user.password_hash):
            logger.info("Password rejected", user_id=str(user.id))
            raise AuthenticationError("Invalid user credentials", reason=AuthFailure.BAD_PASSWORD)

        return user

    async def get_user(self, user_id: UUID) -> User:
        """Load a user record or raise UserNotFoundError."""
        user = await self.repo.get(user_id)
        if user is None:
            raise UserNotFoundError(str(user_id))
        return user

    async def get_profile(self, user_id: UUID) -> UserResponse:
        return UserResponse.from_user(await self.get_user(user_id))

    # ═══════════════════════════════════════════════════════════════════════════
    # UPDATES
    # ═══════════════════════════════════════════════════════════════════════════

    async def update_profile(self, user_id: UUID, display_name: str, email: str) -> UserResponse:
        """
        Change display name and email.

        Raises:
            ValidationError: If a field is invalid
            DuplicateResourceError: If the email belongs to another user
            UserNotFoundError: If the user no longer exists
        """
        display_name = normalize_display_name(display_name)
        email = normalize_email(email)

        if await self.repo.email_exists(email, exclude_id=user_id):
            raise DuplicateResourceError("Email is already registered")

        user = await self.repo.update(user_id, display_name=display_name, email=email)
        if user is None:
            raise UserNotFoundError(str(user_id))

        logger.info("Profile updated", user_id=str(user_id))
        return UserResponse.from_user(user)

    async def update_password(self, user_id: UUID, old_password: str, new_password: str) -> None:
        """
        Replace the password after checking the current one.

        Raises:
            ValidationError: If the old password is wrong or the new one is weak
            UserNotFoundError: If the user no longer exists
        """
        user = await self.get_user(user_id)

        if not SecurityUtils.verify_password(old_password, user.password_hash):
            raise ValidationError("Invalid old password", details={"field": "old_password"})

        check_password_strength(new_password, field="new_password")

        user.password_hash = SecurityUtils.hash_password(new_password)
        await self.repo.save(user)
        logger.info("Password changed", user_id=str(user_id))

    async def update_avatar(self, user_id: UUID, upload: Optional[MediaUpload]) -> UserResponse:
        """Replace the avatar image."""
        if upload is None or not upload.data:
            raise ValidationError("Avatar file is missing", details={"field": "avatar"})
        return await self._replace_image(user_id, upload, "avatar_url")

    async def update_cover_image(self, user_id: UUID, upload: Optional[MediaUpload]) -> UserResponse:
        """Replace the cover image."""
        if upload is None or not upload.data:
            raise ValidationError("Cover image file is missing", details={"field": "cover_image"})
        return await self._replace_image(user_id, upload, "cover_image_url")

    async def _replace_image(self, user_id: UUID, upload: MediaUpload, field: str) -> UserResponse:
        if self.media_store is None:
            raise ServiceUnavailableError("Media storage is not configured")

        user = await self.get_user(user_id)
        old_url = getattr(user, field)

        new_url = await self.media_store.store(upload.data, upload.filename, upload.content_type)
        try:
            setattr(user, field, new_url)
            await self.repo.save(user)
        except Exception:
            await self.discard_media(new_url)
            raise

        logger.info("Image replaced", user_id=str(user_id), field=field)

        if old_url and old_url != new_url:
            await self.discard_media(old_url)

        return UserResponse.from_user(user)

    async def discard_media(self, url: str) -> None:
        """Best-effort delete of a stored image; failures are only logged."""
        if self.media_store is None or not url:
            return
        try:
            await self.media_store.delete(url)
        except Exception as e:
            logger.warning("Could not delete media", url=url, error=str(e), error_type=type(e).__name__)
