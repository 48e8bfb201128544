"""
Service Dependencies

FastAPI dependencies for service injection.

These dependencies create service instances with proper database session injection.
Services are created per-request, which is fine because:
- Services are stateless (only hold db session reference)
- Each request gets its own db session
- No shared state between requests

The media store and token codec are process-wide collaborators built once
in create_application() and read from ``app.state``.

Usage:
======
    from channelhub.api.dependencies.services import get_auth_service

    @router.post("/login")
    async def login(
        data: UserLogin,
        auth_service: AuthService = Depends(get_auth_service)
    ):
        return await auth_service.login(data.identifier, data.password)
"""

from typing import Optional

from fastapi import Depends, Request, UploadFile

from channelhub.api.dependencies.auth import get_token_codec
from channelhub.api.dependencies.database import DbSession
from channelhub.config.settings import settings
from channelhub.shared.adapters.media_store import MediaStore, MediaUpload
from channelhub.shared.core.exceptions import ValidationError
from channelhub.shared.services.auth_service import AuthService
from channelhub.shared.services.channel_service import ChannelService
from channelhub.shared.services.credential_service import CredentialService
from channelhub.shared.services.subscription_service import SubscriptionService
from channelhub.shared.services.token_service import TokenCodec


def get_media_store(request: Request) -> Optional[MediaStore]:
    """Media store configured at startup (None if not configured)."""
    return getattr(request.app.state, "media_store", None)


async def get_auth_service(
    db: DbSession,
    media_store: Optional[MediaStore] = Depends(get_media_store),
    codec: TokenCodec = Depends(get_token_codec),
) -> AuthService:
    """
    Dependency to get AuthService instance.

    Creates a new service instance per request with the request's db session.
    """
    return AuthService(db, media_store, codec)


async def get_credential_service(
    db: DbSession,
    media_store: Optional[MediaStore] = Depends(get_media_store),
) -> CredentialService:
    """
    Dependency to get CredentialService instance.
    """
    return CredentialService(db, media_store)


async def get_channel_service(
    db: DbSession,
) -> ChannelService:
    """
    Dependency to get ChannelService instance.
    """
    return ChannelService(db)


async def get_subscription_service(
    db: DbSession,
) -> SubscriptionService:
    """
    Dependency to get SubscriptionService instance.
    """
    return SubscriptionService(db)


async def read_upload(upload: Optional[UploadFile], field: str) -> Optional[MediaUpload]:
    """
    Read a multipart file into memory.

    Returns:
        MediaUpload, or None when no file (or an empty one) was sent

    Raises:
        ValidationError: If the file exceeds MAX_UPLOAD_BYTES
    """
    if upload is None:
        return None

    data = await upload.read(settings.MAX_UPLOAD_BYTES + 1)
    if len(data) > settings.MAX_UPLOAD_BYTES:
        raise ValidationError(
            f"{field} exceeds the {settings.MAX_UPLOAD_BYTES} byte upload limit",
            details={"field": field},
        )
    if not data:
        return None

    return MediaUpload(
        data=data,
        filename=upload.filename or field,
        content_type=upload.content_type,
    )
