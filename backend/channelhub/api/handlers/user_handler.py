"""
User Handler

Endpoints for the authenticated user's own account.

Endpoints:
==========
    GET   /me                 → Current profile
    PATCH /me                 → Update display name and email
    PATCH /me/avatar          → Replace avatar (multipart ``avatar``)
    PATCH /me/cover-image     → Replace cover image (multipart ``cover_image``)
    POST  /change-password    → Change password (old password required)
    GET   /me/watch-history   → Watched videos with publishers

All endpoints require a valid access token.
"""

from typing import Annotated, Optional

from fastapi import APIRouter, Depends, File, UploadFile

from channelhub.api.dependencies.auth import CurrentUser
from channelhub.api.dependencies.services import (
    get_channel_service,
    get_credential_service,
    read_upload,
)
from channelhub.shared.schemas.channel import WatchHistoryItem
from channelhub.shared.schemas.common import ApiResponse, MessageResponse
from channelhub.shared.schemas.user import (
    ChangePasswordRequest,
    UpdateProfileRequest,
    UserResponse,
)
from channelhub.shared.services.channel_service import ChannelService
from channelhub.shared.services.credential_service import CredentialService


router = APIRouter()


@router.get("/me", response_model=ApiResponse[UserResponse])
async def get_current_profile(
    current_user: CurrentUser,
    service: CredentialService = Depends(get_credential_service),
):
    """Get the current user's profile."""
    profile = await service.get_profile(current_user.user_id)
    return ApiResponse(data=profile, message="User fetched successfully")


@router.patch("/me", response_model=ApiResponse[UserResponse])
async def update_profile(
    data: UpdateProfileRequest,
    current_user: CurrentUser,
    service: CredentialService = Depends(get_credential_service),
):
    """
    Update display name and email.

    Raises:
        409: Email belongs to another user
    """
    profile = await service.update_profile(current_user.user_id, data.display_name, data.email)
    return ApiResponse(data=profile, message="Account details updated successfully")


@router.patch("/me/avatar", response_model=ApiResponse[UserResponse])
async def update_avatar(
    current_user: CurrentUser,
    avatar: Annotated[Optional[UploadFile], File()] = None,
    service: CredentialService = Depends(get_credential_service),
):
    """Replace the avatar; the previous image is deleted best effort."""
    profile = await service.update_avatar(current_user.user_id, await read_upload(avatar, "avatar"))
    return ApiResponse(data=profile, message="Avatar updated successfully")


@router.patch("/me/cover-image", response_model=ApiResponse[UserResponse])
async def update_cover_image(
    current_user: CurrentUser,
    cover_image: Annotated[Optional[UploadFile], File()] = None,
    service: CredentialService = Depends(get_credential_service),
):
    """Replace the cover image; the previous image is deleted best effort."""
    profile = await service.update_cover_image(
        current_user.user_id, await read_upload(cover_image, "cover_image")
    )
    return ApiResponse(data=profile, message="Cover image updated successfully")


@router.post("/change-password", response_model=MessageResponse)
async def change_password(
    data: ChangePasswordRequest,
    current_user: CurrentUser,
    service: CredentialService = Depends(get_credential_service),
):
    """
    Change the current password.

    Raises:
        400: Old password wrong or new password too weak
    """
    await service.update_password(current_user.user_id, data.old_password, data.new_password)
    return MessageResponse(message="Password changed successfully")


@router.get("/me/watch-history", response_model=ApiResponse[list[WatchHistoryItem]])
async def get_watch_history(
    current_user: CurrentUser,
    service: ChannelService = Depends(get_channel_service),
):
    """Watched videos in watch order, each with its publisher."""
    history = await service.watch_history(current_user.user_id)
    return ApiResponse(data=history, message="Watch history fetched successfully")
