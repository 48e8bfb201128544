"""
Channel Handler

Public channel profiles and subscriptions.

Endpoints:
==========
    GET    /channels/{handle}               → Profile + subscriber stats (anonymous allowed)
    POST   /channels/{handle}/subscription  → Subscribe (idempotent)
    DELETE /channels/{handle}/subscription  → Unsubscribe (idempotent)
"""

from fastapi import APIRouter, Depends

from channelhub.api.dependencies.auth import CurrentUser, OptionalUser
from channelhub.api.dependencies.services import get_channel_service, get_subscription_service
from channelhub.shared.schemas.channel import ChannelProfileResponse, SubscriptionStatus
from channelhub.shared.schemas.common import ApiResponse
from channelhub.shared.services.channel_service import ChannelService
from channelhub.shared.services.subscription_service import SubscriptionService


router = APIRouter()


@router.get("/channels/{handle}", response_model=ApiResponse[ChannelProfileResponse])
async def get_channel_profile(
    handle: str,
    viewer: OptionalUser,
    service: ChannelService = Depends(get_channel_service),
):
    """
    Get a channel profile by handle.

    ``is_subscribed`` is always false for anonymous viewers.

    Raises:
        404: No channel with that handle
    """
    profile = await service.channel_profile(handle, viewer_id=viewer.user_id if viewer else None)
    return ApiResponse(data=profile, message="User channel fetched successfully")


@router.post("/channels/{handle}/subscription", response_model=ApiResponse[SubscriptionStatus])
async def subscribe(
    handle: str,
    current_user: CurrentUser,
    service: SubscriptionService = Depends(get_subscription_service),
):
    """Subscribe the current user to a channel."""
    result = await service.subscribe(current_user.user_id, handle)
    return ApiResponse(data=result, message="Subscribed successfully")


@router.delete("/channels/{handle}/subscription", response_model=ApiResponse[SubscriptionStatus])
async def unsubscribe(
    handle: str,
    current_user: CurrentUser,
    service: SubscriptionService = Depends(get_subscription_service),
):
    """Unsubscribe the current user from a channel."""
    result = await service.unsubscribe(current_user.user_id, handle)
    return ApiResponse(data=result, message="Unsubscribed successfully")
