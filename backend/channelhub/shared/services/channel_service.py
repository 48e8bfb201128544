"""
Channel Service

Read-only views over the subscription graph: channel profiles and watch
history. Nothing in here writes to the database.

Usage:
======
    service = ChannelService(db)

    profile = await service.channel_profile("alice", viewer_id=current_user.user_id)
    history = await service.watch_history(current_user.user_id)
"""

from typing import Optional
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from channelhub.shared.core.exceptions import ChannelNotFoundError, ValidationError
from channelhub.shared.repositories.subscription_repository import SubscriptionRepository
from channelhub.shared.repositories.watch_history_repository import WatchHistoryRepository
from channelhub.shared.schemas.channel import ChannelProfileResponse, WatchHistoryItem


class ChannelService:
    """
    Service for channel profile and watch history reads.

    Attributes:
        session: Database session
        subscriptions: SubscriptionRepository instance
        history: WatchHistoryRepository instance
    """

    def __init__(self, session: AsyncSession) -> None:
        self.session = session
        self.subscriptions = SubscriptionRepository(session)
        self.history = WatchHistoryRepository(session)

    async def channel_profile(
        self,
        handle: Optional[str],
        viewer_id: Optional[UUID] = None,
    ) -> ChannelProfileResponse:
        """
        Get a channel's public profile with subscription statistics.

        Args:
            handle: Channel handle (case-insensitive)
            viewer_id: Requesting user; None for anonymous viewers, who are
                never reported as subscribed

        Returns:
            ChannelProfileResponse

        Raises:
            ValidationError: If handle is blank
            ChannelNotFoundError: If no user has the handle
        """
        if not handle or not handle.strip():
            raise ValidationError("Handle is missing", details={"field": "handle"})

        handle = handle.strip().lower()
        stats = await self.subscriptions.get_channel_profile(handle, viewer_id=viewer_id)
        if stats is None:
            raise ChannelNotFoundError(handle)

        user = stats.user
        return ChannelProfileResponse(
            display_name=user.display_name,
            handle=user.handle,
            subscribers_count=stats.subscribers_count,
            subscribed_to_count=stats.subscribed_to_count,
            is_subscribed=stats.is_subscribed,
            avatar_url=user.avatar_url,
            cover_image_url=user.cover_image_url,
            email=user.email,
            created_at=user.created_at,
        )

    async def watch_history(self, user_id: UUID) -> list[WatchHistoryItem]:
        """
        Get the user's watched videos in watch order, each with its publisher.

        An empty history (or an unknown user) yields an empty list.
        """
        rows = await self.history.get_enriched_history(user_id)
        return [WatchHistoryItem.from_video(video, publisher) for video, publisher in rows]
