"""
Subscription Service

Creates and removes subscription edges (subscriber → channel).

Both operations are idempotent: subscribing twice leaves one edge,
unsubscribing without an edge is a no-op. The returned status says whether
anything changed.
"""

from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from channelhub.shared.core.exceptions import ChannelNotFoundError, ValidationError
from channelhub.shared.core.logging import get_logger
from channelhub.shared.models.user import User
from channelhub.shared.repositories.subscription_repository import SubscriptionRepository
from channelhub.shared.repositories.user_repository import UserRepository
from channelhub.shared.schemas.channel import SubscriptionStatus


logger = get_logger("channelhub.subscriptions")


class SubscriptionService:
    """Service for subscription writes."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session
        self.users = UserRepository(session)
        self.subscriptions = SubscriptionRepository(session)

    async def subscribe(self, subscriber_id: UUID, handle: str) -> SubscriptionStatus:
        """
        Subscribe to a channel.

        Raises:
            ValidationError: If the handle is blank or is the subscriber's own
            ChannelNotFoundError: If no user has the handle
        """
        channel = await self._get_channel(handle)
        if channel.id == subscriber_id:
            raise ValidationError("You cannot subscribe to your own channel", details={"field": "handle"})

        created = await self.subscriptions.add(subscriber_id, channel.id)
        if created:
            logger.info("Subscribed", subscriber_id=str(subscriber_id), channel_id=str(channel.id))
        return SubscriptionStatus(handle=channel.handle, is_subscribed=True, changed=created)

    async def unsubscribe(self, subscriber_id: UUID, handle: str) -> SubscriptionStatus:
        """Remove the subscription to a channel, if there is one."""
        channel = await self._get_channel(handle)
        removed = await self.subscriptions.remove(subscriber_id, channel.id)
        if removed:
            logger.info("Unsubscribed", subscriber_id=str(subscriber_id), channel_id=str(channel.id))
        return SubscriptionStatus(handle=channel.handle, is_subscribed=False, changed=removed)

    async def _get_channel(self, handle: str) -> User:
        if not handle or not handle.strip():
            raise ValidationError("Handle is missing", details={"field": "handle"})

        channel = await self.users.get_by_handle(handle)
        if channel is None:
            raise ChannelNotFoundError(handle.strip().lower())
        return channel
