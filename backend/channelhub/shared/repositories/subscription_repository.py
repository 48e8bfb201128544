"""
Subscription Repository

Read and write access to the subscription edge set, plus the channel
profile query that joins edges onto the users table.

Common Operations:
==================
- get_channel_profile()  → User row + subscriber counts + viewer flag, one query
- add()                  → Create an edge (no-op if it exists)
- remove()               → Delete an edge

Channel Profile Query:
======================
All three derived values are correlated subqueries on the same SELECT, so the
profile is computed in a single round trip:

    SELECT users.*,
           (SELECT count(*) FROM subscriptions WHERE channel_id = users.id)    AS subscribers_count,
           (SELECT count(*) FROM subscriptions WHERE subscriber_id = users.id) AS subscribed_to_count,
           EXISTS (SELECT * FROM subscriptions
                   WHERE subscriber_id = :viewer AND channel_id = users.id)   AS is_subscribed
    FROM users
    WHERE users.handle = :handle
"""

from typing import NamedTuple, Optional
from uuid import UUID, uuid4

from sqlalchemy import delete, exists, false, func, select
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.ext.asyncio import AsyncSession

from channelhub.shared.repositories.base import BaseRepository
from channelhub.shared.models.subscription import Subscription
from channelhub.shared.models.user import User


class ChannelStats(NamedTuple):
    """Channel owner together with its derived graph values."""

    user: User
    subscribers_count: int
    subscribed_to_count: int
    is_subscribed: bool


class SubscriptionRepository(BaseRepository[Subscription]):
    """Repository for subscription edges."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(Subscription, session)

    # ═══════════════════════════════════════════════════════════════════════════
    # READ OPERATIONS
    # ═══════════════════════════════════════════════════════════════════════════

    async def get_channel_profile(
        self,
        handle: str,
        viewer_id: Optional[UUID] = None,
    ) -> Optional[ChannelStats]:
        """
        Load a channel owner with subscriber statistics.

        Args:
            handle: Channel handle (already normalised by the caller)
            viewer_id: Requesting user, None for anonymous viewers

        Returns:
            ChannelStats, or None if no user has the handle
        """
        subscribers_count = (
            select(func.count(Subscription.id))
            .where(Subscription.channel_id == User.id)
            .correlate(User)
            .scalar_subquery()
        )
        subscribed_to_count = (
            select(func.count(Subscription.id))
            .where(Subscription.subscriber_id == User.id)
            .correlate(User)
            .scalar_subquery()
        )
        if viewer_id is not None:
            is_subscribed = (
                exists()
                .where(
                    Subscription.subscriber_id == viewer_id,
                    Subscription.channel_id == User.id,
                )
                .correlate(User)
            )
        else:
            is_subscribed = false()

        result = await self._execute(
            select(
                User,
                subscribers_count.label("subscribers_count"),
                subscribed_to_count.label("subscribed_to_count"),
                is_subscribed.label("is_subscribed"),
            ).where(User.handle == handle)
        )
        row = result.one_or_none()
        if row is None:
            return None

        return ChannelStats(
            user=row[0],
            subscribers_count=int(row[1] or 0),
            subscribed_to_count=int(row[2] or 0),
            is_subscribed=bool(row[3]),
        )

    # ═══════════════════════════════════════════════════════════════════════════
    # WRITE OPERATIONS
    # ═══════════════════════════════════════════════════════════════════════════

    async def add(self, subscriber_id: UUID, channel_id: UUID) -> bool:
        """
        Create an edge unless it already exists.

        A single INSERT ... ON CONFLICT DO NOTHING on the unique
        (subscriber_id, channel_id) pair, so two concurrent calls still leave
        one edge and neither fails.

        Returns:
            True if an edge was created
        """
        statement = (
            self._insert()
            .values(id=uuid4(), subscriber_id=subscriber_id, channel_id=channel_id)
            .on_conflict_do_nothing(index_elements=["subscriber_id", "channel_id"])
        )
        result = await self._execute(statement)
        return result.rowcount > 0

    async def remove(self, subscriber_id: UUID, channel_id: UUID) -> bool:
        """
        Delete the edge for a pair.

        Returns:
            True if an edge was deleted
        """
        result = await self._execute(
            delete(Subscription).where(
                Subscription.subscriber_id == subscriber_id,
                Subscription.channel_id == channel_id,
            )
        )
        return result.rowcount > 0

    def _insert(self):
        """Dialect INSERT with ON CONFLICT support (PostgreSQL, or SQLite in tests)."""
        if self.session.get_bind().dialect.name == "sqlite":
            return sqlite.insert(Subscription.__table__)
        return postgresql.insert(Subscription.__table__)
