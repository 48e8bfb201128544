"""
Watch History Repository

Ordered watch history lookups joined with videos and their publishers.

Common Operations:
==================
- get_enriched_history() → [(Video, publisher User | None), ...] in list order
- append()               → Add a video at the end of a user's history

SQL Generated (get_enriched_history):
=====================================
    SELECT videos.*, users.*
    FROM watch_history
    JOIN videos ON watch_history.video_id = videos.id
    LEFT OUTER JOIN users ON videos.publisher_id = users.id
    WHERE watch_history.user_id = :user_id
    ORDER BY watch_history.position
"""

from typing import Optional
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from channelhub.shared.repositories.base import BaseRepository
from channelhub.shared.models.user import User
from channelhub.shared.models.video import Video
from channelhub.shared.models.watch_history import WatchHistoryEntry


class WatchHistoryRepository(BaseRepository[WatchHistoryEntry]):
    """Repository for watch history entries."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(WatchHistoryEntry, session)

    async def get_enriched_history(self, user_id: UUID) -> list[tuple[Video, Optional[User]]]:
        """
        Resolve a user's history to videos and their publishers.

        Args:
            user_id: Owner of the history

        Returns:
            List of (video, publisher) pairs ordered by position; publisher is
            None when the video has no (remaining) publisher
        """
        result = await self._execute(
            select(Video, User)
            .select_from(WatchHistoryEntry)
            .join(Video, WatchHistoryEntry.video_id == Video.id)
            .outerjoin(User, Video.publisher_id == User.id)
            .where(WatchHistoryEntry.user_id == user_id)
            .order_by(WatchHistoryEntry.position)
        )
        return [(video, publisher) for video, publisher in result.all()]

    async def append(self, user_id: UUID, video_id: UUID) -> WatchHistoryEntry:
        """Append a video to the end of the user's history."""
        result = await self._execute(
            select(func.max(WatchHistoryEntry.position)).where(WatchHistoryEntry.user_id == user_id)
        )
        last_position = result.scalar()
        position = 0 if last_position is None else last_position + 1
        return await self.create(user_id=user_id, video_id=video_id, position=position)
