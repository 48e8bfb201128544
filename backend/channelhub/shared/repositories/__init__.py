"""
Repository Pattern Implementations

Repositories encapsulate database queries and provide a clean API for data access.

Repository Hierarchy:
=====================
    BaseRepository[ModelType]           ← Generic CRUD, bounded _execute()
         │
         ├── UserRepository             ← Identity lookups, refresh-token CAS
         ├── SubscriptionRepository     ← Edge set and channel profile query
         └── WatchHistoryRepository     ← Ordered history joined with videos

Usage Example:
==============
    from channelhub.shared.repositories import UserRepository

    async def lookup(session: AsyncSession, handle: str):
        repo = UserRepository(session)
        return await repo.get_by_handle(handle)
"""

from channelhub.shared.repositories.base import BaseRepository
from channelhub.shared.repositories.user_repository import UserRepository
from channelhub.shared.repositories.subscription_repository import (
    ChannelStats,
    SubscriptionRepository,
)
from channelhub.shared.repositories.watch_history_repository import WatchHistoryRepository

__all__ = [
    "BaseRepository",
    "UserRepository",
    "ChannelStats",
    "SubscriptionRepository",
    "WatchHistoryRepository",
]
