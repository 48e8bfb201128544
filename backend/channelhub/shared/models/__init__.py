"""
ChannelHub SQLAlchemy Models

Model Hierarchy:
================
    User
       ├── subscribers (Subscription[])     channel side of an edge
       ├── subscriptions (Subscription[])   subscriber side of an edge
       ├── videos (Video[])
       └── watch_history (WatchHistoryEntry[])
                 └── video (Video)

Usage:
======
    from channelhub.shared.models import User, Subscription, Video
"""

from channelhub.shared.models.base import Base, TimestampMixin
from channelhub.shared.models.user import User
from channelhub.shared.models.subscription import Subscription
from channelhub.shared.models.video import Video
from channelhub.shared.models.watch_history import WatchHistoryEntry

__all__ = [
    # Base classes and mixins
    "Base",
    "TimestampMixin",
    # Core models
    "User",
    "Subscription",
    "Video",
    "WatchHistoryEntry",
]
