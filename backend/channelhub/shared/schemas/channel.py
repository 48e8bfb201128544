"""
Channel Schemas

Public read models for channel profiles and watch history.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel

from channelhub.shared.models.user import User
from channelhub.shared.models.video import Video
from channelhub.shared.schemas.common import BaseSchema


class ChannelProfileResponse(BaseSchema):
    """A channel as seen by a (possibly anonymous) viewer."""

    display_name: str
    handle: str
    subscribers_count: int
    subscribed_to_count: int
    is_subscribed: bool
    avatar_url: str
    cover_image_url: Optional[str] = None
    email: str
    created_at: datetime


class PublisherSummary(BaseSchema):
    """Reduced publisher projection attached to each watched video."""

    display_name: str
    handle: str
    avatar_url: str

    @classmethod
    def from_user(cls, user: User) -> "PublisherSummary":
        return cls(
            display_name=user.display_name,
            handle=user.handle,
            avatar_url=user.avatar_url,
        )


class WatchHistoryItem(BaseSchema):
    """A watched video with its publisher."""

    id: str
    title: str
    description: str
    thumbnail_url: str
    video_url: str
    duration: float
    views: int
    created_at: datetime
    publisher: Optional[PublisherSummary] = None

    @classmethod
    def from_video(cls, video: Video, publisher: Optional[User]) -> "WatchHistoryItem":
        return cls(
            id=str(video.id),
            title=video.title,
            description=video.description,
            thumbnail_url=video.thumbnail_url,
            video_url=video.video_url,
            duration=video.duration,
            views=video.views,
            created_at=video.created_at,
            publisher=PublisherSummary.from_user(publisher) if publisher else None,
        )


class SubscriptionStatus(BaseModel):
    """Result of subscribe / unsubscribe."""

    handle: str
    is_subscribed: bool
    changed: bool
