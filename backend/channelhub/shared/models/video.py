"""
Video Entity Model

Videos are produced by the upload pipeline, which owns this table. This
service only reads it to enrich watch history.
"""

from typing import TYPE_CHECKING, Optional
import uuid

from sqlalchemy import Boolean, Float, ForeignKey, Integer, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from channelhub.shared.models.base import Base, TimestampMixin


if TYPE_CHECKING:
    from channelhub.shared.models.user import User


class Video(Base, TimestampMixin):
    """
    Published video.

    Attributes:
        id: Unique identifier (UUID v4)
        publisher_id: Channel that published the video
        title: Video title
        description: Long description
        video_url: Media reference of the video file
        thumbnail_url: Media reference of the thumbnail
        duration: Length in seconds
        views: View counter
        is_published: Visible to viewers
    """

    __tablename__ = "videos"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid.uuid4,
    )

    publisher_id: Mapped[Optional[uuid.UUID]] = mapped_column(
        Uuid,
        ForeignKey("users.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )

    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")
    video_url: Mapped[str] = mapped_column(Text, nullable=False)
    thumbnail_url: Mapped[str] = mapped_column(Text, nullable=False)
    duration: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    views: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    is_published: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)

    publisher: Mapped[Optional["User"]] = relationship(
        "User",
        back_populates="videos",
    )

    def __repr__(self) -> str:
        return f"<Video(id={self.id}, title={self.title!r})>"
