"""
WatchHistoryEntry Model

One slot in a user's ordered watch history. The composite primary key
(user_id, position) keeps the list ordered and allows the same video to
appear more than once.

SAMPLE ROWS:
┌──────────────────────────────────────┬──────────┬──────────────────────────┐
│ user_id                              │ position │ video_id                 │
├──────────────────────────────────────┼──────────┼──────────────────────────┤
│ 550e8400-...                         │ 0        │ 770e8400-...             │
│ 550e8400-...                         │ 1        │ 880e8400-...             │
└──────────────────────────────────────┴──────────┴──────────────────────────┘
"""

from datetime import datetime
from typing import TYPE_CHECKING
import uuid

from sqlalchemy import DateTime, ForeignKey, Integer, Uuid, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from channelhub.shared.models.base import Base


if TYPE_CHECKING:
    from channelhub.shared.models.user import User
    from channelhub.shared.models.video import Video


class WatchHistoryEntry(Base):
    """
    Ordered watch history slot.

    Attributes:
        user_id: Owner of the history (part of composite PK)
        position: Zero-based index in the list (part of composite PK)
        video_id: Referenced video
        watched_at: When the entry was appended
    """

    __tablename__ = "watch_history"

    user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("users.id", ondelete="CASCADE"),
        primary_key=True,
    )

    position: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
    )

    video_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("videos.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    watched_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
    )

    user: Mapped["User"] = relationship(
        "User",
        back_populates="watch_history",
    )

    video: Mapped["Video"] = relationship("Video")

    def __repr__(self) -> str:
        return f"<WatchHistoryEntry(user_id={self.user_id}, position={self.position})>"
