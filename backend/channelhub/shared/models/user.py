"""
User Entity Model

Represents a registered account. Every user is also a channel that other
users can subscribe to.

Model Hierarchy:
================
    User
       ├── subscribers (Subscription[])     - edges where this user is the channel
       ├── subscriptions (Subscription[])   - edges where this user subscribes
       ├── videos (Video[])                 - videos this user published
       └── watch_history (WatchHistoryEntry[]) - ordered by position

SAMPLE USER RECORD:
┌──────────────────────────────────────────────────────────────────────────────┐
│ id               │ 550e8400-e29b-41d4-a716-446655440000                      │
│ handle           │ "alice"                                                   │
│ email            │ "alice@example.com"                                       │
│ display_name     │ "Alice Liddell"                                           │
│ password_hash    │ "$2b$12$..."                                              │
│ avatar_url       │ "https://media.example.com/avatars/3f2a.png"              │
│ cover_image_url  │ NULL                                                      │
│ refresh_token    │ "eyJhbGciOi..." (only the current one)                    │
│ created_at       │ 2024-01-01T00:00:00Z                                      │
└──────────────────────────────────────────────────────────────────────────────┘

Sensitive Columns:
==================
password_hash and refresh_token never leave the service layer. Response
schemas are built field by field and have no slot for them.
"""

from typing import TYPE_CHECKING, Optional
import uuid

from sqlalchemy import String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from channelhub.shared.models.base import Base, TimestampMixin


if TYPE_CHECKING:
    from channelhub.shared.models.subscription import Subscription
    from channelhub.shared.models.video import Video
    from channelhub.shared.models.watch_history import WatchHistoryEntry


class User(Base, TimestampMixin):
    """
    User model representing a registered account and its channel.

    Attributes:
        id: Unique identifier (UUID v4)
        handle: Lower-cased unique channel handle
        email: Lower-cased unique email address
        display_name: Public name
        password_hash: Bcrypt hashed password
        avatar_url: Media reference of the avatar (required)
        cover_image_url: Media reference of the cover image (optional)
        refresh_token: The single currently valid refresh token, if any
    """

    __tablename__ = "users"

    # ═══════════════════════════════════════════════════════════════════════════
    # PRIMARY KEY
    # ═══════════════════════════════════════════════════════════════════════════

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid.uuid4,
    )

    # ═══════════════════════════════════════════════════════════════════════════
    # IDENTITY
    # ═══════════════════════════════════════════════════════════════════════════

    handle: Mapped[str] = mapped_column(
        String(15),
        unique=True,
        nullable=False,
        index=True,
    )

    email: Mapped[str] = mapped_column(
        String(255),
        unique=True,
        nullable=False,
        index=True,
    )

    display_name: Mapped[str] = mapped_column(
        String(15),
        nullable=False,
        index=True,
    )

    # ═══════════════════════════════════════════════════════════════════════════
    # MEDIA
    # ═══════════════════════════════════════════════════════════════════════════

    avatar_url: Mapped[str] = mapped_column(
        Text,
        nullable=False,
    )

    cover_image_url: Mapped[Optional[str]] = mapped_column(
        Text,
        nullable=True,
    )

    # ═══════════════════════════════════════════════════════════════════════════
    # CREDENTIALS
    # ═══════════════════════════════════════════════════════════════════════════

    password_hash: Mapped[str] = mapped_column(
        Text,
        nullable=False,
    )

    # NULL means no active session
    refresh_token: Mapped[Optional[str]] = mapped_column(
        Text,
        nullable=True,
    )

    # ═══════════════════════════════════════════════════════════════════════════
    # RELATIONSHIPS
    # ═══════════════════════════════════════════════════════════════════════════

    subscribers: Mapped[list["Subscription"]] = relationship(
        "Subscription",
        foreign_keys="Subscription.channel_id",
        back_populates="channel",
        cascade="all, delete-orphan",
    )

    subscriptions: Mapped[list["Subscription"]] = relationship(
        "Subscription",
        foreign_keys="Subscription.subscriber_id",
        back_populates="subscriber",
        cascade="all, delete-orphan",
    )

    videos: Mapped[list["Video"]] = relationship(
        "Video",
        back_populates="publisher",
    )

    watch_history: Mapped[list["WatchHistoryEntry"]] = relationship(
        "WatchHistoryEntry",
        back_populates="user",
        order_by="WatchHistoryEntry.position",
        cascade="all, delete-orphan",
    )

    def __repr__(self) -> str:
        return f"<User(id={self.id}, handle={self.handle})>"
