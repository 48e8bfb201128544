"""
Subscription Entity Model

A directed edge from a subscriber to a channel. Both ends are users.

    subscriber ──(subscribes to)──► channel

Counting Rules:
===============
- Subscribers of X      = edges WHERE channel_id = X
- Channels X follows    = edges WHERE subscriber_id = X

Uniqueness:
===========
At most one edge per (subscriber_id, channel_id). Re-subscribing is a no-op,
so counts can never be inflated by duplicate edges.
"""

from typing import TYPE_CHECKING
import uuid

from sqlalchemy import ForeignKey, UniqueConstraint, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from channelhub.shared.models.base import Base, TimestampMixin


if TYPE_CHECKING:
    from channelhub.shared.models.user import User


class Subscription(Base, TimestampMixin):
    """
    Subscription edge.

    Attributes:
        id: Unique identifier (UUID v4)
        subscriber_id: The user who subscribes
        channel_id: The user being subscribed to
    """

    __tablename__ = "subscriptions"
    __table_args__ = (
        UniqueConstraint("subscriber_id", "channel_id", name="uq_subscriptions_subscriber_channel"),
    )

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid.uuid4,
    )

    subscriber_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    channel_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    subscriber: Mapped["User"] = relationship(
        "User",
        foreign_keys=[subscriber_id],
        back_populates="subscriptions",
    )

    channel: Mapped["User"] = relationship(
        "User",
        foreign_keys=[channel_id],
        back_populates="subscribers",
    )

    def __repr__(self) -> str:
        return f"<Subscription(subscriber_id={self.subscriber_id}, channel_id={self.channel_id})>"
