"""Channel subscriptions between users."""

from __future__ import annotations

from sqlalchemy import CheckConstraint, ForeignKey, Index, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from vidshare.core.extensions import db

from .base import PKMixin, ReprMixin, TimestampMixin
from .user import User


class Subscription(PKMixin, ReprMixin, TimestampMixin, db.Model):
    """``subscriber`` follows ``channel``; both are users."""

    __tablename__ = "subscriptions"
    __repr_fields__ = ("subscriber_id", "channel_id")

    subscriber_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    channel_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )

    subscriber: Mapped[User] = relationship(User, foreign_keys=[subscriber_id], lazy="joined")
    channel: Mapped[User] = relationship(User, foreign_keys=[channel_id], lazy="joined")

    __table_args__ = (
        UniqueConstraint("subscriber_id", "channel_id", name="uq_subscriptions_pair"),
        CheckConstraint("subscriber_id <> channel_id", name="no_self_subscription"),
        Index("ix_subscriptions_channel_id", "channel_id"),
    )
