"""Video metadata and per-user watch history."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
    UniqueConstraint,
    func,
    true,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship, validates

from vidshare.core.extensions import db

from .base import PKMixin, ReprMixin, TimestampMixin
from .user import User


class Video(PKMixin, ReprMixin, TimestampMixin, db.Model):
    """
    A published (or draft) video owned by a user.

    ``video_url`` and ``thumbnail_url`` point at external media storage;
    this service only keeps the references.
    """

    __tablename__ = "videos"
    __repr_fields__ = ("title", "owner_id")

    owner_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    title: Mapped[str] = mapped_column(String(200), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    video_url: Mapped[str] = mapped_column(String(500), nullable=False)
    thumbnail_url: Mapped[str] = mapped_column(String(500), nullable=False)
    duration: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    views: Mapped[int] = mapped_column(Integer, nullable=False, default=0, server_default="0")
    is_published: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=True, server_default=true()
    )

    owner: Mapped[User] = relationship(User, lazy="joined")
    # History rows are removed with the video at the ORM level too.
    watch_entries: Mapped[list[WatchHistoryEntry]] = relationship(
        "WatchHistoryEntry", back_populates="video", cascade="all, delete-orphan"
    )

    __table_args__ = (
        CheckConstraint("duration >= 0", name="duration_non_negative"),
        CheckConstraint("views >= 0", name="views_non_negative"),
        Index("ix_videos_owner_id", "owner_id"),
    )

    @validates("title", "description")
    def _strip_text(self, key: str, value: str) -> str:
        if not isinstance(value, str) or not value.strip():
            raise ValueError(f"{key.capitalize()} is required.")
        return value.strip()


class WatchHistoryEntry(PKMixin, ReprMixin, db.Model):
    """One row per (user, video); re-watching bumps ``watched_at``."""

    __tablename__ = "watch_history"
    __repr_fields__ = ("user_id", "video_id")

    user_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    video_id: Mapped[int] = mapped_column(
        ForeignKey("videos.id", ondelete="CASCADE"), nullable=False
    )
    watched_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now()
    )

    video: Mapped[Video] = relationship(Video, back_populates="watch_entries", lazy="joined")

    __table_args__ = (
        UniqueConstraint("user_id", "video_id", name="uq_watch_history_user_video"),
        Index("ix_watch_history_user_id", "user_id"),
    )
