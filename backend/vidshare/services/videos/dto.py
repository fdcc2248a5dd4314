"""DTOs for VideoService."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from vidshare.services._shared.dto import PaginationIn


@dataclass(frozen=True, slots=True)
class VideoCreateIn:
    title: str
    description: str
    video_url: str
    thumbnail_url: str
    duration: int = 0
    is_published: bool = True


@dataclass(frozen=True, slots=True)
class VideoUpdateIn:
    """Partial update; ``None`` leaves a field unchanged."""

    title: str | None = None
    description: str | None = None
    thumbnail_url: str | None = None
    is_published: bool | None = None


@dataclass(frozen=True, slots=True)
class VideoListIn:
    """
    Listing query.

    :param owner_id: Restrict to one channel.
    :param pagination: Page, size and sort tokens.
    """

    owner_id: int | None = None
    pagination: PaginationIn = PaginationIn()


@dataclass(frozen=True, slots=True)
class VideoOwnerOut:
    id: int
    username: str
    full_name: str | None
    avatar_url: str | None


@dataclass(frozen=True, slots=True)
class VideoOut:
    id: int
    title: str
    description: str
    video_url: str
    thumbnail_url: str
    duration: int
    views: int
    is_published: bool
    owner: VideoOwnerOut
    created_at: datetime | None = None


@dataclass(frozen=True, slots=True)
class WatchHistoryItemOut:
    video: VideoOut
    watched_at: datetime
