"""
VideoService
============

Video metadata lifecycle (publish, read, list, edit, delete) and per-user
watch history. Media files live elsewhere; only their URLs are stored.
"""

from __future__ import annotations

import logging
from typing import Any

from sqlalchemy import select

from vidshare.models.video import Video, WatchHistoryEntry
from vidshare.services._shared.base import BaseService
from vidshare.services._shared.dto import PageMeta, PaginationIn
from vidshare.services._shared.errors import NotFoundError, ServiceError
from vidshare.services.videos.dto import (
    VideoCreateIn,
    VideoListIn,
    VideoOut,
    VideoOwnerOut,
    VideoUpdateIn,
    WatchHistoryItemOut,
)

log = logging.getLogger(__name__)


def to_video_out(video: Video) -> VideoOut:
    owner = video.owner
    return VideoOut(
        id=video.id,
        title=video.title,
        description=video.description,
        video_url=video.video_url,
        thumbnail_url=video.thumbnail_url,
        duration=video.duration,
        views=video.views,
        is_published=video.is_published,
        owner=VideoOwnerOut(
            id=owner.id,
            username=owner.username,
            full_name=owner.full_name,
            avatar_url=owner.avatar_url,
        ),
        created_at=video.created_at,
    )


class VideoService(BaseService):
    """Application service for the ``Video`` aggregate."""

    def publish(self, owner_id: int, dto: VideoCreateIn) -> VideoOut:
        """
        Store metadata for a new video owned by ``owner_id``.

        :raises NotFoundError: If the owner does not exist.
        """
        with self.rw_uow() as uow:
            if uow.users.get(owner_id) is None:
                raise NotFoundError("User", owner_id)
            try:
                video = uow.videos.add(
                    Video(
                        owner_id=owner_id,
                        title=dto.title,
                        description=dto.description,
                        video_url=dto.video_url,
                        thumbnail_url=dto.thumbnail_url,
                        duration=dto.duration,
                        is_published=dto.is_published,
                    )
                )
            except ValueError as exc:
                raise ServiceError(str(exc)) from exc
            log.info(
                "video.published",
                extra={"event": "video.published", "subject_id": owner_id},
            )
            return to_video_out(video)

    def get_video(self, video_id: int, viewer_id: int | None = None) -> VideoOut:
        """
        Fetch a video. Unpublished videos are only visible to their owner.

        An authenticated viewer counts as a view and gets a watch-history entry.

        :raises NotFoundError: Missing, or unpublished and not owned by the viewer.
        """
        with self.rw_uow() as uow:
            video = uow.videos.get(video_id)
            if video is None or (not video.is_published and video.owner_id != viewer_id):
                raise NotFoundError("Video", video_id)

            if viewer_id is not None:
                uow.videos.increment_views(video_id)
                uow.watch_history.record(viewer_id, video_id)
                uow.session.refresh(video)

            return to_video_out(video)

    def list_videos(self, dto: VideoListIn) -> tuple[list[VideoOut], PageMeta]:
        """Published videos, optionally for one owner, newest first by default."""
        pagination = self.pagination_from(dto.pagination)
        if not pagination.sort:
            pagination.sort = ["-created_at"]
        filters: dict[str, Any] = {"is_published": True, "owner_id": dto.owner_id}
        with self.ro_uow() as uow:
            page = uow.videos.paginate(pagination, filters=filters)
            items = [to_video_out(v) for v in page.items]
        return items, PageMeta.build(page=page.page, limit=page.limit, total=page.total)

    def update_video(self, owner_id: int, video_id: int, dto: VideoUpdateIn) -> VideoOut:
        """
        :raises NotFoundError: Unknown video.
        :raises AuthorizationError: Caller does not own the video.
        """
        with self.rw_uow() as uow:
            video = uow.videos.get_for_update(video_id)
            if video is None:
                raise NotFoundError("Video", video_id)
            self.ensure_owner(owner_id, video.owner_id, msg="You can only edit your own videos.")

            updates = {
                k: v
                for k, v in {
                    "title": dto.title,
                    "description": dto.description,
                    "thumbnail_url": dto.thumbnail_url,
                    "is_published": dto.is_published,
                }.items()
                if v is not None
            }
            try:
                uow.videos.update(video, **updates)
            except ValueError as exc:
                raise ServiceError(str(exc)) from exc
            return to_video_out(video)

    def delete_video(self, owner_id: int, video_id: int) -> None:
        """
        :raises NotFoundError: Unknown video.
        :raises AuthorizationError: Caller does not own the video.
        """
        with self.rw_uow() as uow:
            video = uow.videos.get_for_update(video_id)
            if video is None:
                raise NotFoundError("Video", video_id)
            self.ensure_owner(owner_id, video.owner_id, msg="You can only delete your own videos.")
            uow.videos.delete(video)
        log.info("video.deleted", extra={"event": "video.deleted", "subject_id": owner_id})

    def watch_history(
        self, user_id: int, dto: PaginationIn
    ) -> tuple[list[WatchHistoryItemOut], PageMeta]:
        """The user's watched videos, most recent first."""
        pagination = self.pagination_from(dto)
        pagination.sort = ["-watched_at"]
        stmt = select(WatchHistoryEntry).where(WatchHistoryEntry.user_id == user_id)
        with self.ro_uow() as uow:
            page = uow.watch_history.paginate(pagination, stmt=stmt)
            items = [
                WatchHistoryItemOut(video=to_video_out(e.video), watched_at=e.watched_at)
                for e in page.items
            ]
        return items, PageMeta.build(page=page.page, limit=page.limit, total=page.total)
