"""Video repository."""

from __future__ import annotations

from sqlalchemy import update

from vidshare.models.video import Video
from vidshare.repositories.base import BaseRepository


class VideoRepository(BaseRepository[Video]):
    """Persistence-only repository for :class:`Video`."""

    model = Video

    def _sortable_fields(self):
        return {
            "created_at": Video.created_at,
            "title": Video.title,
            "views": Video.views,
            "duration": Video.duration,
        }

    def _filterable_fields(self):
        return {
            "owner_id": Video.owner_id,
            "is_published": Video.is_published,
        }

    def _updatable_fields(self):
        return {"title", "description", "thumbnail_url", "is_published"}

    def increment_views(self, video_id: int) -> None:
        """Bump the view counter in SQL so concurrent viewers don't lose updates."""
        stmt = (
            update(Video)
            .where(Video.id == video_id)
            .values(views=Video.views + 1)
            .execution_options(synchronize_session="fetch")
        )
        self.session.execute(stmt)
