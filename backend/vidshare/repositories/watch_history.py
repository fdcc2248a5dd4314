"""Watch-history repository."""

from __future__ import annotations

from datetime import UTC, datetime
from typing import cast

from sqlalchemy import select

from vidshare.models.video import WatchHistoryEntry
from vidshare.repositories.base import BaseRepository


class WatchHistoryRepository(BaseRepository[WatchHistoryEntry]):
    """Persistence-only repository for :class:`WatchHistoryEntry`."""

    model = WatchHistoryEntry

    def _sortable_fields(self):
        return {"watched_at": WatchHistoryEntry.watched_at}

    def _filterable_fields(self):
        return {"user_id": WatchHistoryEntry.user_id}

    def record(self, user_id: int, video_id: int) -> WatchHistoryEntry:
        """Insert the (user, video) entry, or bump ``watched_at`` if it exists."""
        stmt = select(WatchHistoryEntry).where(
            WatchHistoryEntry.user_id == user_id,
            WatchHistoryEntry.video_id == video_id,
        )
        entry = cast(WatchHistoryEntry | None, self.session.execute(stmt).scalars().first())
        now = datetime.now(UTC)
        if entry is None:
            return self.add(WatchHistoryEntry(user_id=user_id, video_id=video_id, watched_at=now))
        entry.watched_at = now
        self.flush()
        return entry
