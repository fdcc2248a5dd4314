from .base import BaseRepository, Page, Pagination
from .subscription import SubscriptionRepository
from .user import UserRepository
from .video import VideoRepository
from .watch_history import WatchHistoryRepository

__all__ = [
    "BaseRepository",
    "Page",
    "Pagination",
    "SubscriptionRepository",
    "UserRepository",
    "VideoRepository",
    "WatchHistoryRepository",
]
