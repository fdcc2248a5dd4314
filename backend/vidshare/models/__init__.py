from vidshare.models.subscription import Subscription
from vidshare.models.user import User
from vidshare.models.video import Video, WatchHistoryEntry

__all__ = [
    "Subscription",
    "User",
    "Video",
    "WatchHistoryEntry",
]
