from .dto import VideoCreateIn, VideoListIn, VideoOut, VideoUpdateIn, WatchHistoryItemOut
from .service import VideoService

__all__ = [
    "VideoCreateIn",
    "VideoListIn",
    "VideoOut",
    "VideoService",
    "VideoUpdateIn",
    "WatchHistoryItemOut",
]
