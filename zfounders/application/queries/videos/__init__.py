"""Video queries."""

from zfounders.application.queries.videos.get_video import GetVideoQuery, GetVideoHandler
from zfounders.application.queries.videos.list_feed import ListFeedQuery, ListFeedHandler
from zfounders.application.queries.videos.video_analytics import (
    VideoAnalyticsQuery,
    VideoAnalyticsHandler,
)

__all__ = [
    "GetVideoQuery",
    "GetVideoHandler",
    "ListFeedQuery",
    "ListFeedHandler",
    "VideoAnalyticsQuery",
    "VideoAnalyticsHandler",
]
