"""Video DTOs."""

from pydantic import BaseModel
from datetime import datetime
from typing import Optional

from zfounders.domain.entities.video import Comment, Video


class VideoDTO(BaseModel):
    id: str
    user_id: str
    video_url: str
    thumbnail_url: Optional[str] = None
    type: str
    visibility: str
    caption: Optional[str] = None
    duration: Optional[int] = None
    tags: list[str] = []
    is_pinned: bool = False
    view_count: int = 0
    like_count: int = 0
    comment_count: int = 0
    created_at: datetime


class VideoListDTO(BaseModel):
    videos: list[VideoDTO]
    total: int


class CommentDTO(BaseModel):
    id: str
    video_id: str
    user_id: str
    content: str
    parent_id: Optional[str] = None
    created_at: datetime


class AccountTypeBreakdownDTO(BaseModel):
    founders: int = 0
    builders: int = 0
    investors: int = 0


class VideoAnalyticsDTO(BaseModel):
    view_count: int
    like_count: int
    comment_count: int
    share_count: int
    premium: bool
    upgrade_url: Optional[str] = None
    total_watch_time: Optional[int] = None
    unique_viewers: Optional[int] = None
    account_type_breakdown: Optional[AccountTypeBreakdownDTO] = None
    public_investor_viewers: Optional[list[str]] = None


def to_video_dto(video: Video) -> VideoDTO:
    return VideoDTO(
        id=video.id.value,
        user_id=video.user_id.value,
        video_url=video.video_url,
        thumbnail_url=video.thumbnail_url,
        type=video.type.value,
        visibility=video.visibility.value,
        caption=video.caption,
        duration=video.duration,
        tags=list(video.tags),
        is_pinned=video.is_pinned,
        view_count=video.view_count,
        like_count=video.like_count,
        comment_count=video.comment_count,
        created_at=video.created_at,
    )


def to_comment_dto(comment: Comment) -> CommentDTO:
    return CommentDTO(
        id=comment.id,
        video_id=comment.video_id.value,
        user_id=comment.user_id.value,
        content=comment.content,
        parent_id=comment.parent_id,
        created_at=comment.created_at,
    )
