"""
Video Entity - A short-form post with an audience visibility class.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional
from uuid import uuid4

from zfounders.domain.value_objects.enums import VideoType, VisibilityClass
from zfounders.domain.value_objects.user_id import UserId
from zfounders.domain.value_objects.video_id import VideoId


@dataclass
class Video:
    id: VideoId
    user_id: UserId
    video_url: str
    type: VideoType
    visibility: VisibilityClass
    created_at: datetime
    caption: Optional[str] = None
    thumbnail_url: Optional[str] = None
    duration: Optional[int] = None
    tags: list[str] = field(default_factory=list)
    is_pinned: bool = False
    view_count: int = 0
    like_count: int = 0
    comment_count: int = 0
    share_count: int = 0

    @classmethod
    def create(
        cls,
        user_id: UserId,
        video_url: str,
        type: VideoType,
        visibility: VisibilityClass,
        now: datetime,
        **kwargs,
    ) -> Video:
        video = cls(
            id=VideoId.new(),
            user_id=user_id,
            video_url=video_url,
            type=type,
            visibility=visibility,
            created_at=now,
            **kwargs,
        )
        # Only pitches can be pinned.
        if video.type != VideoType.PITCH:
            video.is_pinned = False
        return video

    def is_owned_by(self, user_id: Optional[UserId]) -> bool:
        return user_id is not None and self.user_id == user_id


@dataclass
class Comment:
    id: str
    video_id: VideoId
    user_id: UserId
    content: str
    created_at: datetime
    parent_id: Optional[str] = None

    @classmethod
    def create(
        cls,
        video_id: VideoId,
        user_id: UserId,
        content: str,
        now: datetime,
        parent_id: Optional[str] = None,
    ) -> Comment:
        return cls(
            id=str(uuid4()),
            video_id=video_id,
            user_id=user_id,
            content=content,
            created_at=now,
            parent_id=parent_id,
        )


@dataclass
class VideoView:
    video_id: VideoId
    viewer_id: UserId
    watch_time: int
    created_at: datetime
