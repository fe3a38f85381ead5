"""
Video Repository Port - Videos, their engagement rows and view tracking.
"""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Iterable, Optional

from zfounders.domain.entities.social import Like
from zfounders.domain.entities.video import Comment, Video, VideoView
from zfounders.domain.value_objects.enums import VisibilityClass
from zfounders.domain.value_objects.user_id import UserId
from zfounders.domain.value_objects.video_id import VideoId


class VideoRepository(ABC):
    @abstractmethod
    async def get_by_id(self, video_id: VideoId) -> Optional[Video]: ...

    @abstractmethod
    async def save(self, video: Video) -> None: ...

    @abstractmethod
    async def list_feed(
        self,
        visibility: Iterable[VisibilityClass],
        owner_id: Optional[UserId],
        limit: int,
        offset: int,
    ) -> list[Video]:
        """Newest first. Rows owned by ``owner_id`` are included whatever their class."""
        ...

    @abstractmethod
    async def count_created_since(self, user_id: UserId, since: datetime) -> int: ...

    @abstractmethod
    async def get_pinned_pitch(self, user_id: UserId) -> Optional[Video]: ...

    @abstractmethod
    async def add_like(self, like: Like) -> bool:
        """Idempotent. Returns True only when a new row was created."""
        ...

    @abstractmethod
    async def add_comment(self, comment: Comment) -> None: ...

    @abstractmethod
    async def list_comments(self, video_id: VideoId) -> list[Comment]: ...

    @abstractmethod
    async def record_view(self, view: VideoView) -> None: ...

    @abstractmethod
    async def list_views(self, video_id: VideoId) -> list[VideoView]: ...
