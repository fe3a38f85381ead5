"""Prisma Video Repository Implementation (videos, likes, comments, views)."""

from datetime import datetime
from typing import Iterable, Optional

from prisma import Prisma
from prisma.models import Video as PrismaVideo

from zfounders.domain.entities.social import Like
from zfounders.domain.entities.video import Comment, Video, VideoView
from zfounders.domain.ports.repositories import VideoRepository
from zfounders.domain.value_objects import (
    UserId,
    VideoId,
    VideoType,
    VisibilityClass,
)


class PrismaVideoRepository(VideoRepository):
    _prisma: Prisma

    def __init__(self, prisma: Prisma):
        self._prisma = prisma

    def _to_entity(self, record: PrismaVideo) -> Video:
        return Video(
            id=VideoId(record.id),
            user_id=UserId(record.user_id),
            video_url=record.video_url,
            type=VideoType(record.type),
            visibility=VisibilityClass(record.visibility),
            created_at=record.created_at,
            caption=record.caption,
            thumbnail_url=record.thumbnail_url,
            duration=record.duration,
            tags=list(record.tags or []),
            is_pinned=record.is_pinned,
            view_count=record.view_count,
            like_count=record.like_count,
            comment_count=record.comment_count,
            share_count=record.share_count,
        )

    async def get_by_id(self, video_id: VideoId) -> Optional[Video]:
        record = await self._prisma.video.find_unique(where={"id": video_id.value})
        return self._to_entity(record) if record else None

    async def save(self, video: Video) -> None:
        fields = {
            "video_url": video.video_url,
            "thumbnail_url": video.thumbnail_url,
            "type": video.type.value,
            "visibility": video.visibility.value,
            "caption": video.caption,
            "duration": video.duration,
            "tags": list(video.tags),
            "is_pinned": video.is_pinned,
            "view_count": video.view_count,
            "like_count": video.like_count,
            "comment_count": video.comment_count,
            "share_count": video.share_count,
        }
        await self._prisma.video.upsert(
            where={"id": video.id.value},
            data={
                "create": {
                    "id": video.id.value,
                    "user_id": video.user_id.value,
                    "created_at": video.created_at,
                    **fields,
                },
                "update": fields,
            },
        )

    async def list_feed(
        self,
        visibility: Iterable[VisibilityClass],
        owner_id: Optional[UserId],
        limit: int,
        offset: int,
    ) -> list[Video]:
        conditions = [{"visibility": {"in": [v.value for v in visibility]}}]
        if owner_id is not None:
            conditions.append({"user_id": owner_id.value})
        records = await self._prisma.video.find_many(
            where={"OR": conditions},
            order={"created_at": "desc"},
            take=limit,
            skip=offset,
        )
        return [self._to_entity(r) for r in records]

    async def count_created_since(self, user_id: UserId, since: datetime) -> int:
        return await self._prisma.video.count(
            where={"user_id": user_id.value, "created_at": {"gte": since}}
        )

    async def get_pinned_pitch(self, user_id: UserId) -> Optional[Video]:
        record = await self._prisma.video.find_first(
            where={"user_id": user_id.value, "is_pinned": True, "type": VideoType.PITCH.value}
        )
        return self._to_entity(record) if record else None

    async def add_like(self, like: Like) -> bool:
        # ON CONFLICT DO NOTHING: a duplicate like is already true.
        created = await self._prisma.like.create_many(
            data=[
                {
                    "video_id": like.video_id.value,
                    "user_id": like.user_id.value,
                    "created_at": like.created_at,
                }
            ],
            skip_duplicates=True,
        )
        return created > 0

    async def add_comment(self, comment: Comment) -> None:
        await self._prisma.comment.create(
            data={
                "id": comment.id,
                "video_id": comment.video_id.value,
                "user_id": comment.user_id.value,
                "content": comment.content,
                "parent_id": comment.parent_id,
                "created_at": comment.created_at,
            }
        )

    async def list_comments(self, video_id: VideoId) -> list[Comment]:
        records = await self._prisma.comment.find_many(
            where={"video_id": video_id.value}, order={"created_at": "asc"}
        )
        return [
            Comment(
                id=r.id,
                video_id=VideoId(r.video_id),
                user_id=UserId(r.user_id),
                content=r.content,
                created_at=r.created_at,
                parent_id=r.parent_id,
            )
            for r in records
        ]

    async def record_view(self, view: VideoView) -> None:
        await self._prisma.videoview.create(
            data={
                "video_id": view.video_id.value,
                "viewer_id": view.viewer_id.value,
                "watch_time": view.watch_time,
                "created_at": view.created_at,
            }
        )

    async def list_views(self, video_id: VideoId) -> list[VideoView]:
        records = await self._prisma.videoview.find_many(where={"video_id": video_id.value})
        return [
            VideoView(
                video_id=VideoId(r.video_id),
                viewer_id=UserId(r.viewer_id),
                watch_time=r.watch_time,
                created_at=r.created_at,
            )
            for r in records
        ]
