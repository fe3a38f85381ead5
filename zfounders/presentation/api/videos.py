"""Videos and feed API Routers."""

from typing import Optional

from dishka.integrations.fastapi import FromDishka, inject
from fastapi import APIRouter, Depends, Query, status

from zfounders.application.commands.videos import (
    CommentOnVideoCommand,
    CommentOnVideoHandler,
    CreateVideoCommand,
    CreateVideoHandler,
    LikeVideoCommand,
    LikeVideoHandler,
)
from zfounders.application.dto import (
    CommentDTO,
    VideoAnalyticsDTO,
    VideoDTO,
    VideoListDTO,
)
from zfounders.application.queries.videos import (
    GetVideoHandler,
    GetVideoQuery,
    ListFeedHandler,
    ListFeedQuery,
    VideoAnalyticsHandler,
    VideoAnalyticsQuery,
)
from zfounders.domain.value_objects import UserId
from zfounders.presentation.api.schemas import CommentRequest, CreateVideoRequest
from zfounders.presentation.dependencies import (
    get_current_user,
    get_optional_user,
    parse_video_id,
)

router = APIRouter(prefix="/api/videos", tags=["videos"])
feed_router = APIRouter(prefix="/api/feed", tags=["videos"])


@router.post("", response_model=VideoDTO, status_code=status.HTTP_201_CREATED)
@inject
async def create_video(
    request: CreateVideoRequest,
    handler: FromDishka[CreateVideoHandler],
    current_user: UserId = Depends(get_current_user),
):
    command = CreateVideoCommand(
        user_id=current_user,
        video_url=request.video_url,
        type=request.type,
        visibility=request.visibility,
        caption=request.caption,
        thumbnail_url=request.thumbnail_url,
        duration=request.duration,
        tags=tuple(request.tags),
        is_pinned=request.is_pinned,
    )
    return await handler.execute(command)


@router.get("/{video_id}", response_model=VideoDTO)
@inject
async def get_video(
    video_id: str,
    handler: FromDishka[GetVideoHandler],
    watch_time: int = Query(default=0, ge=0, alias="watchTime"),
    viewer: Optional[UserId] = Depends(get_optional_user),
):
    """Fetch one video; an authenticated non-owner view is recorded."""
    query = GetVideoQuery(
        video_id=parse_video_id(video_id), viewer_id=viewer, watch_time=watch_time
    )
    return await handler.execute(query)


@router.post("/{video_id}/like", response_model=VideoDTO)
@inject
async def like_video(
    video_id: str,
    handler: FromDishka[LikeVideoHandler],
    current_user: UserId = Depends(get_current_user),
):
    return await handler.execute(
        LikeVideoCommand(user_id=current_user, video_id=parse_video_id(video_id))
    )


@router.post(
    "/{video_id}/comments",
    response_model=CommentDTO,
    status_code=status.HTTP_201_CREATED,
)
@inject
async def comment_on_video(
    video_id: str,
    request: CommentRequest,
    handler: FromDishka[CommentOnVideoHandler],
    current_user: UserId = Depends(get_current_user),
):
    command = CommentOnVideoCommand(
        user_id=current_user,
        video_id=parse_video_id(video_id),
        content=request.content,
        parent_id=request.parent_id,
    )
    return await handler.execute(command)


@router.get("/{video_id}/analytics", response_model=VideoAnalyticsDTO)
@inject
async def video_analytics(
    video_id: str,
    handler: FromDishka[VideoAnalyticsHandler],
    current_user: UserId = Depends(get_current_user),
):
    return await handler.execute(
        VideoAnalyticsQuery(user_id=current_user, video_id=parse_video_id(video_id))
    )


@feed_router.get("", response_model=VideoListDTO)
@inject
async def list_feed(
    handler: FromDishka[ListFeedHandler],
    limit: int = Query(default=20, ge=1, le=100),
    offset: int = Query(default=0, ge=0),
    viewer: Optional[UserId] = Depends(get_optional_user),
):
    """Newest-first feed restricted to the classes the viewer may see."""
    return await handler.execute(ListFeedQuery(viewer_id=viewer, limit=limit, offset=offset))
