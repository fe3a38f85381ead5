"""
Get Video Query.

Uses the same visibility check as the feed. A view by anyone other than the
owner is tracked and pushed to the owner as a realtime ``view_update``.
"""

from dataclasses import dataclass
from typing import Optional

from zfounders.application.common.interfaces import Query, QueryHandler
from zfounders.application.common.policy import PolicyEngine, enforce, load_actor
from zfounders.application.dto.video import VideoDTO, to_video_dto
from zfounders.application.services.notification_emitter import NotificationEmitter
from zfounders.domain.entities.video import VideoView
from zfounders.domain.exceptions import EntityNotFoundError
from zfounders.domain.policies.permissions import Actions
from zfounders.domain.ports.unit_of_work import UnitOfWork
from zfounders.domain.value_objects.enums import NotificationType
from zfounders.domain.value_objects.user_id import UserId
from zfounders.domain.value_objects.video_id import VideoId


@dataclass(frozen=True)
class GetVideoQuery(Query[VideoDTO]):
    video_id: VideoId
    viewer_id: Optional[UserId] = None
    watch_time: int = 0


class GetVideoHandler(QueryHandler[VideoDTO]):
    def __init__(
        self, uow: UnitOfWork, engine: PolicyEngine, notifier: NotificationEmitter
    ):
        self.uow = uow
        self.engine = engine
        self.notifier = notifier

    async def execute(self, query: GetVideoQuery) -> VideoDTO:
        async with self.uow as uow:
            now = self.engine.clock.now()
            viewer = None
            if query.viewer_id is not None:
                viewer = await load_actor(uow, query.viewer_id)

            video = await uow.videos.get_by_id(query.video_id)
            if video is None:
                raise EntityNotFoundError("Video not found")
            enforce(
                self.engine.gate.can_act(viewer, Actions.VIEW_VIDEO, video),
                Actions.VIEW_VIDEO,
                self.engine.settings,
            )

            if viewer is not None and not video.is_owned_by(viewer.id):
                await uow.videos.record_view(
                    VideoView(video.id, viewer.id, max(query.watch_time, 0), now)
                )
                video.view_count += 1
                await uow.videos.save(video)
                self.notifier.push(
                    uow,
                    video.user_id,
                    {
                        "event": NotificationType.VIEW_UPDATE.value,
                        "videoId": video.id.value,
                        "viewCount": video.view_count,
                    },
                )
            return to_video_dto(video)
