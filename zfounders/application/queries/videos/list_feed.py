"""
List Feed Query.

The resolver narrows the storage query; the per-item check then drops
anything the detail endpoint would refuse (e.g. INVESTORS_ONLY for an
investor whose verification is not approved yet).
"""

from dataclasses import dataclass
from typing import Optional

from zfounders.application.common.interfaces import Query, QueryHandler
from zfounders.application.common.policy import PolicyEngine, load_actor
from zfounders.application.dto.video import VideoListDTO, to_video_dto
from zfounders.domain.policies.visibility import filter_visible, resolve_visibility_classes
from zfounders.domain.ports.unit_of_work import UnitOfWork
from zfounders.domain.value_objects.user_id import UserId


@dataclass(frozen=True)
class ListFeedQuery(Query[VideoListDTO]):
    viewer_id: Optional[UserId] = None
    limit: int = 20
    offset: int = 0


class ListFeedHandler(QueryHandler[VideoListDTO]):
    def __init__(self, uow: UnitOfWork, engine: PolicyEngine):
        self.uow = uow
        self.engine = engine

    async def execute(self, query: ListFeedQuery) -> VideoListDTO:
        async with self.uow as uow:
            viewer = None
            if query.viewer_id is not None:
                viewer = await load_actor(uow, query.viewer_id)

            classes = resolve_visibility_classes(viewer)
            rows = await uow.videos.list_feed(
                classes, viewer.id if viewer else None, query.limit, query.offset
            )
            videos = [to_video_dto(v) for v in filter_visible(viewer, rows)]
            return VideoListDTO(videos=videos, total=len(videos))
