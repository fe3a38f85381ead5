"""Video Analytics Query. Counters for everyone; the viewer breakdown is premium-only."""

from dataclasses import dataclass

from zfounders.application.common.interfaces import Query, QueryHandler
from zfounders.application.common.policy import PolicyEngine, enforce, load_actor
from zfounders.application.dto.video import AccountTypeBreakdownDTO, VideoAnalyticsDTO
from zfounders.domain.exceptions import EntityNotFoundError
from zfounders.domain.policies.permissions import Actions
from zfounders.domain.ports.unit_of_work import UnitOfWork
from zfounders.domain.value_objects.enums import AccountType
from zfounders.domain.value_objects.user_id import UserId
from zfounders.domain.value_objects.video_id import VideoId


@dataclass(frozen=True)
class VideoAnalyticsQuery(Query[VideoAnalyticsDTO]):
    user_id: UserId
    video_id: VideoId


class VideoAnalyticsHandler(QueryHandler[VideoAnalyticsDTO]):
    def __init__(self, uow: UnitOfWork, engine: PolicyEngine):
        self.uow = uow
        self.engine = engine

    async def execute(self, query: VideoAnalyticsQuery) -> VideoAnalyticsDTO:
        settings = self.engine.settings
        async with self.uow as uow:
            now = self.engine.clock.now()
            owner = await load_actor(uow, query.user_id)
            video = await uow.videos.get_by_id(query.video_id)
            if video is None:
                raise EntityNotFoundError("Video not found")
            enforce(
                self.engine.gate.can_act(owner, Actions.VIEW_ANALYTICS, video),
                Actions.VIEW_ANALYTICS,
                settings,
            )

            basic = dict(
                view_count=video.view_count,
                like_count=video.like_count,
                comment_count=video.comment_count,
                share_count=video.share_count,
            )
            if not settings.is_premium(owner, now):
                return VideoAnalyticsDTO(
                    **basic, premium=False, upgrade_url=settings.upgrade_url
                )

            views = await uow.videos.list_views(video.id)
            viewers = await uow.users.get_many([v.viewer_id for v in views])
            breakdown = AccountTypeBreakdownDTO(
                founders=sum(1 for u in viewers.values() if u.account_type == AccountType.FOUNDER),
                builders=sum(1 for u in viewers.values() if u.account_type == AccountType.BUILDER),
                investors=sum(1 for u in viewers.values() if u.account_type == AccountType.INVESTOR),
            )
            public_investors = [
                u.id.value
                for u in viewers.values()
                if u.is_investor and not u.is_private_investor
            ]
            return VideoAnalyticsDTO(
                **basic,
                premium=True,
                total_watch_time=sum(v.watch_time for v in views),
                unique_viewers=len(viewers),
                account_type_breakdown=breakdown,
                public_investor_viewers=public_investors,
            )
