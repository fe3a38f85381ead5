from datetime import timedelta

import pytest

from zfounders.application.commands.videos import (
    CommentOnVideoCommand,
    CommentOnVideoHandler,
    CreateVideoCommand,
    CreateVideoHandler,
    LikeVideoCommand,
    LikeVideoHandler,
)
from zfounders.application.queries.videos import (
    GetVideoHandler,
    GetVideoQuery,
    ListFeedHandler,
    ListFeedQuery,
    VideoAnalyticsHandler,
    VideoAnalyticsQuery,
)
from zfounders.domain.exceptions import (
    AccessDeniedError,
    DomainValidationError,
    EntityNotFoundError,
    QuotaExceededError,
    UnauthorizedError,
)
from zfounders.domain.value_objects import (
    AccountType,
    NotificationType,
    SubscriptionTier,
    VideoId,
    VideoType,
    VisibilityClass,
)
from zfounders.infrastructure.persistence.memory import MemoryUnitOfWork

from tests.conftest import make_user, make_video


@pytest.fixture()
def create(store, engine):
    async def _create(user, **kwargs):
        kwargs.setdefault("video_url", "https://cdn.example.com/new.mp4")
        handler = CreateVideoHandler(MemoryUnitOfWork(store), engine)
        return await handler.execute(CreateVideoCommand(user_id=user.id, **kwargs))

    return _create


@pytest.fixture()
def get_video(store, engine, notifier):
    async def _get(video_id, viewer=None, watch_time=0):
        handler = GetVideoHandler(MemoryUnitOfWork(store), engine, notifier)
        return await handler.execute(
            GetVideoQuery(video_id, viewer.id if viewer else None, watch_time)
        )

    return _get


@pytest.fixture()
def feed(store, engine):
    async def _feed(viewer=None):
        handler = ListFeedHandler(MemoryUnitOfWork(store), engine)
        return await handler.execute(ListFeedQuery(viewer.id if viewer else None))

    return _feed


class TestInvestorOnlyVideos:
    async def test_unverified_investor_sees_nothing_of_it(
        self, store, create, feed, get_video
    ):
        founder = make_user(store, AccountType.FOUNDER, tier=SubscriptionTier.FOUNDER_PRO)
        pending = make_user(store, AccountType.INVESTOR, verified=False)
        created = await create(
            founder, type=VideoType.PITCH, visibility=VisibilityClass.INVESTORS_ONLY
        )

        listing = await feed(pending)
        assert created.id not in [v.id for v in listing.videos]

        with pytest.raises(AccessDeniedError) as exc_info:
            await get_video(VideoId(created.id), pending)
        assert exc_info.value.reason == "verification_required"
        assert exc_info.value.hint == "verify"

    async def test_verified_investor_sees_it(self, store, create, feed, get_video):
        founder = make_user(store, AccountType.FOUNDER, tier=SubscriptionTier.FOUNDER_PRO)
        investor = make_user(store, AccountType.INVESTOR)
        created = await create(
            founder, type=VideoType.PITCH, visibility=VisibilityClass.INVESTORS_ONLY
        )
        listing = await feed(investor)
        assert [v.id for v in listing.videos] == [created.id]
        assert (await get_video(VideoId(created.id), investor)).id == created.id

    async def test_free_founder_cannot_publish_it(self, store, create):
        founder = make_user(store, AccountType.FOUNDER)
        with pytest.raises(AccessDeniedError) as exc_info:
            await create(founder, visibility=VisibilityClass.INVESTORS_ONLY)
        assert exc_info.value.reason == "premium_required"
        assert exc_info.value.details["upgrade_url"]


class TestFeed:
    async def test_each_audience_gets_its_classes(self, store, feed):
        founder = make_user(store, AccountType.FOUNDER)
        public = make_video(store, founder, visibility=VisibilityClass.PUBLIC)
        community = make_video(store, founder, visibility=VisibilityClass.COMMUNITY)
        investors = make_video(store, founder, visibility=VisibilityClass.INVESTORS_ONLY)

        builder = make_user(store, AccountType.BUILDER)
        investor = make_user(store, AccountType.INVESTOR)
        lurker = make_user(store, AccountType.LURKER)

        def ids(listing):
            return {v.id for v in listing.videos}

        assert ids(await feed(builder)) == {public.id.value, community.id.value}
        assert ids(await feed(investor)) == {public.id.value, investors.id.value}
        assert ids(await feed(lurker)) == {public.id.value}
        assert ids(await feed(None)) == {public.id.value}
        assert len((await feed(founder)).videos) == 3

    async def test_anonymous_cannot_open_community_video(self, store, get_video):
        founder = make_user(store, AccountType.FOUNDER)
        video = make_video(store, founder, visibility=VisibilityClass.COMMUNITY)
        with pytest.raises(UnauthorizedError):
            await get_video(video.id)


class TestCreate:
    async def test_daily_cap_and_reset(self, store, create, clock):
        builder = make_user(store, AccountType.BUILDER)
        for _ in range(3):
            await create(builder)
        with pytest.raises(QuotaExceededError) as exc_info:
            await create(builder)
        assert exc_info.value.resets_at == clock.now().replace(hour=0) + timedelta(days=1)

        clock.advance(hours=12)
        await create(builder)

    async def test_pitch_is_founder_only(self, store, create):
        builder = make_user(store, AccountType.BUILDER)
        with pytest.raises(AccessDeniedError) as exc_info:
            await create(builder, type=VideoType.PITCH)
        assert exc_info.value.reason == "video_type"

    async def test_duration_limit(self, store, create):
        founder = make_user(store, AccountType.FOUNDER)
        with pytest.raises(DomainValidationError):
            await create(founder, duration=120)

    async def test_pinning_a_pitch_unpins_previous(self, store, create):
        founder = make_user(store, AccountType.FOUNDER)
        first = await create(founder, type=VideoType.PITCH, is_pinned=True)
        second = await create(founder, type=VideoType.PITCH, is_pinned=True)
        assert not store.videos[first.id].is_pinned
        assert store.videos[second.id].is_pinned

    async def test_only_pitches_are_pinned(self, store, create):
        founder = make_user(store, AccountType.FOUNDER)
        update = await create(founder, type=VideoType.UPDATE, is_pinned=True)
        assert not update.is_pinned


class TestEngagement:
    async def test_like_is_idempotent(self, store, engine, notifier):
        founder = make_user(store, AccountType.FOUNDER)
        builder = make_user(store, AccountType.BUILDER)
        video = make_video(store, founder)

        for _ in range(2):
            handler = LikeVideoHandler(MemoryUnitOfWork(store), engine, notifier)
            result = await handler.execute(LikeVideoCommand(builder.id, video.id))
        assert result.like_count == 1
        likes = [n for n in store.notifications if n.type == NotificationType.NEW_LIKE]
        assert len(likes) == 1

    async def test_lurker_cannot_like(self, store, engine, notifier):
        founder = make_user(store, AccountType.FOUNDER)
        lurker = make_user(store, AccountType.LURKER)
        video = make_video(store, founder)
        handler = LikeVideoHandler(MemoryUnitOfWork(store), engine, notifier)
        with pytest.raises(AccessDeniedError) as exc_info:
            await handler.execute(LikeVideoCommand(lurker.id, video.id))
        assert exc_info.value.message == "Lurkers cannot like videos. Please upgrade."

    async def test_private_investor_comment_reveals_to_owner_only(
        self, store, engine, notifier
    ):
        founder = make_user(store, AccountType.FOUNDER)
        investor = make_user(store, AccountType.INVESTOR, display_name="Dana")
        video = make_video(store, founder)

        handler = CommentOnVideoHandler(MemoryUnitOfWork(store), engine, notifier)
        comment = await handler.execute(
            CommentOnVideoCommand(investor.id, video.id, "  Great traction  ")
        )

        assert comment.content == "Great traction"
        assert set(store.reveals) == {(investor.id.value, founder.id.value)}
        assert store.videos[video.id.value].comment_count == 1
        [notification] = store.notifications
        assert notification.title == "New Comment"
        assert notification.body == "Dana commented on your video"

    async def test_comment_validation(self, store, engine, notifier):
        founder = make_user(store, AccountType.FOUNDER)
        video = make_video(store, founder)
        handler = CommentOnVideoHandler(MemoryUnitOfWork(store), engine, notifier)
        with pytest.raises(DomainValidationError):
            await handler.execute(CommentOnVideoCommand(founder.id, video.id, "x" * 501))

    async def test_view_is_tracked_and_pushed(self, store, get_video, realtime):
        founder = make_user(store, AccountType.FOUNDER)
        builder = make_user(store, AccountType.BUILDER)
        video = make_video(store, founder)

        result = await get_video(video.id, builder, watch_time=12)
        assert result.view_count == 1
        [event] = realtime.for_user(founder.id)
        assert event == {
            "event": "view_update",
            "videoId": video.id.value,
            "viewCount": 1,
        }

        await get_video(video.id, founder)
        assert store.videos[video.id.value].view_count == 1


class TestAnalytics:
    async def analytics(self, store, engine, user, video):
        handler = VideoAnalyticsHandler(MemoryUnitOfWork(store), engine)
        return await handler.execute(VideoAnalyticsQuery(user.id, video.id))

    async def test_free_owner_gets_counters_and_upgrade_link(self, store, engine):
        founder = make_user(store, AccountType.FOUNDER)
        video = make_video(store, founder)
        result = await self.analytics(store, engine, founder, video)
        assert not result.premium
        assert result.upgrade_url == "/api/subscriptions/plans"
        assert result.account_type_breakdown is None

    async def test_premium_owner_gets_breakdown(self, store, engine, get_video):
        founder = make_user(store, AccountType.FOUNDER, tier=SubscriptionTier.FOUNDER_PRO)
        video = make_video(store, founder)
        public_investor = make_user(store, AccountType.INVESTOR, public=True)
        private_investor = make_user(store, AccountType.INVESTOR)
        builder = make_user(store, AccountType.BUILDER)
        for viewer, seconds in ((public_investor, 10), (private_investor, 20), (builder, 5)):
            await get_video(video.id, viewer, watch_time=seconds)
        await get_video(video.id, builder, watch_time=5)

        result = await self.analytics(store, engine, founder, video)
        assert result.premium
        assert result.view_count == 4
        assert result.total_watch_time == 40
        assert result.unique_viewers == 3
        assert result.account_type_breakdown.investors == 2
        assert result.account_type_breakdown.builders == 1
        assert result.public_investor_viewers == [public_investor.id.value]

    async def test_non_owner_gets_not_found(self, store, engine):
        founder = make_user(store, AccountType.FOUNDER)
        other = make_user(store, AccountType.FOUNDER)
        video = make_video(store, founder)
        with pytest.raises(EntityNotFoundError):
            await self.analytics(store, engine, other, video)
