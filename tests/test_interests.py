import pytest

from zfounders.application.commands.interests import (
    ExpressInterestCommand,
    ExpressInterestHandler,
    RespondToInterestCommand,
    RespondToInterestHandler,
)
from zfounders.application.queries.interests import (
    ListReceivedInterestsHandler,
    ListReceivedInterestsQuery,
    ListSentInterestsHandler,
    ListSentInterestsQuery,
)
from zfounders.domain.entities import Block
from zfounders.domain.exceptions import (
    AccessDeniedError,
    DomainValidationError,
    EntityNotFoundError,
)
from zfounders.domain.value_objects import (
    AccountType,
    InterestId,
    InterestStatus,
    NotificationType,
    VideoType,
    VisibilityClass,
)
from zfounders.infrastructure.persistence.memory import MemoryUnitOfWork

from tests.conftest import START, make_user, make_video


@pytest.fixture()
def express(store, engine, notifier):
    async def _express(investor, founder, video, message=None):
        handler = ExpressInterestHandler(MemoryUnitOfWork(store), engine, notifier)
        return await handler.execute(
            ExpressInterestCommand(investor.id, founder.id, video.id, message)
        )

    return _express


@pytest.fixture()
def respond(store, engine, notifier):
    async def _respond(founder, interest_id, accept):
        handler = RespondToInterestHandler(MemoryUnitOfWork(store), engine, notifier)
        return await handler.execute(
            RespondToInterestCommand(founder.id, InterestId(interest_id), accept)
        )

    return _respond


async def test_private_investor_interest_notifies_anonymously(store, express):
    investor = make_user(store, AccountType.INVESTOR, firm="Stealth Fund")
    founder = make_user(store, AccountType.FOUNDER)
    pitch = make_video(store, founder, type=VideoType.PITCH)

    interest = await express(investor, founder, pitch, "Keen to chat")

    assert interest.status == "pending"
    [notification] = store.notifications
    assert notification.type == NotificationType.EXPRESS_INTEREST
    assert notification.title == "Investor Interested!"
    assert notification.body == "A verified investor is interested in your pitch"
    assert notification.data["isPublic"] is False
    assert "Stealth Fund" not in notification.body


async def test_public_investor_interest_names_firm(store, express):
    investor = make_user(store, AccountType.INVESTOR, public=True, firm="Acme Capital")
    founder = make_user(store, AccountType.FOUNDER)
    pitch = make_video(store, founder, type=VideoType.PITCH)
    await express(investor, founder, pitch)
    assert store.notifications[0].body == "Acme Capital is interested in your pitch"


async def test_repeated_interest_resets_to_pending(store, express, respond):
    investor = make_user(store, AccountType.INVESTOR)
    founder = make_user(store, AccountType.FOUNDER)
    pitch = make_video(store, founder, type=VideoType.PITCH)

    first = await express(investor, founder, pitch)
    await respond(founder, first.id, accept=False)
    assert store.interests[first.id].status == InterestStatus.DECLINED

    again = await express(investor, founder, pitch, "Second try")
    assert again.id == first.id
    assert len(store.interests) == 1
    assert store.interests[first.id].status == InterestStatus.PENDING
    assert store.interests[first.id].message == "Second try"


async def test_unverified_investor_cannot_express_interest(store, express):
    pending = make_user(store, AccountType.INVESTOR, verified=False)
    founder = make_user(store, AccountType.FOUNDER)
    pitch = make_video(store, founder, type=VideoType.PITCH)
    with pytest.raises(AccessDeniedError) as exc_info:
        await express(pending, founder, pitch)
    assert exc_info.value.hint == "verify"
    assert store.interests == {}


async def test_video_must_belong_to_founder(store, express):
    investor = make_user(store, AccountType.INVESTOR)
    founder = make_user(store, AccountType.FOUNDER)
    other = make_user(store, AccountType.FOUNDER)
    pitch = make_video(store, other, type=VideoType.PITCH)
    with pytest.raises(DomainValidationError):
        await express(investor, founder, pitch)


async def test_investor_must_be_able_to_see_video(store, express):
    investor = make_user(store, AccountType.INVESTOR)
    founder = make_user(store, AccountType.FOUNDER)
    video = make_video(store, founder, visibility=VisibilityClass.COMMUNITY)
    with pytest.raises(AccessDeniedError) as exc_info:
        await express(investor, founder, video)
    assert exc_info.value.reason == "community_only"


async def test_block_prevents_interest(store, express):
    investor = make_user(store, AccountType.INVESTOR)
    founder = make_user(store, AccountType.FOUNDER)
    pitch = make_video(store, founder, type=VideoType.PITCH)
    store.blocks[(founder.id.value, investor.id.value)] = Block(founder.id, investor.id, START)
    with pytest.raises(AccessDeniedError) as exc_info:
        await express(investor, founder, pitch)
    assert exc_info.value.reason == "blocked"


async def test_accept_reveals_and_notifies(store, express, respond):
    investor = make_user(store, AccountType.INVESTOR)
    founder = make_user(store, AccountType.FOUNDER)
    pitch = make_video(store, founder, type=VideoType.PITCH)
    interest = await express(investor, founder, pitch)

    accepted = await respond(founder, interest.id, accept=True)

    assert accepted.status == "accepted"
    assert (investor.id.value, founder.id.value) in store.reveals
    [conversation] = store.conversations.values()
    assert conversation.status.value == "ACTIVE"
    assert conversation.participant1_id == founder.id
    investor_notes = [n for n in store.notifications if n.user_id == investor.id]
    assert [n.title for n in investor_notes] == ["Interest Accepted!"]

    # Accepting twice changes nothing and does not notify again.
    await respond(founder, interest.id, accept=True)
    assert len(store.conversations) == 1
    assert len([n for n in store.notifications if n.user_id == investor.id]) == 1


async def test_decline_is_silent(store, express, respond):
    investor = make_user(store, AccountType.INVESTOR)
    founder = make_user(store, AccountType.FOUNDER)
    pitch = make_video(store, founder, type=VideoType.PITCH)
    interest = await express(investor, founder, pitch)

    declined = await respond(founder, interest.id, accept=False)

    assert declined.status == "declined"
    assert store.reveals == {}
    assert store.conversations == {}
    assert not [n for n in store.notifications if n.user_id == investor.id]


async def test_only_target_founder_can_respond(store, express, respond):
    investor = make_user(store, AccountType.INVESTOR)
    founder = make_user(store, AccountType.FOUNDER)
    stranger = make_user(store, AccountType.FOUNDER)
    pitch = make_video(store, founder, type=VideoType.PITCH)
    interest = await express(investor, founder, pitch)
    with pytest.raises(EntityNotFoundError):
        await respond(stranger, interest.id, accept=True)


async def test_received_listing_redacts_until_accepted(store, engine, express, respond):
    investor = make_user(store, AccountType.INVESTOR, firm="Quiet Ventures")
    founder = make_user(store, AccountType.FOUNDER)
    pitch = make_video(store, founder, type=VideoType.PITCH)
    interest = await express(investor, founder, pitch)

    async def received(status=None):
        handler = ListReceivedInterestsHandler(MemoryUnitOfWork(store), engine)
        return await handler.execute(ListReceivedInterestsQuery(founder.id, status))

    [row] = await received()
    assert row.investor.is_private
    assert row.investor.firm is None

    await respond(founder, interest.id, accept=True)
    [row] = await received(InterestStatus.ACCEPTED)
    assert not row.investor.is_private
    assert row.investor.firm == "Quiet Ventures"
    assert await received(InterestStatus.PENDING) == []


async def test_sent_listing_requires_verified_investor(store, engine, express):
    investor = make_user(store, AccountType.INVESTOR)
    founder = make_user(store, AccountType.FOUNDER)
    pitch = make_video(store, founder, type=VideoType.PITCH)
    await express(investor, founder, pitch)

    handler = ListSentInterestsHandler(MemoryUnitOfWork(store), engine)
    sent = await handler.execute(ListSentInterestsQuery(investor.id))
    assert [i.video_id for i in sent] == [pitch.id.value]

    with pytest.raises(AccessDeniedError):
        await ListSentInterestsHandler(MemoryUnitOfWork(store), engine).execute(
            ListSentInterestsQuery(founder.id)
        )

    pending = make_user(store, AccountType.INVESTOR, verified=False)
    with pytest.raises(AccessDeniedError) as exc_info:
        await ListSentInterestsHandler(MemoryUnitOfWork(store), engine).execute(
            ListSentInterestsQuery(pending.id)
        )
    assert exc_info.value.reason == "verification_required"
