from datetime import timedelta

import pytest

from zfounders.domain.entities import AccountTypeChange, Conversation
from zfounders.domain.policies import Actions, PermissionGate, PolicySettings
from zfounders.domain.policies.decision import DenialKind
from zfounders.domain.value_objects import (
    AccountType,
    ConversationStatus,
    SubscriptionTier,
    VideoType,
    VisibilityClass,
)

from tests.conftest import START, make_user, make_video


@pytest.fixture()
def gate():
    return PermissionGate(PolicySettings())


def post(gate, actor, **kwargs):
    params = dict(
        video_type=VideoType.UPDATE,
        visibility=VisibilityClass.PUBLIC,
        duration=30,
        posted_today=0,
        now=START,
    )
    params.update(kwargs)
    return gate.can_act(actor, Actions.POST_VIDEO, **params)


class TestEngagement:
    def test_lurker_cannot_like(self, gate, store):
        lurker = make_user(store, AccountType.LURKER)
        decision = gate.can_act(lurker, Actions.LIKE_VIDEO)
        assert decision.reason == "account_type"
        assert decision.message == "Lurkers cannot like videos. Please upgrade."
        assert decision.hint == "upgrade"

    def test_unverified_investor_cannot_comment(self, gate, store):
        pending = make_user(store, AccountType.INVESTOR, verified=False)
        decision = gate.can_act(pending, Actions.COMMENT)
        assert decision.reason == "verification_required"
        assert decision.message == "Verify your profile to comment."

    def test_like_respects_visibility(self, gate, store):
        founder = make_user(store, AccountType.FOUNDER)
        investor = make_user(store, AccountType.INVESTOR)
        video = make_video(store, founder, visibility=VisibilityClass.COMMUNITY)
        assert gate.can_act(investor, Actions.LIKE_VIDEO, video).reason == "community_only"

    def test_inactive_actor_is_unauthenticated(self, gate, store):
        founder = make_user(store, AccountType.FOUNDER, is_active=False)
        decision = gate.can_act(founder, Actions.COMMENT)
        assert decision.kind == DenialKind.UNAUTHORIZED


class TestPosting:
    def test_only_founders_post_pitches(self, gate, store):
        builder = make_user(store, AccountType.BUILDER)
        decision = post(gate, builder, video_type=VideoType.PITCH)
        assert decision.reason == "video_type"
        assert decision.message == "PITCH videos can only be posted by: FOUNDER"

    def test_lurkers_cannot_post_anything(self, gate, store):
        lurker = make_user(store, AccountType.LURKER)
        assert post(gate, lurker).reason == "video_type"

    def test_duration_cap(self, gate, store):
        founder = make_user(store, AccountType.FOUNDER)
        decision = post(gate, founder, duration=91)
        assert decision.kind == DenialKind.INVALID
        assert post(gate, founder, duration=90).allowed

    def test_free_daily_cap(self, gate, store):
        founder = make_user(store, AccountType.FOUNDER)
        assert post(gate, founder, posted_today=2).allowed
        decision = post(gate, founder, posted_today=3)
        assert decision.kind == DenialKind.QUOTA
        assert decision.reason == "daily_post_limit"
        assert decision.resets_at == START.replace(hour=0) + timedelta(days=1)

    def test_premium_daily_cap(self, gate, store):
        founder = make_user(store, AccountType.FOUNDER, tier=SubscriptionTier.FOUNDER_PRO)
        assert post(gate, founder, posted_today=9).allowed
        assert post(gate, founder, posted_today=10).reason == "daily_post_limit"

    def test_investor_only_visibility_needs_premium(self, gate, store):
        free = make_user(store, AccountType.FOUNDER)
        premium = make_user(store, AccountType.FOUNDER, tier=SubscriptionTier.FOUNDER_PRO)
        visibility = VisibilityClass.INVESTORS_ONLY
        assert post(gate, free, visibility=visibility).reason == "premium_required"
        assert post(gate, premium, visibility=visibility).allowed

    def test_lapsed_subscription_is_not_premium(self, gate, store):
        founder = make_user(store, AccountType.FOUNDER, tier=SubscriptionTier.FOUNDER_PRO)
        founder.subscription.current_period_end = START - timedelta(days=1)
        decision = post(gate, founder, visibility=VisibilityClass.INVESTORS_ONLY)
        assert decision.reason == "premium_required"


class TestMessaging:
    def message(self, gate, actor, recipient, **kwargs):
        ctx = dict(blocked=False, follows_recipient=False, conversation=None)
        ctx.update(kwargs)
        return gate.can_act(actor, Actions.SEND_MESSAGE, recipient, **ctx)

    def test_block_wins_over_everything(self, gate, store):
        lurker = make_user(store, AccountType.LURKER)
        founder = make_user(store, AccountType.FOUNDER)
        assert self.message(gate, lurker, founder, blocked=True).reason == "blocked"

    def test_lurker_cannot_message(self, gate, store):
        lurker = make_user(store, AccountType.LURKER)
        founder = make_user(store, AccountType.FOUNDER)
        assert self.message(gate, lurker, founder).reason == "account_type"

    def test_unverified_investor_cannot_message(self, gate, store):
        pending = make_user(store, AccountType.INVESTOR, verified=False)
        founder = make_user(store, AccountType.FOUNDER)
        decision = self.message(gate, pending, founder)
        assert decision.message == "You must be a verified investor to send messages."

    def test_request_conversation_blocks_further_messages(self, gate, store):
        investor = make_user(store, AccountType.INVESTOR)
        founder = make_user(store, AccountType.FOUNDER)
        conversation = Conversation.start(
            investor.id, founder.id, ConversationStatus.REQUEST, False, START
        )
        decision = self.message(gate, investor, founder, conversation=conversation)
        assert decision.message == "Conversation must be accepted first"

    def test_active_conversation_skips_privacy(self, gate, store):
        a = make_user(store, AccountType.FOUNDER)
        b = make_user(store, AccountType.BUILDER, allow_messages_from_everyone=False)
        conversation = Conversation.start(a.id, b.id, ConversationStatus.ACTIVE, True, START)
        assert self.message(gate, a, b, conversation=conversation).allowed

    def test_privacy_requires_follow(self, gate, store):
        a = make_user(store, AccountType.FOUNDER)
        b = make_user(store, AccountType.BUILDER, allow_messages_from_everyone=False)
        assert self.message(gate, a, b).reason == "privacy"
        assert self.message(gate, a, b, follows_recipient=True).allowed

    def test_self_message_is_invalid(self, gate, store):
        a = make_user(store, AccountType.FOUNDER)
        assert self.message(gate, a, a).kind == DenialKind.INVALID

    def test_only_recipient_responds_to_request(self, gate, store):
        investor = make_user(store, AccountType.INVESTOR)
        founder = make_user(store, AccountType.FOUNDER)
        stranger = make_user(store, AccountType.FOUNDER)
        conversation = Conversation.start(
            investor.id, founder.id, ConversationStatus.REQUEST, False, START
        )
        action = Actions.RESPOND_TO_REQUEST
        assert gate.can_act(founder, action, conversation).allowed
        assert gate.can_act(investor, action, conversation).reason == "not_recipient"
        assert gate.can_act(stranger, action, conversation).kind == DenialKind.NOT_FOUND


class TestSocial:
    def test_cannot_follow_private_investor(self, gate, store):
        founder = make_user(store, AccountType.FOUNDER)
        investor = make_user(store, AccountType.INVESTOR)
        decision = gate.can_act(founder, Actions.FOLLOW, investor, blocked=False)
        assert decision.reason == "private_investor"

    def test_can_follow_public_investor(self, gate, store):
        founder = make_user(store, AccountType.FOUNDER)
        investor = make_user(store, AccountType.INVESTOR, public=True)
        assert gate.can_act(founder, Actions.FOLLOW, investor, blocked=False).allowed

    def test_interest_requires_verified_investor_and_founder_target(self, gate, store):
        investor = make_user(store, AccountType.INVESTOR)
        pending = make_user(store, AccountType.INVESTOR, verified=False)
        founder = make_user(store, AccountType.FOUNDER)
        builder = make_user(store, AccountType.BUILDER)
        action = Actions.EXPRESS_INTEREST
        assert gate.can_act(investor, action, founder, blocked=False).allowed
        assert gate.can_act(pending, action, founder, blocked=False).hint == "verify"
        assert gate.can_act(founder, action, founder, blocked=False).reason == "account_type"
        assert gate.can_act(investor, action, builder, blocked=False).reason == "not_founder"


class TestAccountSwitch:
    def switch(self, gate, user, new_type, last_change=None, now=START):
        return gate.can_act(
            user,
            Actions.SWITCH_ACCOUNT_TYPE,
            new_type,
            last_change=last_change,
            now=now,
        )

    def test_allowed_switches(self, gate, store):
        founder = make_user(store, AccountType.FOUNDER)
        lurker = make_user(store, AccountType.LURKER)
        assert self.switch(gate, founder, AccountType.BUILDER).allowed
        assert self.switch(gate, lurker, AccountType.INVESTOR).allowed
        assert self.switch(gate, founder, AccountType.INVESTOR).reason == "switch_not_allowed"

    def test_investor_is_final(self, gate, store):
        investor = make_user(store, AccountType.INVESTOR)
        decision = self.switch(gate, investor, AccountType.FOUNDER)
        assert decision.reason == "switch_not_allowed"

    def test_cooldown(self, gate, store):
        founder = make_user(store, AccountType.FOUNDER)
        change = AccountTypeChange(
            founder.id, AccountType.BUILDER, AccountType.FOUNDER, START - timedelta(days=10)
        )
        decision = self.switch(gate, founder, AccountType.BUILDER, last_change=change)
        assert decision.reason == "switch_cooldown"
        assert decision.resets_at == change.changed_at + timedelta(days=30)

        later = START + timedelta(days=21)
        assert self.switch(gate, founder, AccountType.BUILDER, change, later).allowed
