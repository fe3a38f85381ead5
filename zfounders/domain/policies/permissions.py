"""
Permission Gate - can this actor perform this action on this target?

Each rule is a small predicate returning a Decision. Facts that need a
storage lookup (block edges, follow edges, today's post count) are loaded by
the caller and passed in, so every rule here is synchronous and pure.
``can_act`` is the single entry point that dispatches by action.
"""

from datetime import datetime, timedelta
from enum import Enum
from typing import Any, Optional

from zfounders.domain.entities.conversation import Conversation
from zfounders.domain.entities.interest import ExpressInterest
from zfounders.domain.entities.user import AccountTypeChange, User
from zfounders.domain.entities.video import Video
from zfounders.domain.policies.decision import Decision
from zfounders.domain.policies.periods import next_midnight
from zfounders.domain.policies.settings import PolicySettings
from zfounders.domain.policies.visibility import check_video_visibility
from zfounders.domain.value_objects.enums import (
    AccountType,
    ConversationStatus,
    VideoType,
    VisibilityClass,
)


class Actions(str, Enum):
    VIEW_VIDEO = "view_video"
    LIKE_VIDEO = "like_video"
    COMMENT = "comment"
    POST_VIDEO = "post_video"
    VIEW_ANALYTICS = "view_analytics"
    SEND_MESSAGE = "send_message"
    VIEW_CONVERSATION = "view_conversation"
    RESPOND_TO_REQUEST = "respond_to_request"
    FOLLOW = "follow"
    EXPRESS_INTEREST = "express_interest"
    RESPOND_TO_INTEREST = "respond_to_interest"
    SWITCH_ACCOUNT_TYPE = "switch_account_type"
    REVIEW_VERIFICATION = "review_verification"


VIDEO_TYPE_PERMISSIONS = {
    VideoType.PITCH: (AccountType.FOUNDER,),
    VideoType.UPDATE: (AccountType.FOUNDER, AccountType.BUILDER, AccountType.INVESTOR),
    VideoType.ASK: (AccountType.FOUNDER, AccountType.BUILDER, AccountType.INVESTOR),
    VideoType.WIN_LOSS: (AccountType.FOUNDER, AccountType.BUILDER, AccountType.INVESTOR),
}

ACCOUNT_TYPE_SWITCHES = {
    AccountType.FOUNDER: {AccountType.BUILDER},
    AccountType.BUILDER: {AccountType.FOUNDER},
    AccountType.LURKER: {AccountType.FOUNDER, AccountType.BUILDER, AccountType.INVESTOR},
    AccountType.INVESTOR: set(),
}


def _engagement_gate(actor: User, lurker_message: str, verify_message: str) -> Decision:
    if actor.is_lurker:
        return Decision.deny("account_type", lurker_message, hint="upgrade")
    if actor.is_investor and not actor.is_approved_investor:
        return Decision.deny("verification_required", verify_message, hint="verify")
    return Decision.allow()


class PermissionGate:
    def __init__(self, settings: PolicySettings):
        self.settings = settings
        self._rules = {
            Actions.VIEW_VIDEO: self.can_view_video,
            Actions.LIKE_VIDEO: self.can_like,
            Actions.COMMENT: self.can_comment,
            Actions.POST_VIDEO: self.can_post_video,
            Actions.VIEW_ANALYTICS: self.can_view_analytics,
            Actions.SEND_MESSAGE: self.can_message,
            Actions.VIEW_CONVERSATION: self.can_view_conversation,
            Actions.RESPOND_TO_REQUEST: self.can_respond_to_request,
            Actions.FOLLOW: self.can_follow,
            Actions.EXPRESS_INTEREST: self.can_express_interest,
            Actions.RESPOND_TO_INTEREST: self.can_respond_to_interest,
            Actions.SWITCH_ACCOUNT_TYPE: self.can_switch_account_type,
            Actions.REVIEW_VERIFICATION: self.can_review_verification,
        }

    def can_act(
        self, actor: Optional[User], action: Actions, target: Any = None, **ctx: Any
    ) -> Decision:
        rule = self._rules[action]
        if action == Actions.VIEW_VIDEO:
            return rule(actor, target)
        if actor is None or not actor.is_active:
            return Decision.unauthenticated()
        if target is None:
            return rule(actor, **ctx)
        return rule(actor, target, **ctx)

    # Content

    def can_view_video(self, viewer: Optional[User], video: Video) -> Decision:
        return check_video_visibility(viewer, video)

    def can_like(self, actor: User, video: Optional[Video] = None) -> Decision:
        decision = _engagement_gate(
            actor,
            "Lurkers cannot like videos. Please upgrade.",
            "Verify your profile to like videos.",
        )
        if decision and video is not None:
            return check_video_visibility(actor, video)
        return decision

    def can_comment(self, actor: User, video: Optional[Video] = None) -> Decision:
        decision = _engagement_gate(
            actor,
            "Lurkers cannot comment. Please upgrade.",
            "Verify your profile to comment.",
        )
        if decision and video is not None:
            return check_video_visibility(actor, video)
        return decision

    def can_post_video(
        self,
        actor: User,
        *,
        video_type: VideoType,
        visibility: VisibilityClass,
        duration: Optional[int],
        posted_today: int,
        now: datetime,
    ) -> Decision:
        allowed_types = VIDEO_TYPE_PERMISSIONS.get(video_type, ())
        if actor.account_type not in allowed_types:
            names = ", ".join(t.value for t in allowed_types)
            return Decision.deny(
                "video_type",
                f"{video_type.value} videos can only be posted by: {names}",
            )

        max_duration = self.settings.max_video_duration_seconds
        if duration is not None and duration > max_duration:
            return Decision.invalid(
                "duration",
                f"Video exceeds maximum duration of {max_duration} seconds",
            )

        premium = self.settings.is_premium(actor, now)
        cap = self.settings.daily_post_cap(premium)
        if posted_today >= cap:
            return Decision.quota(
                "daily_post_limit",
                f"Daily post limit of {cap} reached",
                resets_at=next_midnight(now),
                hint=None if premium else "upgrade",
            )

        if visibility == VisibilityClass.INVESTORS_ONLY and not premium:
            return Decision.deny(
                "premium_required",
                "Investors-only visibility requires premium subscription",
                hint="upgrade",
            )

        return Decision.allow()

    def can_view_analytics(self, actor: User, video: Video) -> Decision:
        # Reported as missing so other users' video ids are not confirmed.
        if not video.is_owned_by(actor.id):
            return Decision.not_found("Video not found")
        return Decision.allow()

    # Messaging

    def can_message(
        self,
        actor: User,
        recipient: User,
        *,
        blocked: bool,
        follows_recipient: bool,
        conversation: Optional[Conversation] = None,
    ) -> Decision:
        """Order matters: block, account type, conversation state, privacy."""
        if actor.id == recipient.id:
            return Decision.invalid("self", "You cannot message yourself")

        if blocked:
            return Decision.deny("blocked", "You cannot message this user")

        if actor.is_lurker:
            return Decision.deny(
                "account_type",
                "Lurkers cannot send messages. Please upgrade your account.",
                hint="upgrade",
            )
        if actor.is_investor and not actor.is_approved_investor:
            return Decision.deny(
                "verification_required",
                "You must be a verified investor to send messages.",
                hint="verify",
            )

        if conversation is not None:
            if conversation.status == ConversationStatus.REQUEST:
                return Decision.deny(
                    "conversation_request", "Conversation must be accepted first"
                )
            if conversation.status == ConversationStatus.BLOCKED:
                return Decision.deny("conversation_blocked", "Conversation is blocked")
            return Decision.allow("active_conversation")

        if not recipient.allow_messages_from_everyone and not follows_recipient:
            return Decision.deny(
                "privacy", "This user only accepts messages from people they know"
            )

        return Decision.allow()

    def can_view_conversation(self, actor: User, conversation: Conversation) -> Decision:
        if not conversation.has_participant(actor.id):
            return Decision.not_found("Conversation not found")
        return Decision.allow()

    def can_respond_to_request(self, actor: User, conversation: Conversation) -> Decision:
        if not conversation.has_participant(actor.id):
            return Decision.not_found("Conversation not found")
        if conversation.participant2_id != actor.id:
            return Decision.deny(
                "not_recipient", "Only the recipient can respond to this request"
            )
        return Decision.allow()

    # Social graph and investor intent

    def can_follow(self, actor: User, target: User, *, blocked: bool) -> Decision:
        if actor.id == target.id:
            return Decision.invalid("self", "You cannot follow yourself")
        if blocked:
            return Decision.deny("blocked", "You cannot follow this user")
        if target.is_private_investor:
            return Decision.deny(
                "private_investor", "Cannot follow private investor profiles"
            )
        return Decision.allow()

    def can_express_interest(
        self, actor: User, founder: User, *, blocked: bool
    ) -> Decision:
        if not actor.is_investor:
            return Decision.deny("account_type", "Only investors can express interest")
        if not actor.is_approved_investor:
            return Decision.deny(
                "verification_required",
                "Verify your profile to express interest.",
                hint="verify",
            )
        if not founder.is_founder:
            return Decision.invalid("not_founder", "Interest can only target founders")
        if blocked:
            return Decision.deny("blocked", "You cannot contact this user")
        return Decision.allow()

    def can_respond_to_interest(
        self, actor: User, interest: ExpressInterest, *, blocked: bool = False
    ) -> Decision:
        if interest.founder_id != actor.id:
            return Decision.not_found("Interest not found")
        if blocked:
            return Decision.deny("blocked", "You cannot contact this user")
        return Decision.allow()

    # Accounts

    def can_switch_account_type(
        self,
        actor: User,
        new_type: AccountType,
        *,
        last_change: Optional[AccountTypeChange],
        now: datetime,
    ) -> Decision:
        if actor.account_type == new_type:
            return Decision.invalid("same_type", f"Account is already {new_type.value}")

        if new_type not in ACCOUNT_TYPE_SWITCHES.get(actor.account_type, set()):
            return Decision.deny(
                "switch_not_allowed",
                f"Cannot switch from {actor.account_type.value} to {new_type.value}",
            )

        cooldown = timedelta(days=self.settings.account_type_switch_cooldown_days)
        if last_change is not None and now - last_change.changed_at < cooldown:
            available_at = last_change.changed_at + cooldown
            return Decision(
                False,
                "switch_cooldown",
                f"You can switch account type again after {available_at.date().isoformat()}",
                resets_at=available_at,
            )

        return Decision.allow()

    def can_review_verification(self, actor: User) -> Decision:
        if not actor.is_admin:
            return Decision.deny("admin_required", "Admin access required")
        return Decision.allow()
