"""
Closed value sets shared across the domain.

All enums subclass ``str`` so they serialize as their value and compare
equal to the raw strings stored by the persistence adapters.
"""

from enum import Enum


class AccountType(str, Enum):
    FOUNDER = "FOUNDER"
    BUILDER = "BUILDER"
    INVESTOR = "INVESTOR"
    LURKER = "LURKER"


class SubscriptionTier(str, Enum):
    FREE = "FREE"
    FOUNDER_PRO = "FOUNDER_PRO"
    INVESTOR_PRO = "INVESTOR_PRO"
    STEALTH_MODE = "STEALTH_MODE"


class VerificationStatus(str, Enum):
    NOT_SUBMITTED = "NOT_SUBMITTED"
    PENDING = "PENDING"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"


class VisibilityClass(str, Enum):
    PUBLIC = "PUBLIC"
    COMMUNITY = "COMMUNITY"
    INVESTORS_ONLY = "INVESTORS_ONLY"


class VideoType(str, Enum):
    PITCH = "PITCH"
    UPDATE = "UPDATE"
    ASK = "ASK"
    WIN_LOSS = "WIN_LOSS"


class ConversationStatus(str, Enum):
    REQUEST = "REQUEST"
    ACTIVE = "ACTIVE"
    BLOCKED = "BLOCKED"


class InterestStatus(str, Enum):
    PENDING = "pending"
    ACCEPTED = "accepted"
    DECLINED = "declined"


class NotificationPriority(str, Enum):
    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"


class NotificationType(str, Enum):
    NEW_MESSAGE = "new_message"
    MESSAGE_REQUEST = "message_request"
    MESSAGE_REQUEST_ACCEPTED = "message_request_accepted"
    EXPRESS_INTEREST = "express_interest"
    INTEREST_ACCEPTED = "interest_accepted"
    NEW_LIKE = "new_like"
    NEW_COMMENT = "new_comment"
    NEW_FOLLOWER = "new_follower"
    VERIFICATION_RESULT = "verification_result"
    VIEW_UPDATE = "view_update"
