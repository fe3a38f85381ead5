"""Data transfer objects returned by handlers and serialized by the API."""

from zfounders.application.dto.user import (
    ProfileDTO,
    PrivacySettingsDTO,
    UserSummaryDTO,
    public_label,
    to_privacy_settings,
    to_profile,
    to_user_summary,
)
from zfounders.application.dto.conversation import (
    ConversationDTO,
    ConversationListDTO,
    ConversationMessagesDTO,
    MessageDTO,
    SendMessageResultDTO,
    to_conversation_dto,
    to_message_dto,
)
from zfounders.application.dto.interest import InterestDTO, to_interest_dto
from zfounders.application.dto.video import (
    AccountTypeBreakdownDTO,
    CommentDTO,
    VideoAnalyticsDTO,
    VideoDTO,
    VideoListDTO,
    to_comment_dto,
    to_video_dto,
)
from zfounders.application.dto.social import BlockDTO, BlockListDTO
from zfounders.application.dto.notification import (
    NotificationDTO,
    NotificationListDTO,
    to_notification_dto,
)

__all__ = [
    "ProfileDTO",
    "PrivacySettingsDTO",
    "to_privacy_settings",
    "UserSummaryDTO",
    "to_profile",
    "to_user_summary",
    "public_label",
    "ConversationDTO",
    "ConversationListDTO",
    "ConversationMessagesDTO",
    "MessageDTO",
    "SendMessageResultDTO",
    "to_conversation_dto",
    "to_message_dto",
    "InterestDTO",
    "to_interest_dto",
    "AccountTypeBreakdownDTO",
    "CommentDTO",
    "VideoAnalyticsDTO",
    "VideoDTO",
    "VideoListDTO",
    "to_comment_dto",
    "to_video_dto",
    "BlockDTO",
    "BlockListDTO",
    "NotificationDTO",
    "NotificationListDTO",
    "to_notification_dto",
]
