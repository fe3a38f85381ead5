"""Request bodies shared by the routers. Clients send camelCase keys."""

from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from zfounders.domain.value_objects import AccountType, VideoType, VisibilityClass


class RequestModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class SendMessageRequest(RequestModel):
    recipient_id: str
    content: Optional[str] = None
    attachment_url: Optional[str] = None


class ConversationMessageRequest(RequestModel):
    content: Optional[str] = None
    attachment_url: Optional[str] = None


class ExpressInterestRequest(RequestModel):
    founder_id: str
    video_id: str
    message: Optional[str] = Field(default=None, max_length=1000)


class RespondToInterestRequest(RequestModel):
    action: Literal["accept", "decline"]


class CreateVideoRequest(RequestModel):
    video_url: str
    type: VideoType = VideoType.UPDATE
    visibility: VisibilityClass = VisibilityClass.PUBLIC
    caption: Optional[str] = None
    thumbnail_url: Optional[str] = None
    duration: Optional[int] = Field(default=None, ge=0)
    tags: list[str] = Field(default_factory=list)
    is_pinned: bool = False


class CommentRequest(RequestModel):
    content: str
    parent_id: Optional[str] = None


class SwitchAccountTypeRequest(RequestModel):
    account_type: AccountType


class UpdatePrivacySettingsRequest(RequestModel):
    allow_messages_from_everyone: Optional[bool] = None
    is_public_mode: Optional[bool] = None


class ReviewVerificationRequest(RequestModel):
    approve: bool
    notes: Optional[str] = None


class StatusResponse(BaseModel):
    success: bool
    changed: bool = False
