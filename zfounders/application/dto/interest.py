"""Express-interest DTOs."""

from pydantic import BaseModel
from datetime import datetime
from typing import Optional

from zfounders.application.dto.user import UserSummaryDTO
from zfounders.domain.entities.interest import ExpressInterest


class InterestDTO(BaseModel):
    id: str
    investor_id: str
    founder_id: str
    video_id: str
    status: str
    message: Optional[str] = None
    created_at: datetime
    investor: Optional[UserSummaryDTO] = None
    conversation_id: Optional[str] = None


def to_interest_dto(
    interest: ExpressInterest,
    investor: Optional[UserSummaryDTO] = None,
    conversation_id: Optional[str] = None,
) -> InterestDTO:
    return InterestDTO(
        id=interest.id.value,
        investor_id=interest.investor_id.value,
        founder_id=interest.founder_id.value,
        video_id=interest.video_id.value,
        status=interest.status.value,
        message=interest.message,
        created_at=interest.created_at,
        investor=investor,
        conversation_id=conversation_id,
    )
