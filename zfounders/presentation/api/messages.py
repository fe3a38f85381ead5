"""
Messages API Router - first-contact path.

POST /api/messages sends to a user, creating the pair's conversation when
none exists (as a REQUEST for a first contact from an investor to a founder).
"""

from logging import getLogger

from dishka.integrations.fastapi import FromDishka, inject
from fastapi import APIRouter, Depends, status

from zfounders.application.commands.messaging import (
    SendDirectMessageCommand,
    SendDirectMessageHandler,
)
from zfounders.application.dto import SendMessageResultDTO
from zfounders.domain.value_objects import UserId
from zfounders.presentation.api.schemas import SendMessageRequest
from zfounders.presentation.dependencies import get_current_user, parse_user_id

logger = getLogger(__name__)

router = APIRouter(prefix="/api/messages", tags=["messages"])


@router.post("", response_model=SendMessageResultDTO, status_code=status.HTTP_201_CREATED)
@inject
async def send_message(
    request: SendMessageRequest,
    handler: FromDishka[SendDirectMessageHandler],
    current_user: UserId = Depends(get_current_user),
):
    command = SendDirectMessageCommand(
        sender_id=current_user,
        recipient_id=parse_user_id(request.recipient_id),
        content=request.content,
        attachment_url=request.attachment_url,
    )
    return await handler.execute(command)
