"""
Conversations API Router.

Flow:
  HTTP Request → Router → Command/Query → Handler → UnitOfWork → Store
                                     ↓
  HTTP Response ← Router ← DTO ←
"""

from typing import Optional

from dishka.integrations.fastapi import FromDishka, inject
from fastapi import APIRouter, Depends, Query, status

from zfounders.application.commands.messaging import (
    AcceptConversationCommand,
    AcceptConversationHandler,
    DeclineConversationCommand,
    DeclineConversationHandler,
    SendConversationMessageCommand,
    SendConversationMessageHandler,
)
from zfounders.application.dto import (
    ConversationDTO,
    ConversationListDTO,
    ConversationMessagesDTO,
    MessageDTO,
)
from zfounders.application.queries.conversations import (
    GetConversationMessagesHandler,
    GetConversationMessagesQuery,
    ListConversationsHandler,
    ListConversationsQuery,
    ListMessageRequestsHandler,
    ListMessageRequestsQuery,
)
from zfounders.domain.value_objects import ConversationStatus, UserId
from zfounders.presentation.api.schemas import ConversationMessageRequest, StatusResponse
from zfounders.presentation.dependencies import get_current_user, parse_conversation_id

router = APIRouter(prefix="/api/conversations", tags=["conversations"])


@router.get("", response_model=ConversationListDTO)
@inject
async def list_conversations(
    handler: FromDishka[ListConversationsHandler],
    status_filter: Optional[ConversationStatus] = Query(default=None, alias="status"),
    current_user: UserId = Depends(get_current_user),
):
    """List the caller's conversations, optionally filtered by status."""
    return await handler.execute(
        ListConversationsQuery(user_id=current_user, status=status_filter)
    )


@router.get("/requests", response_model=ConversationListDTO)
@inject
async def list_requests(
    handler: FromDishka[ListMessageRequestsHandler],
    current_user: UserId = Depends(get_current_user),
):
    """Incoming REQUEST conversations awaiting the caller's answer."""
    return await handler.execute(ListMessageRequestsQuery(user_id=current_user))


@router.get("/{conversation_id}/messages", response_model=ConversationMessagesDTO)
@inject
async def get_messages(
    conversation_id: str,
    handler: FromDishka[GetConversationMessagesHandler],
    limit: int = Query(default=50, ge=1, le=200),
    offset: int = Query(default=0, ge=0),
    current_user: UserId = Depends(get_current_user),
):
    query = GetConversationMessagesQuery(
        user_id=current_user,
        conversation_id=parse_conversation_id(conversation_id),
        limit=limit,
        offset=offset,
    )
    return await handler.execute(query)


@router.post(
    "/{conversation_id}/messages",
    response_model=MessageDTO,
    status_code=status.HTTP_201_CREATED,
)
@inject
async def send_message(
    conversation_id: str,
    request: ConversationMessageRequest,
    handler: FromDishka[SendConversationMessageHandler],
    current_user: UserId = Depends(get_current_user),
):
    command = SendConversationMessageCommand(
        sender_id=current_user,
        conversation_id=parse_conversation_id(conversation_id),
        content=request.content,
        attachment_url=request.attachment_url,
    )
    return await handler.execute(command)


@router.post("/{conversation_id}/accept", response_model=ConversationDTO)
@inject
async def accept_request(
    conversation_id: str,
    handler: FromDishka[AcceptConversationHandler],
    current_user: UserId = Depends(get_current_user),
):
    command = AcceptConversationCommand(
        actor_id=current_user, conversation_id=parse_conversation_id(conversation_id)
    )
    return await handler.execute(command)


@router.post("/{conversation_id}/decline", response_model=StatusResponse)
@inject
async def decline_request(
    conversation_id: str,
    handler: FromDishka[DeclineConversationHandler],
    current_user: UserId = Depends(get_current_user),
):
    """Decline deletes the request and its messages; the sender is not told."""
    command = DeclineConversationCommand(
        actor_id=current_user, conversation_id=parse_conversation_id(conversation_id)
    )
    deleted = await handler.execute(command)
    return StatusResponse(success=True, changed=deleted)
