"""Notifications API Router - the caller's persistent inbox."""

from dishka.integrations.fastapi import FromDishka, inject
from fastapi import APIRouter, Depends, Query

from zfounders.application.commands.notifications import (
    MarkAllNotificationsReadCommand,
    MarkAllNotificationsReadHandler,
    MarkNotificationReadCommand,
    MarkNotificationReadHandler,
)
from zfounders.application.dto import NotificationListDTO
from zfounders.application.queries.notifications import (
    ListNotificationsHandler,
    ListNotificationsQuery,
)
from zfounders.domain.value_objects import UserId
from zfounders.presentation.api.schemas import StatusResponse
from zfounders.presentation.dependencies import get_current_user

router = APIRouter(prefix="/api/notifications", tags=["notifications"])


@router.get("", response_model=NotificationListDTO)
@inject
async def list_notifications(
    handler: FromDishka[ListNotificationsHandler],
    unread_only: bool = Query(default=False, alias="unreadOnly"),
    limit: int = Query(default=50, ge=1, le=100),
    current_user: UserId = Depends(get_current_user),
):
    return await handler.execute(
        ListNotificationsQuery(user_id=current_user, unread_only=unread_only, limit=limit)
    )


# Declared before /{notification_id}/read so "read-all" is not taken as an id.
@router.patch("/read-all", response_model=StatusResponse)
@inject
async def mark_all_read(
    handler: FromDishka[MarkAllNotificationsReadHandler],
    current_user: UserId = Depends(get_current_user),
):
    marked = await handler.execute(MarkAllNotificationsReadCommand(user_id=current_user))
    return StatusResponse(success=True, changed=marked > 0)


@router.patch("/{notification_id}/read", response_model=StatusResponse)
@inject
async def mark_read(
    notification_id: str,
    handler: FromDishka[MarkNotificationReadHandler],
    current_user: UserId = Depends(get_current_user),
):
    await handler.execute(
        MarkNotificationReadCommand(user_id=current_user, notification_id=notification_id)
    )
    return StatusResponse(success=True, changed=True)
