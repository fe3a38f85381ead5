"""Express-interest API Router."""

from typing import Optional

from dishka.integrations.fastapi import FromDishka, inject
from fastapi import APIRouter, Depends, Query, status

from zfounders.application.commands.interests import (
    ExpressInterestCommand,
    ExpressInterestHandler,
    RespondToInterestCommand,
    RespondToInterestHandler,
)
from zfounders.application.dto import InterestDTO
from zfounders.application.queries.interests import (
    ListReceivedInterestsHandler,
    ListReceivedInterestsQuery,
    ListSentInterestsHandler,
    ListSentInterestsQuery,
)
from zfounders.domain.value_objects import InterestStatus, UserId
from zfounders.presentation.api.schemas import (
    ExpressInterestRequest,
    RespondToInterestRequest,
)
from zfounders.presentation.dependencies import (
    get_current_user,
    parse_interest_id,
    parse_user_id,
    parse_video_id,
)

router = APIRouter(prefix="/api/express-interest", tags=["interests"])


@router.post("", response_model=InterestDTO, status_code=status.HTTP_201_CREATED)
@inject
async def express_interest(
    request: ExpressInterestRequest,
    handler: FromDishka[ExpressInterestHandler],
    current_user: UserId = Depends(get_current_user),
):
    command = ExpressInterestCommand(
        investor_id=current_user,
        founder_id=parse_user_id(request.founder_id),
        video_id=parse_video_id(request.video_id),
        message=request.message,
    )
    return await handler.execute(command)


@router.get("/received", response_model=list[InterestDTO])
@inject
async def list_received(
    handler: FromDishka[ListReceivedInterestsHandler],
    status_filter: Optional[InterestStatus] = Query(default=None, alias="status"),
    current_user: UserId = Depends(get_current_user),
):
    return await handler.execute(
        ListReceivedInterestsQuery(founder_id=current_user, status=status_filter)
    )


@router.get("/sent", response_model=list[InterestDTO])
@inject
async def list_sent(
    handler: FromDishka[ListSentInterestsHandler],
    current_user: UserId = Depends(get_current_user),
):
    return await handler.execute(ListSentInterestsQuery(investor_id=current_user))


@router.patch("/{interest_id}", response_model=InterestDTO)
@inject
async def respond_to_interest(
    interest_id: str,
    request: RespondToInterestRequest,
    handler: FromDishka[RespondToInterestHandler],
    current_user: UserId = Depends(get_current_user),
):
    command = RespondToInterestCommand(
        founder_id=current_user,
        interest_id=parse_interest_id(interest_id),
        accept=request.action == "accept",
    )
    return await handler.execute(command)
