"""Moderation API Router - investor verification review (admins only)."""

from dishka.integrations.fastapi import FromDishka, inject
from fastapi import APIRouter, Depends

from zfounders.application.commands.accounts import (
    ReviewVerificationCommand,
    ReviewVerificationHandler,
)
from zfounders.application.dto import ProfileDTO
from zfounders.domain.value_objects import UserId
from zfounders.presentation.api.schemas import ReviewVerificationRequest
from zfounders.presentation.dependencies import get_current_user, parse_user_id

router = APIRouter(prefix="/api/moderation", tags=["moderation"])


@router.post("/verifications/{investor_id}", response_model=ProfileDTO)
@inject
async def review_verification(
    investor_id: str,
    request: ReviewVerificationRequest,
    handler: FromDishka[ReviewVerificationHandler],
    current_user: UserId = Depends(get_current_user),
):
    command = ReviewVerificationCommand(
        reviewer_id=current_user,
        investor_id=parse_user_id(investor_id),
        approve=request.approve,
        notes=request.notes,
    )
    return await handler.execute(command)
