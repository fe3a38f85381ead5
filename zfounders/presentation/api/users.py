"""Users API Router - profiles, follows, blocks, account type, privacy."""

from typing import Optional

from dishka.integrations.fastapi import FromDishka, inject
from fastapi import APIRouter, Depends

from zfounders.application.commands.accounts import (
    SwitchAccountTypeCommand,
    SwitchAccountTypeHandler,
    UpdatePrivacySettingsCommand,
    UpdatePrivacySettingsHandler,
)
from zfounders.application.commands.social import (
    BlockUserCommand,
    BlockUserHandler,
    FollowUserCommand,
    FollowUserHandler,
    UnblockUserCommand,
    UnblockUserHandler,
    UnfollowUserCommand,
    UnfollowUserHandler,
)
from zfounders.application.dto import BlockListDTO, PrivacySettingsDTO, ProfileDTO
from zfounders.application.queries.users import (
    GetProfileHandler,
    GetProfileQuery,
    ListBlockedUsersHandler,
    ListBlockedUsersQuery,
)
from zfounders.domain.value_objects import UserId
from zfounders.presentation.api.schemas import (
    StatusResponse,
    SwitchAccountTypeRequest,
    UpdatePrivacySettingsRequest,
)
from zfounders.presentation.dependencies import (
    get_current_user,
    get_optional_user,
    parse_user_id,
)

router = APIRouter(prefix="/api/users", tags=["users"])


# /me routes are declared before /{user_id} so they are matched first.
@router.get("/me/blocked", response_model=BlockListDTO)
@inject
async def list_blocked(
    handler: FromDishka[ListBlockedUsersHandler],
    current_user: UserId = Depends(get_current_user),
):
    return await handler.execute(ListBlockedUsersQuery(user_id=current_user))


@router.patch("/me/account-type", response_model=ProfileDTO)
@inject
async def switch_account_type(
    request: SwitchAccountTypeRequest,
    handler: FromDishka[SwitchAccountTypeHandler],
    current_user: UserId = Depends(get_current_user),
):
    return await handler.execute(
        SwitchAccountTypeCommand(user_id=current_user, new_type=request.account_type)
    )


@router.patch("/me/privacy", response_model=PrivacySettingsDTO)
@inject
async def update_privacy(
    request: UpdatePrivacySettingsRequest,
    handler: FromDishka[UpdatePrivacySettingsHandler],
    current_user: UserId = Depends(get_current_user),
):
    return await handler.execute(
        UpdatePrivacySettingsCommand(
            user_id=current_user,
            allow_messages_from_everyone=request.allow_messages_from_everyone,
            is_public_mode=request.is_public_mode,
        )
    )


@router.get("/{user_id}", response_model=ProfileDTO)
@inject
async def get_profile(
    user_id: str,
    handler: FromDishka[GetProfileHandler],
    viewer: Optional[UserId] = Depends(get_optional_user),
):
    return await handler.execute(
        GetProfileQuery(user_id=parse_user_id(user_id), viewer_id=viewer)
    )


@router.post("/{user_id}/follow", response_model=StatusResponse)
@inject
async def follow(
    user_id: str,
    handler: FromDishka[FollowUserHandler],
    current_user: UserId = Depends(get_current_user),
):
    created = await handler.execute(
        FollowUserCommand(follower_id=current_user, following_id=parse_user_id(user_id))
    )
    return StatusResponse(success=True, changed=created)


@router.delete("/{user_id}/follow", response_model=StatusResponse)
@inject
async def unfollow(
    user_id: str,
    handler: FromDishka[UnfollowUserHandler],
    current_user: UserId = Depends(get_current_user),
):
    removed = await handler.execute(
        UnfollowUserCommand(follower_id=current_user, following_id=parse_user_id(user_id))
    )
    return StatusResponse(success=True, changed=removed)


@router.post("/{user_id}/block", response_model=StatusResponse)
@inject
async def block(
    user_id: str,
    handler: FromDishka[BlockUserHandler],
    current_user: UserId = Depends(get_current_user),
):
    created = await handler.execute(
        BlockUserCommand(blocker_id=current_user, blocked_id=parse_user_id(user_id))
    )
    return StatusResponse(success=True, changed=created)


@router.delete("/{user_id}/block", response_model=StatusResponse)
@inject
async def unblock(
    user_id: str,
    handler: FromDishka[UnblockUserHandler],
    current_user: UserId = Depends(get_current_user),
):
    removed = await handler.execute(
        UnblockUserCommand(blocker_id=current_user, blocked_id=parse_user_id(user_id))
    )
    return StatusResponse(success=True, changed=removed)
