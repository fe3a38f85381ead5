"""User DTOs, including the redacted investor stub."""

from pydantic import BaseModel
from typing import Optional

from zfounders.domain.entities.user import User


class UserSummaryDTO(BaseModel):
    id: str
    account_type: str
    is_private: bool = False
    display_name: Optional[str] = None
    email: Optional[str] = None
    firm: Optional[str] = None
    stages: Optional[list[str]] = None


class ProfileDTO(UserSummaryDTO):
    verification_status: Optional[str] = None
    bio: Optional[str] = None
    check_size_min: Optional[int] = None
    check_size_max: Optional[int] = None
    is_following: bool = False


def to_user_summary(user: User, visible: bool = True) -> UserSummaryDTO:
    """Full summary when ``visible``; otherwise the private stub (id and type only)."""
    if not visible:
        return UserSummaryDTO(
            id=user.id.value, account_type=user.account_type.value, is_private=True
        )
    profile = user.investor_profile if user.is_investor else None
    return UserSummaryDTO(
        id=user.id.value,
        account_type=user.account_type.value,
        display_name=user.display_name,
        email=user.email,
        firm=profile.firm if profile else None,
        stages=list(profile.stages) if profile else None,
    )


def to_profile(user: User, visible: bool, is_following: bool = False) -> ProfileDTO:
    profile = user.investor_profile if user.is_investor else None
    if not visible:
        # Narrower rule for a direct profile fetch: firm and stages only.
        return ProfileDTO(
            id=user.id.value,
            account_type=user.account_type.value,
            is_private=True,
            firm=profile.firm if profile else None,
            stages=list(profile.stages) if profile else None,
        )
    return ProfileDTO(
        id=user.id.value,
        account_type=user.account_type.value,
        display_name=user.display_name,
        email=user.email,
        firm=profile.firm if profile else None,
        stages=list(profile.stages) if profile else None,
        verification_status=user.verification_status.value if user.is_investor else None,
        bio=profile.bio if profile else None,
        check_size_min=profile.check_size_min if profile else None,
        check_size_max=profile.check_size_max if profile else None,
        is_following=is_following,
    )


def public_label(user: User, revealed: bool = False) -> str:
    """Name used in notification text; a private investor stays anonymous unless revealed."""
    if user.is_private_investor and not revealed:
        return "A verified investor"
    return user.display_name or user.email


class PrivacySettingsDTO(BaseModel):
    allow_messages_from_everyone: bool
    is_public_mode: Optional[bool] = None


def to_privacy_settings(user: User) -> PrivacySettingsDTO:
    return PrivacySettingsDTO(
        allow_messages_from_everyone=user.allow_messages_from_everyone,
        is_public_mode=not user.is_private_investor if user.is_investor else None,
    )
