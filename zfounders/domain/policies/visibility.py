"""
Visibility Resolver - which audience classes a viewer may see.

Every listing and single-item path goes through these two functions:
``resolve_visibility_classes`` narrows a query, ``check_video_visibility``
decides one item. ``filter_visible`` applies the item check to a listing so
that a feed never shows what the detail endpoint would refuse.
"""

from typing import Iterable, Optional

from zfounders.domain.entities.user import User
from zfounders.domain.entities.video import Video
from zfounders.domain.policies.decision import Decision
from zfounders.domain.value_objects.enums import AccountType, VisibilityClass

PUBLIC_ONLY = frozenset({VisibilityClass.PUBLIC})

_CLASSES_BY_ACCOUNT_TYPE = {
    AccountType.FOUNDER: frozenset({VisibilityClass.PUBLIC, VisibilityClass.COMMUNITY}),
    AccountType.BUILDER: frozenset({VisibilityClass.PUBLIC, VisibilityClass.COMMUNITY}),
    AccountType.INVESTOR: frozenset(
        {VisibilityClass.PUBLIC, VisibilityClass.INVESTORS_ONLY}
    ),
    AccountType.LURKER: PUBLIC_ONLY,
}


def resolve_visibility_classes(viewer: Optional[User]) -> frozenset:
    """Classes a non-owner viewer may see. ``None`` means anonymous."""
    if viewer is None:
        return PUBLIC_ONLY
    return _CLASSES_BY_ACCOUNT_TYPE.get(viewer.account_type, PUBLIC_ONLY)


def check_video_visibility(viewer: Optional[User], video: Video) -> Decision:
    if viewer is not None and video.is_owned_by(viewer.id):
        return Decision.allow("owner")

    if video.visibility == VisibilityClass.PUBLIC:
        return Decision.allow()

    if viewer is None:
        return Decision.unauthenticated()

    if video.visibility not in resolve_visibility_classes(viewer):
        if video.visibility == VisibilityClass.COMMUNITY:
            return Decision.deny("community_only", "Community-only content")
        return Decision.deny("investors_only", "Investor-only content")

    # Being an investor is not enough; the verification must be approved.
    if (
        video.visibility == VisibilityClass.INVESTORS_ONLY
        and not viewer.is_approved_investor
    ):
        return Decision.deny(
            "verification_required", "Verified investor required", hint="verify"
        )

    return Decision.allow()


def filter_visible(viewer: Optional[User], videos: Iterable[Video]) -> list[Video]:
    return [video for video in videos if check_video_visibility(viewer, video)]
