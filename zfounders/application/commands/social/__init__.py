"""Social graph commands."""

from .follow_user import (
    FollowUserCommand,
    FollowUserHandler,
    UnfollowUserCommand,
    UnfollowUserHandler,
)
from .block_user import (
    BlockUserCommand,
    BlockUserHandler,
    UnblockUserCommand,
    UnblockUserHandler,
)

__all__ = [
    "FollowUserCommand",
    "FollowUserHandler",
    "UnfollowUserCommand",
    "UnfollowUserHandler",
    "BlockUserCommand",
    "BlockUserHandler",
    "UnblockUserCommand",
    "UnblockUserHandler",
]
