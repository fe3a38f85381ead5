"""Video commands."""

from .create_video import CreateVideoCommand, CreateVideoHandler
from .like_video import LikeVideoCommand, LikeVideoHandler
from .comment_on_video import CommentOnVideoCommand, CommentOnVideoHandler

__all__ = [
    "CreateVideoCommand",
    "CreateVideoHandler",
    "LikeVideoCommand",
    "LikeVideoHandler",
    "CommentOnVideoCommand",
    "CommentOnVideoHandler",
]
