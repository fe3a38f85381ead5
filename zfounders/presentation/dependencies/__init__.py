from zfounders.presentation.dependencies.auth import (
    decode_token,
    get_current_user,
    get_optional_user,
    parse_conversation_id,
    parse_interest_id,
    parse_user_id,
    parse_video_id,
)

__all__ = [
    "decode_token",
    "get_current_user",
    "get_optional_user",
    "parse_conversation_id",
    "parse_interest_id",
    "parse_user_id",
    "parse_video_id",
]
