"""
Authentication Dependency for FastAPI.

- Extracts the JWT from the Authorization header (Bearer scheme)
- Verifies it with the app's JWT_SECRET / JWT_ALGORITHM
- Returns the acting UserId from the ``userId`` claim

Whether that user exists and is active is checked by the handler, which
raises UnauthorizedError (401) otherwise.
"""

from typing import Optional

import jwt
from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from zfounders.config.settings import Config
from zfounders.domain.exceptions import EntityNotFoundError, UnauthorizedError
from zfounders.domain.value_objects import ConversationId, InterestId, UserId, VideoId

security = HTTPBearer(auto_error=False)


def _config(request_or_ws) -> type[Config]:
    return getattr(request_or_ws.app.state, "config", Config)


def decode_token(token: str, config=Config) -> UserId:
    """Decode a bearer token into the acting user id."""
    try:
        claims = jwt.decode(
            token,
            config.JWT_SECRET,
            algorithms=[config.JWT_ALGORITHM],
            options={"require": ["exp"]},
        )
    except jwt.ExpiredSignatureError as e:
        raise UnauthorizedError("Token has expired") from e
    except jwt.InvalidTokenError as e:
        raise UnauthorizedError(f"Invalid token: {e}") from e

    user_id = claims.get("userId")
    if not user_id:
        raise UnauthorizedError("Missing required claims in token")
    try:
        return UserId(user_id)
    except ValueError as e:
        raise UnauthorizedError("Invalid userId claim") from e


async def get_current_user(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> UserId:
    if credentials is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authentication required",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return decode_token(credentials.credentials, _config(request))


async def get_optional_user(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> Optional[UserId]:
    """Anonymous callers are allowed; a present but bad token is still a 401."""
    if credentials is None:
        return None
    return decode_token(credentials.credentials, _config(request))


def _parse(factory, raw: str, label: str):
    try:
        return factory(raw)
    except ValueError as e:
        # A malformed id can never name an existing row.
        raise EntityNotFoundError(f"{label} not found") from e


def parse_user_id(raw: str) -> UserId:
    return _parse(UserId, raw, "User")


def parse_video_id(raw: str) -> VideoId:
    return _parse(VideoId, raw, "Video")


def parse_conversation_id(raw: str) -> ConversationId:
    return _parse(ConversationId, raw, "Conversation")


def parse_interest_id(raw: str) -> InterestId:
    return _parse(InterestId, raw, "Interest")
