"""
Domain exception → HTTP response mapping.

Every error body has the same shape:
    {"error": "<message>", "reason": "<machine reason>", ...}
with ``hint``, ``resets_at`` and ``upgrade_url`` present when they apply.
"""

import logging
from datetime import datetime
from typing import Any

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from zfounders.domain.exceptions import (
    AccessDeniedError,
    ConcurrencyConflictError,
    DomainValidationError,
    EntityNotFoundError,
    InvalidTransitionError,
    QuotaExceededError,
    UnauthorizedError,
)

logger = logging.getLogger(__name__)


def error_body(message: str, reason: str, **extra: Any) -> dict[str, Any]:
    body: dict[str, Any] = {"error": message, "reason": reason}
    for key, value in extra.items():
        if value is None:
            continue
        body[key] = value.isoformat() if isinstance(value, datetime) else value
    return body


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(UnauthorizedError)
    async def unauthorized_handler(request: Request, exc: UnauthorizedError):
        return JSONResponse(
            status_code=status.HTTP_401_UNAUTHORIZED,
            content=error_body(exc.message, "unauthorized"),
        )

    @app.exception_handler(AccessDeniedError)
    async def access_denied_handler(request: Request, exc: AccessDeniedError):
        return JSONResponse(
            status_code=status.HTTP_403_FORBIDDEN,
            content=error_body(exc.message, exc.reason, hint=exc.hint, **exc.details),
        )

    @app.exception_handler(QuotaExceededError)
    async def quota_handler(request: Request, exc: QuotaExceededError):
        return JSONResponse(
            status_code=status.HTTP_429_TOO_MANY_REQUESTS,
            content=error_body(
                exc.message,
                exc.reason,
                resets_at=exc.resets_at,
                upgrade_url=exc.upgrade_url,
            ),
        )

    @app.exception_handler(EntityNotFoundError)
    async def not_found_handler(request: Request, exc: EntityNotFoundError):
        return JSONResponse(
            status_code=status.HTTP_404_NOT_FOUND,
            content=error_body(exc.message, "not_found"),
        )

    @app.exception_handler(DomainValidationError)
    async def validation_handler(request: Request, exc: DomainValidationError):
        details = dict(exc.details)
        reason = details.pop("reason", "invalid")
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=error_body(exc.message, reason, **details),
        )

    @app.exception_handler(InvalidTransitionError)
    async def transition_handler(request: Request, exc: InvalidTransitionError):
        return JSONResponse(
            status_code=status.HTTP_409_CONFLICT,
            content=error_body(exc.message, "invalid_transition", status=exc.current),
        )

    @app.exception_handler(ConcurrencyConflictError)
    async def conflict_handler(request: Request, exc: ConcurrencyConflictError):
        logger.warning("[API] conflict survived retry: %s", exc.message)
        return JSONResponse(
            status_code=status.HTTP_409_CONFLICT,
            content=error_body(exc.message, "conflict"),
        )

    # Validation error handler - shows detailed Pydantic errors
    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        errors = exc.errors()
        logger.info("[API] validation error: %s", errors)
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=error_body("Validation error", "invalid", details=jsonable(errors)),
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        return JSONResponse(
            status_code=exc.status_code,
            content=error_body(str(exc.detail), "http_error"),
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        logger.error(
            "[API] unhandled %s: %s", type(exc).__name__, exc, exc_info=exc
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=error_body("Internal server error", "internal"),
        )


def jsonable(errors: list[dict]) -> list[dict]:
    """Pydantic error dicts may carry exception objects in ``ctx``."""
    cleaned = []
    for error in errors:
        item = {k: v for k, v in error.items() if k != "ctx"}
        if "ctx" in error:
            item["ctx"] = {k: str(v) for k, v in error["ctx"].items()}
        cleaned.append(item)
    return cleaned
