"""
Decision - the result of every policy check.

A denial carries a machine-readable ``reason``, the user-facing ``message``
and, where something can lift it, a ``hint`` (``upgrade`` or ``verify``).
``kind`` selects the error the caller raises.
"""

from __future__ import annotations
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Optional

from zfounders.domain.exceptions import (
    AccessDeniedError,
    DomainValidationError,
    EntityNotFoundError,
    QuotaExceededError,
    UnauthorizedError,
)


class DenialKind(str, Enum):
    FORBIDDEN = "forbidden"
    UNAUTHORIZED = "unauthorized"
    QUOTA = "quota"
    INVALID = "invalid"
    NOT_FOUND = "not_found"


@dataclass(frozen=True)
class Decision:
    allowed: bool
    reason: str = ""
    message: str = ""
    kind: DenialKind = DenialKind.FORBIDDEN
    hint: Optional[str] = None
    resets_at: Optional[datetime] = None

    def __bool__(self) -> bool:
        return self.allowed

    @classmethod
    def allow(cls, reason: str = "ok") -> Decision:
        return cls(True, reason)

    @classmethod
    def deny(cls, reason: str, message: str, hint: Optional[str] = None) -> Decision:
        return cls(False, reason, message, DenialKind.FORBIDDEN, hint)

    @classmethod
    def unauthenticated(cls, message: str = "Authentication required") -> Decision:
        return cls(False, "authentication_required", message, DenialKind.UNAUTHORIZED)

    @classmethod
    def quota(
        cls, reason: str, message: str, resets_at: datetime, hint: Optional[str] = None
    ) -> Decision:
        return cls(False, reason, message, DenialKind.QUOTA, hint, resets_at)

    @classmethod
    def invalid(cls, reason: str, message: str) -> Decision:
        return cls(False, reason, message, DenialKind.INVALID)

    @classmethod
    def not_found(cls, message: str) -> Decision:
        return cls(False, "not_found", message, DenialKind.NOT_FOUND)

    def to_exception(self, upgrade_url: Optional[str] = None) -> Exception:
        if self.kind == DenialKind.UNAUTHORIZED:
            return UnauthorizedError(self.message)
        if self.kind == DenialKind.QUOTA:
            return QuotaExceededError(
                self.message,
                reason=self.reason,
                resets_at=self.resets_at,
                upgrade_url=upgrade_url if self.hint == "upgrade" else None,
            )
        if self.kind == DenialKind.INVALID:
            return DomainValidationError(self.message, reason=self.reason)
        if self.kind == DenialKind.NOT_FOUND:
            return EntityNotFoundError(self.message)
        details = {}
        if self.hint == "upgrade" and upgrade_url:
            details["upgrade_url"] = upgrade_url
        if self.resets_at is not None:
            details["resets_at"] = self.resets_at
        return AccessDeniedError(self.message, reason=self.reason, hint=self.hint, **details)
