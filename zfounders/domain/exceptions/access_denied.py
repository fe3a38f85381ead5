"""
AccessDeniedError - Raised when a permission rule rejects a known actor.
Maps to: HTTP 403 Forbidden
"""

from typing import Any, Optional


class AccessDeniedError(Exception):
    """Raised when user lacks permission to perform an action.

    ``reason`` is machine-readable (e.g. ``blocked``, ``verification_required``);
    ``hint`` tells the client what would lift the denial (``upgrade``, ``verify``).
    """

    def __init__(
        self,
        message: str = "Access denied",
        reason: str = "forbidden",
        hint: Optional[str] = None,
        **details: Any,
    ):
        super().__init__(message)
        self.message = message
        self.reason = reason
        self.hint = hint
        self.details = details
