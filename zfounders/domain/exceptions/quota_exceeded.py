"""
QuotaExceededError - Raised when a per-period counter is at its cap.
Maps to: HTTP 429 Too Many Requests
"""

from datetime import datetime
from typing import Optional


class QuotaExceededError(Exception):
    """Carries ``resets_at`` so callers can tell the user when to retry."""

    def __init__(
        self,
        message: str,
        reason: str,
        resets_at: Optional[datetime] = None,
        upgrade_url: Optional[str] = None,
    ):
        super().__init__(message)
        self.message = message
        self.reason = reason
        self.resets_at = resets_at
        self.upgrade_url = upgrade_url
