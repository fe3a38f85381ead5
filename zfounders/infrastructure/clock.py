"""System clock adapter."""

from datetime import datetime, timezone

from zfounders.domain.ports.clock import Clock


class SystemClock(Clock):
    def now(self) -> datetime:
        return datetime.now(timezone.utc)
