"""System clock adapter: implements ClockPort with the real UTC time."""

from datetime import datetime, timezone

from fieldops.application.ports.clock_port import ClockPort


class SystemClock(ClockPort):
    def now(self) -> datetime:
        return datetime.now(timezone.utc)
