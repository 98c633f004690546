"""LoginAttemptRecord: consecutive failed logins for one account."""

from dataclasses import dataclass
from datetime import datetime


@dataclass
class LoginAttemptRecord:
    username: str
    failure_count: int = 0
    blocked_until: datetime | None = None

    def is_blocked_at(self, now: datetime) -> bool:
        return self.blocked_until is not None and now < self.blocked_until

    def lock_expired_at(self, now: datetime) -> bool:
        return self.blocked_until is not None and now >= self.blocked_until
