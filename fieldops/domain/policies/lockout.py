"""LockoutPolicy: consecutive-failure counting and timed account lock."""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import datetime, timedelta

from fieldops.domain.entities.login_attempt import LoginAttemptRecord
from fieldops.domain.value_objects.enums import LoginState

DEFAULT_MAX_FAILED_ATTEMPTS = 3
DEFAULT_LOCKOUT = timedelta(minutes=15)


@dataclass(frozen=True)
class FailureOutcome:
    """Record state after one more failed attempt."""

    record: LoginAttemptRecord
    locked: bool
    attempts_remaining: int


def describe_login_state(
    record: LoginAttemptRecord | None,
    now: datetime,
    max_attempts: int = DEFAULT_MAX_FAILED_ATTEMPTS,
) -> LoginState:
    """Classify an account as clear / warned / locked at *now*.

    An expired lock reads as CLEAR even before the record is reset.
    """
    if record is None:
        return LoginState.CLEAR
    if record.is_blocked_at(now):
        return LoginState.LOCKED
    if record.lock_expired_at(now) or record.failure_count == 0:
        return LoginState.CLEAR
    if record.failure_count >= max_attempts:
        return LoginState.LOCKED
    return LoginState.WARNED


def register_failure(
    record: LoginAttemptRecord,
    now: datetime,
    max_attempts: int = DEFAULT_MAX_FAILED_ATTEMPTS,
    lockout: timedelta = DEFAULT_LOCKOUT,
) -> FailureOutcome:
    """Count one failed attempt and lock the account when the threshold is hit."""
    updated = LoginAttemptRecord(
        username=record.username,
        failure_count=record.failure_count + 1,
        blocked_until=record.blocked_until,
    )
    if updated.failure_count >= max_attempts:
        updated.blocked_until = now + lockout
        return FailureOutcome(record=updated, locked=True, attempts_remaining=0)

    return FailureOutcome(
        record=updated,
        locked=False,
        attempts_remaining=max_attempts - updated.failure_count,
    )


def minutes_remaining(blocked_until: datetime, now: datetime) -> int:
    """Whole minutes left in a lock, rounded up (a 30s remainder reads as 1)."""
    seconds = (blocked_until - now).total_seconds()
    return max(0, math.ceil(seconds / 60))
