"""Tests for LockoutPolicy."""

from datetime import datetime, timedelta, timezone

from fieldops.domain.entities.login_attempt import LoginAttemptRecord
from fieldops.domain.policies.lockout import (
    describe_login_state,
    minutes_remaining,
    register_failure,
)
from fieldops.domain.value_objects.enums import LoginState

NOW = datetime(2026, 3, 2, 9, 0, tzinfo=timezone.utc)


def test_first_failure_warns():
    outcome = register_failure(LoginAttemptRecord(username="ana"), NOW)
    assert outcome.record.failure_count == 1
    assert outcome.locked is False
    assert outcome.attempts_remaining == 2
    assert outcome.record.blocked_until is None


def test_third_failure_locks_for_fifteen_minutes():
    record = LoginAttemptRecord(username="ana", failure_count=2)
    outcome = register_failure(record, NOW)
    assert outcome.locked is True
    assert outcome.attempts_remaining == 0
    assert outcome.record.blocked_until == NOW + timedelta(minutes=15)


def test_register_failure_does_not_mutate_input():
    record = LoginAttemptRecord(username="ana", failure_count=1)
    register_failure(record, NOW)
    assert record.failure_count == 1


def test_custom_threshold_and_window():
    outcome = register_failure(
        LoginAttemptRecord(username="ana", failure_count=4),
        NOW,
        max_attempts=5,
        lockout=timedelta(minutes=30),
    )
    assert outcome.locked is True
    assert outcome.record.blocked_until == NOW + timedelta(minutes=30)


def test_describe_states():
    assert describe_login_state(None, NOW) == LoginState.CLEAR
    assert describe_login_state(LoginAttemptRecord("ana", 0), NOW) == LoginState.CLEAR
    assert describe_login_state(LoginAttemptRecord("ana", 2), NOW) == LoginState.WARNED
    locked = LoginAttemptRecord("ana", 3, blocked_until=NOW + timedelta(minutes=1))
    assert describe_login_state(locked, NOW) == LoginState.LOCKED


def test_expired_lock_reads_as_clear():
    record = LoginAttemptRecord("ana", 3, blocked_until=NOW - timedelta(seconds=1))
    assert describe_login_state(record, NOW) == LoginState.CLEAR


def test_lock_expires_exactly_at_blocked_until():
    record = LoginAttemptRecord("ana", 3, blocked_until=NOW)
    assert record.is_blocked_at(NOW) is False
    assert record.lock_expired_at(NOW) is True


def test_minutes_remaining_rounds_up():
    assert minutes_remaining(NOW + timedelta(minutes=15), NOW) == 15
    assert minutes_remaining(NOW + timedelta(seconds=30), NOW) == 1
    assert minutes_remaining(NOW + timedelta(minutes=4, seconds=1), NOW) == 5
    assert minutes_remaining(NOW - timedelta(minutes=1), NOW) == 0
