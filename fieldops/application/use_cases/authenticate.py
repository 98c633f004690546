"""AuthenticateUseCase: credential check guarded by a timed lockout."""

from __future__ import annotations

import asyncio
import logging
from contextlib import asynccontextmanager
from dataclasses import dataclass
from datetime import timedelta

from fieldops.application.ports.clock_port import ClockPort
from fieldops.application.ports.login_attempt_repo import LoginAttemptRepository
from fieldops.application.ports.password_hasher import PasswordHasher
from fieldops.application.ports.user_repo import UserRepository
from fieldops.domain.entities.login_attempt import LoginAttemptRecord
from fieldops.domain.entities.user_account import AuthenticatedIdentity
from fieldops.domain.errors import AccountLocked, InvalidCredentials
from fieldops.domain.policies.lockout import (
    DEFAULT_LOCKOUT,
    DEFAULT_MAX_FAILED_ATTEMPTS,
    describe_login_state,
    minutes_remaining,
    register_failure,
)
from fieldops.domain.value_objects.enums import LoginState

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LoginStatus:
    """What the login form shows before the user types anything."""

    state: LoginState
    attempts_remaining: int
    minutes_remaining: int = 0


class AccountLocks:
    """One asyncio.Lock per username, shared by every AuthenticateUseCase.

    An entry lives only while some attempt holds or waits for it.
    """

    def __init__(self):
        self._locks: dict[str, asyncio.Lock] = {}
        self._holders: dict[str, int] = {}

    def __len__(self) -> int:
        return len(self._locks)

    @asynccontextmanager
    async def hold(self, username: str):
        lock = self._locks.setdefault(username, asyncio.Lock())
        self._holders[username] = self._holders.get(username, 0) + 1
        try:
            async with lock:
                yield
        finally:
            self._holders[username] -= 1
            if not self._holders[username]:
                del self._holders[username]
                del self._locks[username]


class AuthenticateUseCase:
    """Login guard.

    Pipeline for one attempt:
    1. Locked and still inside the window → AccountLocked, credentials untouched.
    2. Lock expired → failures forgotten (lazy expiry, no timer).
    3. Unknown user / inactive / wrong password → one more failure,
       InvalidCredentials or AccountLocked when the threshold is reached.
    4. Match → failures forgotten, identity returned.

    Role checks are the caller's job and never count as a failure.
    """

    def __init__(
        self,
        user_repo: UserRepository,
        attempt_repo: LoginAttemptRepository,
        hasher: PasswordHasher,
        clock: ClockPort,
        account_locks: AccountLocks | None = None,
        max_attempts: int = DEFAULT_MAX_FAILED_ATTEMPTS,
        lockout: timedelta = DEFAULT_LOCKOUT,
    ):
        self._users = user_repo
        self._attempts = attempt_repo
        self._hasher = hasher
        self._clock = clock
        self._locks = account_locks or AccountLocks()
        self._max_attempts = max_attempts
        self._lockout = lockout

    async def execute(self, username: str, password: str) -> AuthenticatedIdentity:
        async with self._locks.hold(username):
            now = self._clock.now()
            record = await self._attempts.get(username)

            if record is not None and record.is_blocked_at(now):
                remaining = minutes_remaining(record.blocked_until, now)
                logger.info("Login %s rejected: locked for %d more minute(s)", username, remaining)
                raise AccountLocked(remaining)

            if record is not None and record.lock_expired_at(now):
                logger.info("Login %s: lock expired, failures reset", username)
                await self._attempts.clear(username)
                record = None

            user = await self._users.get_by_username(username)
            if (
                user is None
                or not user.is_active
                or not await asyncio.to_thread(self._hasher.verify, password, user.password_hash)
            ):
                outcome = register_failure(
                    record or LoginAttemptRecord(username=username),
                    now,
                    self._max_attempts,
                    self._lockout,
                )
                await self._attempts.save(outcome.record)
                if outcome.locked:
                    logger.warning(
                        "Login %s locked after %d failed attempts",
                        username, outcome.record.failure_count,
                    )
                    raise AccountLocked(minutes_remaining(outcome.record.blocked_until, now))
                logger.info(
                    "Login %s failed (%d attempt(s) remaining)",
                    username, outcome.attempts_remaining,
                )
                raise InvalidCredentials(outcome.attempts_remaining)

            await self._attempts.clear(username)
            logger.info("Login %s succeeded (role=%s)", username, user.role.value)
            return AuthenticatedIdentity(username=user.username, name=user.name, role=user.role)

    async def status(self, username: str) -> LoginStatus:
        """Read-only view of the lockout state; never counts as an attempt."""
        now = self._clock.now()
        record = await self._attempts.get(username)
        state = describe_login_state(record, now, self._max_attempts)

        if state == LoginState.LOCKED:
            remaining = minutes_remaining(record.blocked_until, now) if record.blocked_until else 0
            return LoginStatus(state=state, attempts_remaining=0, minutes_remaining=remaining)
        failures = record.failure_count if state == LoginState.WARNED else 0
        return LoginStatus(state=state, attempts_remaining=self._max_attempts - failures)
