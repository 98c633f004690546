"""Tests for AuthenticateUseCase: credential check and timed lockout."""

from __future__ import annotations

import asyncio
from datetime import timedelta

import pytest

from fieldops.adapters.memory.repositories import (
    InMemoryLoginAttemptRepository,
    InMemoryUserRepository,
)
from fieldops.application.use_cases.authenticate import AccountLocks, AuthenticateUseCase
from fieldops.domain.entities.user_account import UserAccount
from fieldops.domain.errors import AccountLocked, InvalidCredentials
from fieldops.domain.value_objects.enums import LoginState, Role


class CountingHasher:
    """Wraps a hasher and counts verify() calls."""

    def __init__(self, inner):
        self._inner = inner
        self.verifications = 0

    def hash(self, plain):
        return self._inner.hash(plain)

    def verify(self, plain, hashed):
        self.verifications += 1
        return self._inner.verify(plain, hashed)


@pytest.fixture
def attempts():
    return InMemoryLoginAttemptRepository()


@pytest.fixture
def users(hasher):
    return InMemoryUserRepository([
        UserAccount("ana", "Ana Ruiz", hasher.hash("s3cret-pass"), Role.SUPERVISOR),
        UserAccount("tito", "Tito Gil", hasher.hash("field-pass"), Role.TECHNICIAN),
        UserAccount("old", "Old Boss", hasher.hash("old-pass"), Role.SUPERVISOR, is_active=False),
    ])


@pytest.fixture
def counting(hasher):
    return CountingHasher(hasher)


@pytest.fixture
def auth(users, attempts, counting, clock):
    return AuthenticateUseCase(users, attempts, counting, clock)


@pytest.mark.asyncio
async def test_success_returns_identity(auth):
    identity = await auth.execute("ana", "s3cret-pass")
    assert identity.username == "ana"
    assert identity.name == "Ana Ruiz"
    assert identity.role == Role.SUPERVISOR


@pytest.mark.asyncio
async def test_technician_authenticates_role_is_callers_concern(auth, attempts):
    identity = await auth.execute("tito", "field-pass")
    assert identity.role == Role.TECHNICIAN
    assert await attempts.get("tito") is None


@pytest.mark.asyncio
async def test_lockout_lifecycle(auth, attempts, clock):
    with pytest.raises(InvalidCredentials) as e1:
        await auth.execute("ana", "wrong")
    assert e1.value.attempts_remaining == 2

    with pytest.raises(InvalidCredentials) as e2:
        await auth.execute("ana", "wrong")
    assert e2.value.attempts_remaining == 1

    with pytest.raises(AccountLocked) as e3:
        await auth.execute("ana", "wrong")
    assert e3.value.minutes_remaining == 15

    # Correct password during the window is still refused
    with pytest.raises(AccountLocked):
        await auth.execute("ana", "s3cret-pass")

    clock.advance(minutes=15)
    identity = await auth.execute("ana", "s3cret-pass")
    assert identity.username == "ana"
    assert await attempts.get("ana") is None


@pytest.mark.asyncio
async def test_locked_account_does_not_consult_credentials(auth, counting, attempts, clock):
    for _ in range(3):
        with pytest.raises((InvalidCredentials, AccountLocked)):
            await auth.execute("ana", "wrong")
    calls = counting.verifications
    blocked_until = (await attempts.get("ana")).blocked_until

    clock.advance(minutes=5)
    with pytest.raises(AccountLocked) as exc:
        await auth.execute("ana", "s3cret-pass")
    assert exc.value.minutes_remaining == 10
    assert counting.verifications == calls
    # attempts during the window do not extend it
    assert (await attempts.get("ana")).blocked_until == blocked_until


@pytest.mark.asyncio
async def test_minutes_remaining_rounds_up(auth, clock):
    for _ in range(3):
        with pytest.raises((InvalidCredentials, AccountLocked)):
            await auth.execute("ana", "wrong")
    clock.advance(minutes=14, seconds=30)
    with pytest.raises(AccountLocked) as exc:
        await auth.execute("ana", "wrong")
    assert exc.value.minutes_remaining == 1


@pytest.mark.asyncio
async def test_failure_after_expiry_starts_fresh(auth, clock):
    for _ in range(3):
        with pytest.raises((InvalidCredentials, AccountLocked)):
            await auth.execute("ana", "wrong")
    clock.advance(minutes=16)

    with pytest.raises(InvalidCredentials) as exc:
        await auth.execute("ana", "wrong")
    assert exc.value.attempts_remaining == 2


@pytest.mark.asyncio
async def test_success_resets_counter(auth, attempts):
    with pytest.raises(InvalidCredentials):
        await auth.execute("ana", "wrong")
    await auth.execute("ana", "s3cret-pass")
    assert await attempts.get("ana") is None

    with pytest.raises(InvalidCredentials) as exc:
        await auth.execute("ana", "wrong")
    assert exc.value.attempts_remaining == 2


@pytest.mark.asyncio
async def test_unknown_user_counts_like_wrong_password(auth, attempts):
    with pytest.raises(InvalidCredentials) as e1:
        await auth.execute("ghost", "whatever")
    assert e1.value.attempts_remaining == 2
    with pytest.raises(InvalidCredentials):
        await auth.execute("ghost", "whatever")
    with pytest.raises(AccountLocked):
        await auth.execute("ghost", "whatever")
    assert (await attempts.get("ghost")).failure_count == 3


@pytest.mark.asyncio
async def test_inactive_user_is_rejected(auth):
    with pytest.raises(InvalidCredentials):
        await auth.execute("old", "old-pass")


@pytest.mark.asyncio
async def test_accounts_are_tracked_independently(auth):
    for _ in range(3):
        with pytest.raises((InvalidCredentials, AccountLocked)):
            await auth.execute("ana", "wrong")
    identity = await auth.execute("tito", "field-pass")
    assert identity.username == "tito"


@pytest.mark.asyncio
async def test_custom_threshold_and_window(users, attempts, hasher, clock):
    auth = AuthenticateUseCase(
        users, attempts, hasher, clock, max_attempts=5, lockout=timedelta(minutes=30)
    )
    for expected in (4, 3, 2, 1):
        with pytest.raises(InvalidCredentials) as exc:
            await auth.execute("ana", "wrong")
        assert exc.value.attempts_remaining == expected
    with pytest.raises(AccountLocked) as exc:
        await auth.execute("ana", "wrong")
    assert exc.value.minutes_remaining == 30


@pytest.mark.asyncio
async def test_concurrent_failures_count_each_attempt(users, attempts, hasher, clock):
    locks = AccountLocks()
    a = AuthenticateUseCase(users, attempts, hasher, clock, account_locks=locks)
    b = AuthenticateUseCase(users, attempts, hasher, clock, account_locks=locks)

    results = await asyncio.gather(
        *(uc.execute("ana", "wrong") for uc in (a, b, a, b)),
        return_exceptions=True,
    )
    assert sum(isinstance(r, InvalidCredentials) for r in results) == 2
    assert sum(isinstance(r, AccountLocked) for r in results) == 2
    assert (await attempts.get("ana")).failure_count == 3
    assert len(locks) == 0


@pytest.mark.asyncio
async def test_account_locks_are_dropped_after_use(users, attempts, hasher, clock):
    locks = AccountLocks()
    auth = AuthenticateUseCase(users, attempts, hasher, clock, account_locks=locks)

    await auth.execute("ana", "s3cret-pass")
    for name in ("ghost-1", "ghost-2", "ghost-3"):
        with pytest.raises(InvalidCredentials):
            await auth.execute(name, "whatever")
    assert len(locks) == 0


@pytest.mark.asyncio
async def test_account_lock_survives_while_waited_on():
    locks = AccountLocks()
    inside = asyncio.Event()
    release = asyncio.Event()
    order = []

    async def first():
        async with locks.hold("ana"):
            inside.set()
            await release.wait()
            order.append("first")

    async def second():
        await inside.wait()
        async with locks.hold("ana"):
            order.append("second")

    tasks = [asyncio.create_task(first()), asyncio.create_task(second())]
    await inside.wait()
    await asyncio.sleep(0)
    assert len(locks) == 1
    release.set()
    await asyncio.gather(*tasks)

    assert order == ["first", "second"]
    assert len(locks) == 0


@pytest.mark.asyncio
async def test_status_tracks_lockout(auth, clock):
    status = await auth.status("ana")
    assert status.state == LoginState.CLEAR
    assert status.attempts_remaining == 3

    with pytest.raises(InvalidCredentials):
        await auth.execute("ana", "wrong")
    status = await auth.status("ana")
    assert status.state == LoginState.WARNED
    assert status.attempts_remaining == 2

    for _ in range(2):
        with pytest.raises((InvalidCredentials, AccountLocked)):
            await auth.execute("ana", "wrong")
    clock.advance(minutes=6)
    status = await auth.status("ana")
    assert status.state == LoginState.LOCKED
    assert status.minutes_remaining == 9

    clock.advance(minutes=9)
    assert (await auth.status("ana")).state == LoginState.CLEAR


@pytest.mark.asyncio
async def test_status_does_not_count_as_attempt(auth, attempts):
    for _ in range(5):
        await auth.status("ana")
    assert await attempts.get("ana") is None
