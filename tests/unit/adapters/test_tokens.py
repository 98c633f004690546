"""Tests for HS256 access tokens."""

from datetime import datetime, timedelta, timezone

import jwt
import pytest

from fieldops.adapters.security.tokens import (
    ALGORITHM,
    InvalidToken,
    create_access_token,
    decode_access_token,
)
from fieldops.domain.entities.user_account import AuthenticatedIdentity
from fieldops.domain.value_objects.enums import Role

SECRET = "test-secret-with-enough-length-for-hs256"
ANA = AuthenticatedIdentity(username="ana", name="Ana Ruiz", role=Role.SUPERVISOR)


def test_token_carries_identity():
    token = create_access_token(ANA, SECRET, timedelta(hours=8))
    assert decode_access_token(token, SECRET) == ANA


def test_tokens_are_unique_per_login():
    now = datetime.now(timezone.utc)
    a = create_access_token(ANA, SECRET, timedelta(hours=8), now=now)
    b = create_access_token(ANA, SECRET, timedelta(hours=8), now=now)
    assert a != b


def test_expired_token_rejected():
    issued = datetime.now(timezone.utc) - timedelta(days=1)
    token = create_access_token(ANA, SECRET, timedelta(minutes=5), now=issued)
    with pytest.raises(InvalidToken):
        decode_access_token(token, SECRET)


def test_wrong_secret_rejected():
    token = create_access_token(ANA, SECRET, timedelta(hours=8))
    with pytest.raises(InvalidToken):
        decode_access_token(token, "another-secret-with-enough-length-too")


def test_unknown_role_rejected():
    token = jwt.encode({"sub": "ana", "role": "janitor"}, SECRET, algorithm=ALGORITHM)
    with pytest.raises(InvalidToken):
        decode_access_token(token, SECRET)


def test_garbage_rejected():
    with pytest.raises(InvalidToken):
        decode_access_token("not-a-token", SECRET)
