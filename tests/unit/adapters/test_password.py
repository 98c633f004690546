"""Tests for BcryptPasswordHasher (low cost factor to keep the suite fast)."""

import pytest

from fieldops.adapters.security.password import BcryptPasswordHasher


@pytest.fixture
def hasher():
    return BcryptPasswordHasher(rounds=4)


def test_hash_verifies(hasher):
    hashed = hasher.hash("s3cret-pass")
    assert hashed.startswith("$2")
    assert hashed != "s3cret-pass"
    assert hasher.verify("s3cret-pass", hashed)


def test_wrong_password(hasher):
    assert not hasher.verify("wrong", hasher.hash("s3cret-pass"))


def test_salted(hasher):
    assert hasher.hash("s3cret-pass") != hasher.hash("s3cret-pass")


def test_malformed_hash_is_a_mismatch(hasher):
    assert hasher.verify("s3cret-pass", "not-a-bcrypt-hash") is False


def test_overlong_password_is_a_mismatch(hasher):
    assert hasher.verify("x" * 100, hasher.hash("s3cret-pass")) is False
