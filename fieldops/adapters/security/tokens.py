"""HS256 access tokens for authenticated identities."""

from __future__ import annotations

import secrets
from datetime import datetime, timedelta, timezone

import jwt

from fieldops.domain.entities.user_account import AuthenticatedIdentity
from fieldops.domain.value_objects.enums import Role

ALGORITHM = "HS256"


class InvalidToken(Exception):
    pass


def create_access_token(
    identity: AuthenticatedIdentity,
    secret: str,
    expires_delta: timedelta,
    now: datetime | None = None,
) -> str:
    issued_at = now or datetime.now(timezone.utc)
    payload = {
        "sub": identity.username,
        "name": identity.name,
        "role": identity.role.value,
        "iat": issued_at,
        "exp": issued_at + expires_delta,
        "jti": secrets.token_urlsafe(16),
    }
    return jwt.encode(payload, secret, algorithm=ALGORITHM)


def decode_access_token(token: str, secret: str) -> AuthenticatedIdentity:
    try:
        payload = jwt.decode(token, secret, algorithms=[ALGORITHM])
        return AuthenticatedIdentity(
            username=payload["sub"],
            name=payload.get("name", ""),
            role=Role(payload["role"]),
        )
    except (jwt.PyJWTError, KeyError, ValueError) as e:
        raise InvalidToken(str(e)) from e
