"""Auth endpoints: login behind the lockout guard, registration."""

from __future__ import annotations

import logging
from datetime import timedelta

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field, field_validator
from sqlalchemy.ext.asyncio import AsyncSession

from fieldops.adapters.persistence.database import get_session
from fieldops.adapters.security.password import MAX_PASSWORD_BYTES
from fieldops.adapters.security.tokens import create_access_token
from fieldops.application.use_cases.authenticate import AuthenticateUseCase
from fieldops.application.use_cases.register_user import RegisterUserUseCase
from fieldops.config import settings
from fieldops.domain.errors import DispatchError
from fieldops.domain.value_objects.enums import Role
from fieldops.infrastructure.api.dependencies import get_authenticate_uc, get_register_uc
from fieldops.infrastructure.api.serializers import to_http

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])


class LoginRequest(BaseModel):
    username: str
    password: str


class RegisterRequest(BaseModel):
    name: str = Field(min_length=1)
    username: str = Field(min_length=1)
    password: str = Field(min_length=8)
    role: Role

    @field_validator("password")
    @classmethod
    def password_fits_bcrypt(cls, v: str) -> str:
        if len(v.encode("utf-8")) > MAX_PASSWORD_BYTES:
            raise ValueError(f"password must be at most {MAX_PASSWORD_BYTES} bytes")
        return v


@router.post("/login")
async def login(
    body: LoginRequest,
    auth_uc: AuthenticateUseCase = Depends(get_authenticate_uc),
):
    """Authenticate and issue a bearer token. Only supervisors may enter."""
    try:
        identity = await auth_uc.execute(body.username, body.password)
    except DispatchError as e:
        raise to_http(e)

    # Role gate: checked after authentication, never counted as a failed attempt
    if not identity.is_supervisor():
        logger.info("Login %s denied: role %s is not supervisor", identity.username, identity.role.value)
        raise HTTPException(
            status_code=403, detail="Only technical supervisors can access this module"
        )

    token = create_access_token(
        identity, settings.jwt_secret, timedelta(minutes=settings.jwt_expire_minutes)
    )
    return {
        "access_token": token,
        "token_type": "bearer",
        "user": {
            "username": identity.username,
            "name": identity.name,
            "role": identity.role.value,
        },
    }


@router.get("/status/{username}")
async def login_status(
    username: str,
    auth_uc: AuthenticateUseCase = Depends(get_authenticate_uc),
):
    """Lockout state so the login form can disable itself while blocked."""
    status = await auth_uc.status(username)
    return {
        "state": status.state.value,
        "attemptsRemaining": status.attempts_remaining,
        "minutesRemaining": status.minutes_remaining,
    }


@router.post("/register", status_code=201)
async def register(
    body: RegisterRequest,
    register_uc: RegisterUserUseCase = Depends(get_register_uc),
    session: AsyncSession = Depends(get_session),
):
    try:
        user = await register_uc.execute(body.username, body.name, body.password, body.role)
    except DispatchError as e:
        raise to_http(e)
    await session.commit()
    return {"message": "User registered", "username": user.username, "role": user.role.value}
