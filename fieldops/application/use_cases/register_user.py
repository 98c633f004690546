"""RegisterUserUseCase: create a login for a supervisor or technician."""

from __future__ import annotations

import asyncio
import logging

from fieldops.application.ports.password_hasher import PasswordHasher
from fieldops.application.ports.user_repo import UserRepository
from fieldops.domain.entities.user_account import UserAccount
from fieldops.domain.errors import UsernameTaken
from fieldops.domain.value_objects.enums import Role

logger = logging.getLogger(__name__)


class RegisterUserUseCase:
    def __init__(self, user_repo: UserRepository, hasher: PasswordHasher):
        self._users = user_repo
        self._hasher = hasher

    async def execute(self, username: str, name: str, password: str, role: Role) -> UserAccount:
        username = username.strip()
        if await self._users.get_by_username(username) is not None:
            raise UsernameTaken(username)

        user = await self._users.save(
            UserAccount(
                username=username,
                name=name.strip(),
                password_hash=await asyncio.to_thread(self._hasher.hash, password),
                role=role,
            )
        )
        logger.info("Registered user %s (role=%s)", user.username, user.role.value)
        return user
