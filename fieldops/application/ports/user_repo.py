"""Port interface for user account persistence (the credential store)."""

from abc import ABC, abstractmethod

from fieldops.domain.entities.user_account import UserAccount


class UserRepository(ABC):
    @abstractmethod
    async def get_by_username(self, username: str) -> UserAccount | None:
        ...

    @abstractmethod
    async def save(self, user: UserAccount) -> UserAccount:
        ...
