"""Port interface for per-account failed login state."""

from abc import ABC, abstractmethod

from fieldops.domain.entities.login_attempt import LoginAttemptRecord


class LoginAttemptRepository(ABC):
    @abstractmethod
    async def get(self, username: str) -> LoginAttemptRecord | None:
        ...

    @abstractmethod
    async def save(self, record: LoginAttemptRecord) -> None:
        ...

    @abstractmethod
    async def clear(self, username: str) -> None:
        """Forget the account's failures. No-op for unknown accounts."""
        ...
