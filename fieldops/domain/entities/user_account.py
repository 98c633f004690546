"""UserAccount entity: a person allowed to log into the dispatch tools."""

from dataclasses import dataclass

from fieldops.domain.value_objects.enums import Role


@dataclass
class UserAccount:
    username: str
    name: str
    password_hash: str
    role: Role
    is_active: bool = True


@dataclass(frozen=True)
class AuthenticatedIdentity:
    """Result of a successful login."""

    username: str
    name: str
    role: Role

    def is_supervisor(self) -> bool:
        return self.role == Role.SUPERVISOR
