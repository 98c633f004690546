"""Port interface for making registry writes durable."""

from abc import ABC, abstractmethod


class TransactionPort(ABC):
    @abstractmethod
    async def commit(self) -> None:
        """Persist every write made since the last commit.

        Raises if the store rejects them; nothing is durable in that case.
        """
        ...


class NoTransaction(TransactionPort):
    """For stores whose saves are already final (in-memory registries)."""

    async def commit(self) -> None:
        return None
