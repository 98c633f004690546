"""Port interface for notifying a technician about a new assignment."""

from abc import ABC, abstractmethod


class NotificationPort(ABC):
    @abstractmethod
    async def send(self, order_id: str, technician_id: str, channels: list[str]) -> None:
        """Best-effort delivery over each channel.

        May raise; callers treat any error as a failed notification only.
        """
        ...
