"""Port interface for the wall-clock time source."""

from abc import ABC, abstractmethod
from datetime import datetime


class ClockPort(ABC):
    @abstractmethod
    def now(self) -> datetime:
        """Current timezone-aware UTC time."""
        ...
