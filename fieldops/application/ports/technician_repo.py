"""Port interface for technician persistence."""

from abc import ABC, abstractmethod
from dataclasses import dataclass

from fieldops.domain.entities.technician import Technician
from fieldops.domain.value_objects.enums import Availability


@dataclass(frozen=True)
class TechnicianFilter:
    """None on a field means "any value"."""

    zone: str | None = None
    specialty: str | None = None
    availability: Availability | None = None

    def matches(self, technician: Technician) -> bool:
        if self.zone is not None and technician.zone != self.zone:
            return False
        if self.specialty is not None and technician.specialty != self.specialty:
            return False
        if self.availability is not None and technician.availability != self.availability:
            return False
        return True


class TechnicianRepository(ABC):
    @abstractmethod
    async def get_by_id(self, technician_id: str, for_update: bool = False) -> Technician | None:
        ...

    @abstractmethod
    async def get_all(
        self,
        technician_filter: TechnicianFilter | None = None,
        for_update: bool = False,
    ) -> list[Technician]:
        """Return matching technicians ordered by id.

        for_update asks the store to lock the returned rows until commit.
        """
        ...

    @abstractmethod
    async def save(self, technician: Technician) -> Technician:
        """Insert or replace the technician."""
        ...
