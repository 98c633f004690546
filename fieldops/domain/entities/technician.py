"""Technician entity: a field worker who executes work orders."""

from dataclasses import dataclass, field

from fieldops.domain.value_objects.enums import Availability


@dataclass
class Technician:
    id: str
    name: str
    specialty: str
    zone: str
    email: str = ""
    phone: str = ""
    availability: Availability = Availability.AVAILABLE
    current_load: int = 0
    certifications: list[str] = field(default_factory=list)

    def is_available(self) -> bool:
        return self.availability == Availability.AVAILABLE

    def has_specialty(self, specialty: str) -> bool:
        return self.specialty == specialty
