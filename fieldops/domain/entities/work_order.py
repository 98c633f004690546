"""WorkOrder entity: a client request to be served on site."""

from dataclasses import dataclass
from datetime import datetime

from fieldops.domain.value_objects.enums import OrderStatus, Priority

# Statuses in which an order must carry an assigned technician
ASSIGNED_STATUSES = frozenset(
    {OrderStatus.ASSIGNED, OrderStatus.IN_PROGRESS, OrderStatus.COMPLETED}
)


@dataclass
class WorkOrder:
    id: str
    client_name: str
    address: str
    zone: str
    specialty: str
    created_at: datetime
    description: str = ""
    priority: Priority = Priority.MEDIUM
    status: OrderStatus = OrderStatus.PENDING
    assigned_technician_id: str | None = None
    assigned_at: datetime | None = None
    assigned_by: str | None = None

    def is_pending(self) -> bool:
        return self.status == OrderStatus.PENDING

    def is_assigned(self) -> bool:
        return self.status in ASSIGNED_STATUSES
