"""Port interface for work order persistence."""

from abc import ABC, abstractmethod
from dataclasses import dataclass

from fieldops.domain.entities.work_order import WorkOrder
from fieldops.domain.value_objects.enums import OrderStatus


@dataclass(frozen=True)
class WorkOrderFilter:
    status: OrderStatus | None = None
    zone: str | None = None

    def matches(self, order: WorkOrder) -> bool:
        if self.status is not None and order.status != self.status:
            return False
        if self.zone is not None and order.zone != self.zone:
            return False
        return True


class WorkOrderRepository(ABC):
    @abstractmethod
    async def get_by_id(self, order_id: str, for_update: bool = False) -> WorkOrder | None:
        ...

    @abstractmethod
    async def get_all(self, order_filter: WorkOrderFilter | None = None) -> list[WorkOrder]:
        ...

    @abstractmethod
    async def save(self, order: WorkOrder) -> WorkOrder:
        """Insert or replace the work order."""
        ...
