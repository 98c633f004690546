"""ProgressWorkOrderUseCase: assigned → in_progress → completed."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import replace

from fieldops.application.ports.technician_repo import TechnicianRepository
from fieldops.application.ports.transaction_port import NoTransaction, TransactionPort
from fieldops.application.ports.work_order_repo import WorkOrderRepository
from fieldops.application.use_cases.assign_work_order import apply_atomically
from fieldops.domain.entities.work_order import WorkOrder
from fieldops.domain.errors import InvalidState, OrderNotFound
from fieldops.domain.policies.load_availability import (
    DEFAULT_SATURATION_THRESHOLD,
    derive_availability,
)
from fieldops.domain.value_objects.enums import OrderStatus

logger = logging.getLogger(__name__)


class ProgressWorkOrderUseCase:
    """Moves assigned orders forward; completion releases the technician's load.

    Pass the same registry_lock as AssignWorkOrderUseCase so load releases
    and assignments never interleave.
    """

    def __init__(
        self,
        technician_repo: TechnicianRepository,
        work_order_repo: WorkOrderRepository,
        registry_lock: asyncio.Lock | None = None,
        saturation_threshold: int = DEFAULT_SATURATION_THRESHOLD,
        transaction: TransactionPort | None = None,
    ):
        self._technicians = technician_repo
        self._orders = work_order_repo
        self._lock = registry_lock or asyncio.Lock()
        self._threshold = saturation_threshold
        self._transaction = transaction or NoTransaction()

    async def start(self, order_id: str) -> WorkOrder:
        async with self._lock:
            order = await self._get_in_status(order_id, OrderStatus.ASSIGNED)
            started = await apply_atomically(self._start(order))
        logger.info("Order %s started by technician %s", order_id, started.assigned_technician_id)
        return started

    async def complete(self, order_id: str) -> WorkOrder:
        async with self._lock:
            order = await self._get_in_status(order_id, OrderStatus.IN_PROGRESS)
            completed = await apply_atomically(self._release(order))
        logger.info("Order %s completed by technician %s", order_id, completed.assigned_technician_id)
        return completed

    async def _get_in_status(self, order_id: str, expected: OrderStatus) -> WorkOrder:
        order = await self._orders.get_by_id(order_id, for_update=True)
        if order is None:
            raise OrderNotFound(order_id)
        if order.status != expected:
            raise InvalidState(order.id, order.status.value, expected.value)
        return order

    async def _release(self, order: WorkOrder) -> WorkOrder:
        technician = await self._technicians.get_by_id(order.assigned_technician_id, for_update=True)
        if technician is None:
            # Technician removed outside the core; the order still completes.
            logger.warning(
                "Order %s: assigned technician %s no longer exists, load not released",
                order.id, order.assigned_technician_id,
            )
        else:
            new_load = max(0, technician.current_load - 1)
            await self._technicians.save(
                replace(
                    technician,
                    current_load=new_load,
                    availability=derive_availability(
                        new_load, technician.availability, self._threshold
                    ),
                )
            )
        completed = await self._orders.save(replace(order, status=OrderStatus.COMPLETED))
        await self._transaction.commit()
        return completed

    async def _start(self, order: WorkOrder) -> WorkOrder:
        started = await self._orders.save(replace(order, status=OrderStatus.IN_PROGRESS))
        await self._transaction.commit()
        return started
