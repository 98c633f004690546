"""AssignWorkOrderUseCase: manual and automatic technician assignment."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import replace

from fieldops.application.ports.clock_port import ClockPort
from fieldops.application.ports.notification_port import NotificationPort
from fieldops.application.ports.technician_repo import TechnicianFilter, TechnicianRepository
from fieldops.application.ports.transaction_port import NoTransaction, TransactionPort
from fieldops.application.ports.work_order_repo import WorkOrderRepository
from fieldops.domain.entities.technician import Technician
from fieldops.domain.entities.work_order import WorkOrder
from fieldops.domain.errors import (
    InvalidState,
    NoAvailableTechnician,
    OrderNotFound,
    TechnicianNotFound,
)
from fieldops.domain.policies.load_availability import (
    DEFAULT_SATURATION_THRESHOLD,
    derive_availability,
)
from fieldops.domain.policies.technician_matching import select_technician
from fieldops.domain.value_objects.enums import Availability, NotificationChannel, OrderStatus

logger = logging.getLogger(__name__)

AUTOMATIC_ACTOR = "automatic"


async def apply_atomically(write):
    """Run *write* to completion even if the awaiting caller is cancelled.

    Cancellation before this point leaves the registries untouched; once the
    write has started the caller waits for it to finish before the
    cancellation propagates, so the surrounding lock is never released while
    a half-applied write is in flight.
    """
    task = asyncio.ensure_future(write)
    try:
        return await asyncio.shield(task)
    except asyncio.CancelledError:
        await task
        raise


class AssignWorkOrderUseCase:
    """Binds a pending work order to a technician.

    All assignments (and load releases in ProgressWorkOrderUseCase) that share
    the same *registry_lock* are serialized, so candidate selection always
    observes the load written by the previous assignment. The write is
    committed through *transaction* before the lock is released, and the
    technician is notified only after that commit succeeded.
    """

    def __init__(
        self,
        technician_repo: TechnicianRepository,
        work_order_repo: WorkOrderRepository,
        notifier: NotificationPort,
        clock: ClockPort,
        registry_lock: asyncio.Lock | None = None,
        saturation_threshold: int = DEFAULT_SATURATION_THRESHOLD,
        automatic_actor_id: str = AUTOMATIC_ACTOR,
        notification_channels: list[str] | None = None,
        transaction: TransactionPort | None = None,
    ):
        self._technicians = technician_repo
        self._orders = work_order_repo
        self._notifier = notifier
        self._clock = clock
        self._lock = registry_lock or asyncio.Lock()
        self._threshold = saturation_threshold
        self._automatic_actor = automatic_actor_id
        self._transaction = transaction or NoTransaction()
        # Unknown channel names fail here, at wiring time
        self._channels = [
            NotificationChannel(c).value
            for c in notification_channels or [c.value for c in NotificationChannel]
        ]

    async def assign_manually(self, order_id: str, technician_id: str, actor_id: str) -> WorkOrder:
        """Supervisor override: no specialty or availability filtering."""
        async with self._lock:
            order = await self._get_pending_order(order_id)
            technician = await self._technicians.get_by_id(technician_id, for_update=True)
            if technician is None:
                raise TechnicianNotFound(technician_id)

            if not technician.is_available() or not technician.has_specialty(order.specialty):
                logger.info(
                    "Order %s: manual override to technician %s (availability=%s, specialty=%s)",
                    order.id, technician.id, technician.availability.value, technician.specialty,
                )
            assigned = await apply_atomically(self._bind(order, technician, actor_id))

        logger.info("Order %s → technician %s (manual, by %s)", order_id, technician_id, actor_id)
        await self._notify(assigned)
        return assigned

    async def assign_automatically(self, order_id: str) -> WorkOrder:
        """Greedy least-loaded pick among available technicians of the order's specialty."""
        async with self._lock:
            order = await self._get_pending_order(order_id)
            technicians = await self._technicians.get_all(
                TechnicianFilter(specialty=order.specialty, availability=Availability.AVAILABLE),
                for_update=True,
            )
            match = select_technician(order, technicians)
            if match is None:
                logger.warning(
                    "Order %s: no available technicians with specialty %s, left pending",
                    order.id, order.specialty,
                )
                raise NoAvailableTechnician(order.id, order.specialty)

            assigned = await apply_atomically(
                self._bind(order, match.technician, self._automatic_actor)
            )

        logger.info(
            "Order %s → technician %s (automatic: %s)",
            order_id, match.technician.id, match.reason,
        )
        await self._notify(assigned)
        return assigned

    # ─── internals ───────────────────────────────────────────────────

    async def _get_pending_order(self, order_id: str) -> WorkOrder:
        order = await self._orders.get_by_id(order_id, for_update=True)
        if order is None:
            raise OrderNotFound(order_id)
        if not order.is_pending():
            raise InvalidState(order.id, order.status.value, OrderStatus.PENDING.value)
        return order

    async def _bind(self, order: WorkOrder, technician: Technician, actor_id: str) -> WorkOrder:
        new_load = technician.current_load + 1
        loaded = replace(
            technician,
            current_load=new_load,
            availability=derive_availability(new_load, technician.availability, self._threshold),
        )
        assigned = replace(
            order,
            status=OrderStatus.ASSIGNED,
            assigned_technician_id=technician.id,
            assigned_at=self._clock.now(),
            assigned_by=actor_id,
        )
        await self._technicians.save(loaded)
        saved = await self._orders.save(assigned)
        await self._transaction.commit()
        return saved

    async def _notify(self, order: WorkOrder) -> None:
        try:
            await self._notifier.send(order.id, order.assigned_technician_id, self._channels)
        except Exception:
            logger.exception(
                "Notification failed for order %s / technician %s (assignment kept)",
                order.id, order.assigned_technician_id,
            )
