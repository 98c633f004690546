"""SQLAlchemy repository implementations."""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from fieldops.adapters.persistence.models import TechnicianModel, UserModel, WorkOrderModel
from fieldops.application.ports.technician_repo import TechnicianFilter, TechnicianRepository
from fieldops.application.ports.user_repo import UserRepository
from fieldops.application.ports.work_order_repo import WorkOrderFilter, WorkOrderRepository
from fieldops.domain.entities.technician import Technician
from fieldops.domain.entities.user_account import UserAccount
from fieldops.domain.entities.work_order import WorkOrder
from fieldops.domain.value_objects.enums import Availability, OrderStatus, Priority, Role

# ─── Mappers ─────────────────────────────────────────────────────────


def _technician_to_domain(m: TechnicianModel) -> Technician:
    return Technician(
        id=m.id,
        name=m.name,
        email=m.email,
        phone=m.phone,
        specialty=m.specialty,
        zone=m.zone,
        availability=Availability(m.availability),
        current_load=m.current_load,
        certifications=list(m.certifications or []),
    )


def _work_order_to_domain(m: WorkOrderModel) -> WorkOrder:
    return WorkOrder(
        id=m.id,
        client_name=m.client_name,
        address=m.address,
        zone=m.zone,
        priority=Priority(m.priority),
        specialty=m.specialty,
        description=m.description,
        status=OrderStatus(m.status),
        assigned_technician_id=m.assigned_technician_id,
        assigned_at=m.assigned_at,
        assigned_by=m.assigned_by,
        created_at=m.created_at,
    )


def _user_to_domain(m: UserModel) -> UserAccount:
    return UserAccount(
        username=m.username,
        name=m.name,
        password_hash=m.password_hash,
        role=Role(m.role),
        is_active=m.is_active,
    )


# ─── Repositories ────────────────────────────────────────────────────


class SqlTechnicianRepository(TechnicianRepository):
    def __init__(self, session: AsyncSession):
        self._s = session

    async def get_by_id(self, technician_id: str, for_update: bool = False) -> Technician | None:
        stmt = select(TechnicianModel).where(TechnicianModel.id == technician_id)
        if for_update:
            stmt = stmt.with_for_update()
        result = await self._s.execute(stmt)
        m = result.scalar_one_or_none()
        return _technician_to_domain(m) if m else None

    async def get_all(
        self,
        technician_filter: TechnicianFilter | None = None,
        for_update: bool = False,
    ) -> list[Technician]:
        stmt = select(TechnicianModel).order_by(TechnicianModel.id)
        f = technician_filter or TechnicianFilter()
        if f.zone is not None:
            stmt = stmt.where(TechnicianModel.zone == f.zone)
        if f.specialty is not None:
            stmt = stmt.where(TechnicianModel.specialty == f.specialty)
        if f.availability is not None:
            stmt = stmt.where(TechnicianModel.availability == f.availability.value)
        if for_update:
            stmt = stmt.with_for_update()
        result = await self._s.execute(stmt)
        return [_technician_to_domain(m) for m in result.scalars()]

    async def save(self, technician: Technician) -> Technician:
        m = await self._s.get(TechnicianModel, technician.id)
        if m is None:
            m = TechnicianModel(id=technician.id)
            self._s.add(m)
        m.name = technician.name
        m.email = technician.email
        m.phone = technician.phone
        m.specialty = technician.specialty
        m.zone = technician.zone
        m.availability = technician.availability.value
        m.current_load = technician.current_load
        m.certifications = list(technician.certifications)
        await self._s.flush()
        return technician


class SqlWorkOrderRepository(WorkOrderRepository):
    def __init__(self, session: AsyncSession):
        self._s = session

    async def get_by_id(self, order_id: str, for_update: bool = False) -> WorkOrder | None:
        stmt = select(WorkOrderModel).where(WorkOrderModel.id == order_id)
        if for_update:
            stmt = stmt.with_for_update()
        result = await self._s.execute(stmt)
        m = result.scalar_one_or_none()
        return _work_order_to_domain(m) if m else None

    async def get_all(self, order_filter: WorkOrderFilter | None = None) -> list[WorkOrder]:
        stmt = select(WorkOrderModel).order_by(WorkOrderModel.id)
        f = order_filter or WorkOrderFilter()
        if f.status is not None:
            stmt = stmt.where(WorkOrderModel.status == f.status.value)
        if f.zone is not None:
            stmt = stmt.where(WorkOrderModel.zone == f.zone)
        result = await self._s.execute(stmt)
        return [_work_order_to_domain(m) for m in result.scalars()]

    async def save(self, order: WorkOrder) -> WorkOrder:
        m = await self._s.get(WorkOrderModel, order.id)
        if m is None:
            m = WorkOrderModel(id=order.id, created_at=order.created_at)
            self._s.add(m)
        m.client_name = order.client_name
        m.address = order.address
        m.zone = order.zone
        m.priority = order.priority.value
        m.specialty = order.specialty
        m.description = order.description
        m.status = order.status.value
        m.assigned_technician_id = order.assigned_technician_id
        m.assigned_at = order.assigned_at
        m.assigned_by = order.assigned_by
        await self._s.flush()
        return order


class SqlUserRepository(UserRepository):
    def __init__(self, session: AsyncSession):
        self._s = session

    async def get_by_username(self, username: str) -> UserAccount | None:
        result = await self._s.execute(
            select(UserModel).where(UserModel.username == username)
        )
        m = result.scalar_one_or_none()
        return _user_to_domain(m) if m else None

    async def save(self, user: UserAccount) -> UserAccount:
        result = await self._s.execute(
            select(UserModel).where(UserModel.username == user.username)
        )
        m = result.scalar_one_or_none()
        if m is None:
            m = UserModel(username=user.username)
            self._s.add(m)
        m.name = user.name
        m.password_hash = user.password_hash
        m.role = user.role.value
        m.is_active = user.is_active
        await self._s.flush()
        return user
