"""In-memory repository implementations.

Each store keeps its own copies of the entities, so a caller mutating a
returned object never changes registry state without calling save().
"""

from __future__ import annotations

from copy import deepcopy

from fieldops.application.ports.login_attempt_repo import LoginAttemptRepository
from fieldops.application.ports.technician_repo import TechnicianFilter, TechnicianRepository
from fieldops.application.ports.user_repo import UserRepository
from fieldops.application.ports.work_order_repo import WorkOrderFilter, WorkOrderRepository
from fieldops.domain.entities.login_attempt import LoginAttemptRecord
from fieldops.domain.entities.technician import Technician
from fieldops.domain.entities.user_account import UserAccount
from fieldops.domain.entities.work_order import WorkOrder


class InMemoryTechnicianRepository(TechnicianRepository):
    def __init__(self, technicians: list[Technician] | None = None):
        self._items: dict[str, Technician] = {
            t.id: deepcopy(t) for t in technicians or []
        }

    async def get_by_id(self, technician_id, for_update=False):
        t = self._items.get(technician_id)
        return deepcopy(t) if t else None

    async def get_all(self, technician_filter=None, for_update=False):
        f = technician_filter or TechnicianFilter()
        return [
            deepcopy(t) for _, t in sorted(self._items.items()) if f.matches(t)
        ]

    async def save(self, technician):
        self._items[technician.id] = deepcopy(technician)
        return technician


class InMemoryWorkOrderRepository(WorkOrderRepository):
    def __init__(self, orders: list[WorkOrder] | None = None):
        self._items: dict[str, WorkOrder] = {o.id: deepcopy(o) for o in orders or []}

    async def get_by_id(self, order_id, for_update=False):
        o = self._items.get(order_id)
        return deepcopy(o) if o else None

    async def get_all(self, order_filter=None):
        f = order_filter or WorkOrderFilter()
        return [deepcopy(o) for _, o in sorted(self._items.items()) if f.matches(o)]

    async def save(self, order):
        self._items[order.id] = deepcopy(order)
        return order


class InMemoryUserRepository(UserRepository):
    def __init__(self, users: list[UserAccount] | None = None):
        self._items: dict[str, UserAccount] = {u.username: deepcopy(u) for u in users or []}

    async def get_by_username(self, username):
        u = self._items.get(username)
        return deepcopy(u) if u else None

    async def save(self, user):
        self._items[user.username] = deepcopy(user)
        return user


class InMemoryLoginAttemptRepository(LoginAttemptRepository):
    """Process-lifetime failure counters (lost on restart)."""

    def __init__(self):
        self._records: dict[str, LoginAttemptRecord] = {}

    async def get(self, username):
        r = self._records.get(username)
        return deepcopy(r) if r else None

    async def save(self, record):
        self._records[record.username] = deepcopy(record)

    async def clear(self, username):
        self._records.pop(username, None)
