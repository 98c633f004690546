"""Pytest configuration and shared fixtures."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from fieldops.application.ports.clock_port import ClockPort
from fieldops.application.ports.notification_port import NotificationPort
from fieldops.application.ports.password_hasher import PasswordHasher
from fieldops.domain.entities.technician import Technician
from fieldops.domain.entities.work_order import WorkOrder
from fieldops.domain.value_objects.enums import Availability

T0 = datetime(2026, 3, 2, 9, 0, tzinfo=timezone.utc)


class FrozenClock(ClockPort):
    """Clock that only moves when told to."""

    def __init__(self, start: datetime = T0):
        self._now = start

    def now(self) -> datetime:
        return self._now

    def advance(self, **kwargs) -> None:
        self._now += timedelta(**kwargs)


class RecordingNotifier(NotificationPort):
    def __init__(self):
        self.sent: list[tuple[str, str, list[str]]] = []

    async def send(self, order_id, technician_id, channels):
        self.sent.append((order_id, technician_id, list(channels)))


class FailingNotifier(NotificationPort):
    def __init__(self):
        self.calls = 0

    async def send(self, order_id, technician_id, channels):
        self.calls += 1
        raise ConnectionError("SMTP relay unreachable")


class PlainHasher(PasswordHasher):
    """Reversible stand-in so tests don't pay bcrypt's cost."""

    def hash(self, plain):
        return f"plain${plain}"

    def verify(self, plain, hashed):
        return hashed == f"plain${plain}"


@pytest.fixture
def clock():
    return FrozenClock()


@pytest.fixture
def notifier():
    return RecordingNotifier()


@pytest.fixture
def hasher():
    return PlainHasher()


@pytest.fixture
def make_technician():
    def _make(
        tid: str,
        specialty: str = "fiber",
        zone: str = "north",
        load: int = 0,
        availability: Availability = Availability.AVAILABLE,
    ) -> Technician:
        return Technician(
            id=tid, name=f"Tech {tid}", specialty=specialty, zone=zone,
            email=f"{tid}@fieldops.test", phone="+57 300 000 0000",
            availability=availability, current_load=load,
        )

    return _make


@pytest.fixture
def make_order():
    def _make(
        oid: str = "WO-1",
        specialty: str = "fiber",
        zone: str = "north",
    ) -> WorkOrder:
        return WorkOrder(
            id=oid, client_name="ACME Ltd", address="Calle 10 #20-30",
            zone=zone, specialty=specialty, description="No internet since morning",
            created_at=T0 - timedelta(hours=1),
        )

    return _make
