"""Domain → JSON helpers and domain error → HTTP mapping shared by the routers."""

from __future__ import annotations

from fastapi import HTTPException

from fieldops.domain.entities.technician import Technician
from fieldops.domain.entities.work_order import WorkOrder
from fieldops.domain.errors import (
    AccountLocked,
    DispatchError,
    InvalidCredentials,
    InvalidState,
    NoAvailableTechnician,
    OrderNotFound,
    TechnicianNotFound,
    UsernameTaken,
)

_STATUS_BY_ERROR: dict[type[DispatchError], int] = {
    OrderNotFound: 404,
    TechnicianNotFound: 404,
    NoAvailableTechnician: 409,
    InvalidState: 409,
    UsernameTaken: 409,
    InvalidCredentials: 401,
    AccountLocked: 423,
}


def to_http(exc: DispatchError) -> HTTPException:
    detail: dict = {"code": type(exc).__name__, "message": str(exc)}
    if isinstance(exc, InvalidCredentials):
        detail["attemptsRemaining"] = exc.attempts_remaining
    elif isinstance(exc, AccountLocked):
        detail["minutesRemaining"] = exc.minutes_remaining
    return HTTPException(status_code=_STATUS_BY_ERROR.get(type(exc), 400), detail=detail)


def serialize_technician(t: Technician) -> dict:
    return {
        "id": t.id,
        "name": t.name,
        "email": t.email,
        "phone": t.phone,
        "specialty": t.specialty,
        "zone": t.zone,
        "availability": t.availability.value,
        "currentLoad": t.current_load,
        "certifications": list(t.certifications),
    }


def serialize_work_order(o: WorkOrder) -> dict:
    return {
        "id": o.id,
        "clientName": o.client_name,
        "address": o.address,
        "zone": o.zone,
        "priority": o.priority.value,
        "specialty": o.specialty,
        "description": o.description,
        "status": o.status.value,
        "assignedTechnicianId": o.assigned_technician_id,
        "assignedAt": o.assigned_at.isoformat() if o.assigned_at else None,
        "assignedBy": o.assigned_by,
        "createdAt": o.created_at.isoformat() if o.created_at else None,
    }
