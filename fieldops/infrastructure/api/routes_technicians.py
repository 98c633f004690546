"""Technician endpoints: filterable listing and detail view."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException

from fieldops.application.ports.technician_repo import TechnicianFilter, TechnicianRepository
from fieldops.domain.entities.user_account import AuthenticatedIdentity
from fieldops.domain.value_objects.enums import Availability
from fieldops.infrastructure.api.dependencies import get_technician_repo, require_supervisor
from fieldops.infrastructure.api.serializers import serialize_technician

router = APIRouter(prefix="/technicians", tags=["technicians"])


@router.get("")
async def list_technicians(
    zone: str | None = None,
    specialty: str | None = None,
    availability: Availability | None = None,
    technicians: TechnicianRepository = Depends(get_technician_repo),
    _: AuthenticatedIdentity = Depends(require_supervisor),
):
    items = await technicians.get_all(
        TechnicianFilter(zone=zone, specialty=specialty, availability=availability)
    )
    return [serialize_technician(t) for t in items]


@router.get("/{technician_id}")
async def get_technician(
    technician_id: str,
    technicians: TechnicianRepository = Depends(get_technician_repo),
    _: AuthenticatedIdentity = Depends(require_supervisor),
):
    t = await technicians.get_by_id(technician_id)
    if not t:
        raise HTTPException(status_code=404, detail="Technician not found")
    return serialize_technician(t)
