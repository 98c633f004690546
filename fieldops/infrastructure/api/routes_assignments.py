"""Assignment endpoints: manual override and automatic matching."""

from __future__ import annotations

from fastapi import APIRouter, Depends
from pydantic import BaseModel, ConfigDict, Field

from fieldops.application.use_cases.assign_work_order import AssignWorkOrderUseCase
from fieldops.domain.entities.user_account import AuthenticatedIdentity
from fieldops.domain.errors import DispatchError
from fieldops.infrastructure.api.dependencies import get_assign_uc, require_supervisor
from fieldops.infrastructure.api.serializers import serialize_work_order, to_http

router = APIRouter(prefix="/assignments", tags=["assignments"])


class ManualAssignmentRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    order_id: str = Field(alias="orderId")
    technician_id: str = Field(alias="technicianId")


class AutomaticAssignmentRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    order_id: str = Field(alias="orderId")


@router.post("/manual")
async def assign_manually(
    body: ManualAssignmentRequest,
    assign_uc: AssignWorkOrderUseCase = Depends(get_assign_uc),
    supervisor: AuthenticatedIdentity = Depends(require_supervisor),
):
    """Bind an order to the chosen technician, bypassing the matching policy."""
    try:
        order = await assign_uc.assign_manually(
            body.order_id, body.technician_id, supervisor.username
        )
    except DispatchError as e:
        raise to_http(e)
    return serialize_work_order(order)


@router.post("/automatic")
async def assign_automatically(
    body: AutomaticAssignmentRequest,
    assign_uc: AssignWorkOrderUseCase = Depends(get_assign_uc),
    _: AuthenticatedIdentity = Depends(require_supervisor),
):
    """Pick the least-loaded available technician of the order's specialty."""
    try:
        order = await assign_uc.assign_automatically(body.order_id)
    except DispatchError as e:
        raise to_http(e)
    return serialize_work_order(order)
