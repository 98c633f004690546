"""Work order endpoints: listing, detail, progression."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException

from fieldops.application.ports.work_order_repo import WorkOrderFilter, WorkOrderRepository
from fieldops.application.use_cases.progress_work_order import ProgressWorkOrderUseCase
from fieldops.domain.entities.user_account import AuthenticatedIdentity
from fieldops.domain.errors import DispatchError
from fieldops.domain.value_objects.enums import OrderStatus
from fieldops.infrastructure.api.dependencies import (
    get_current_identity,
    get_progress_uc,
    get_work_order_repo,
    require_supervisor,
)
from fieldops.infrastructure.api.serializers import serialize_work_order, to_http

router = APIRouter(prefix="/work-orders", tags=["work-orders"])


@router.get("")
async def list_work_orders(
    status: OrderStatus | None = None,
    zone: str | None = None,
    orders: WorkOrderRepository = Depends(get_work_order_repo),
    _: AuthenticatedIdentity = Depends(require_supervisor),
):
    items = await orders.get_all(WorkOrderFilter(status=status, zone=zone))
    return [serialize_work_order(o) for o in items]


@router.get("/{order_id}")
async def get_work_order(
    order_id: str,
    orders: WorkOrderRepository = Depends(get_work_order_repo),
    _: AuthenticatedIdentity = Depends(require_supervisor),
):
    o = await orders.get_by_id(order_id)
    if not o:
        raise HTTPException(status_code=404, detail="Work order not found")
    return serialize_work_order(o)


@router.post("/{order_id}/start")
async def start_work_order(
    order_id: str,
    progress_uc: ProgressWorkOrderUseCase = Depends(get_progress_uc),
    _: AuthenticatedIdentity = Depends(get_current_identity),
):
    try:
        order = await progress_uc.start(order_id)
    except DispatchError as e:
        raise to_http(e)
    return serialize_work_order(order)


@router.post("/{order_id}/complete")
async def complete_work_order(
    order_id: str,
    progress_uc: ProgressWorkOrderUseCase = Depends(get_progress_uc),
    _: AuthenticatedIdentity = Depends(get_current_identity),
):
    try:
        order = await progress_uc.complete(order_id)
    except DispatchError as e:
        raise to_http(e)
    return serialize_work_order(order)
