"""Health check endpoint."""

from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from fieldops.adapters.persistence.database import get_session
from fieldops.application.ports.work_order_repo import WorkOrderFilter, WorkOrderRepository
from fieldops.domain.value_objects.enums import OrderStatus
from fieldops.infrastructure.api.dependencies import get_work_order_repo

router = APIRouter(tags=["health"])


@router.get("/health")
async def health_check(
    session: AsyncSession = Depends(get_session),
    orders: WorkOrderRepository = Depends(get_work_order_repo),
):
    """Database connectivity plus the size of the pending queue."""
    pending: int | None = None
    try:
        await session.execute(text("SELECT 1"))
        pending = len(await orders.get_all(WorkOrderFilter(status=OrderStatus.PENDING)))
        db_status = "connected"
    except Exception as e:
        db_status = f"error: {e}"

    return {
        "status": "ok" if db_status == "connected" else "degraded",
        "database": db_status,
        "pending_orders": pending,
        "service": "FieldOps Dispatch",
    }
