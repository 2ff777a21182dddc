"""Operational routes for the reminder scheduler (admin role only)."""
import logging

from dependency_injector.wiring import Provide, inject
from fastapi import APIRouter, Depends

from agribooks.container import Container
from agribooks.deps import AdminUser
from agribooks.reminders import ReminderScheduler
from agribooks.schemas import SweepReport

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/admin/reminders", tags=["admin"])


@router.post("/sweep", response_model=list[SweepReport])
@inject
async def run_sweep(
    admin: AdminUser,
    scheduler: ReminderScheduler = Depends(Provide[Container.scheduler]),
) -> list[SweepReport]:
    """Run the due-date sweeps now; waits if a scheduled sweep is in progress."""
    logger.info("Manual reminder sweep requested", extra={"user_id": admin.id})
    return await scheduler.run_once()


@router.get("/status")
@inject
def scheduler_status(
    _admin: AdminUser,
    scheduler: ReminderScheduler = Depends(Provide[Container.scheduler]),
) -> dict:
    return scheduler.status()
