"""Reminder CRUD routes.

Thin handlers over ReminderLifecycleManager; type normalization and payload
policy live there, error mapping in the app-level exception handler.
"""
import logging
from datetime import datetime

from dependency_injector.wiring import Provide, inject
from fastapi import APIRouter, Depends, Query, status

from agribooks.container import Container
from agribooks.deps import CurrentUser
from agribooks.reminders import ReminderLifecycleManager
from agribooks.schemas import ReminderCreate, ReminderRead, ReminderUpdate

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/reminders", tags=["reminders"])


@router.get("", response_model=list[ReminderRead])
@inject
def list_reminders(
    user: CurrentUser,
    completed: bool | None = Query(default=None),
    due_date: datetime | None = Query(default=None, alias="dueDate", description="Due on or before"),
    manager: ReminderLifecycleManager = Depends(Provide[Container.reminder_manager]),
):
    return manager.list_for_user(user.id, completed=completed, due_before=due_date)


@router.get("/{reminder_id}", response_model=ReminderRead)
@inject
def get_reminder(
    reminder_id: str,
    user: CurrentUser,
    manager: ReminderLifecycleManager = Depends(Provide[Container.reminder_manager]),
):
    return manager.get(reminder_id, user.id)


@router.post("", response_model=ReminderRead, status_code=status.HTTP_201_CREATED)
@inject
def create_reminder(
    payload: ReminderCreate,
    user: CurrentUser,
    manager: ReminderLifecycleManager = Depends(Provide[Container.reminder_manager]),
):
    logger.info("Create reminder request", extra={"user_id": user.id, "title": payload.title})
    return manager.create(user.id, payload)


@router.put("/{reminder_id}", response_model=ReminderRead)
@inject
def update_reminder(
    reminder_id: str,
    payload: ReminderUpdate,
    user: CurrentUser,
    manager: ReminderLifecycleManager = Depends(Provide[Container.reminder_manager]),
):
    return manager.update(reminder_id, user.id, payload)


@router.patch("/{reminder_id}/toggle", response_model=ReminderRead)
@inject
def toggle_reminder(
    reminder_id: str,
    user: CurrentUser,
    manager: ReminderLifecycleManager = Depends(Provide[Container.reminder_manager]),
):
    return manager.toggle(reminder_id, user.id)


@router.delete("/{reminder_id}")
@inject
def delete_reminder(
    reminder_id: str,
    user: CurrentUser,
    manager: ReminderLifecycleManager = Depends(Provide[Container.reminder_manager]),
) -> dict[str, str]:
    manager.delete(reminder_id, user.id)
    return {"message": "Reminder deleted successfully"}
