"""Alert listing, lookup, read-state and deletion routes."""
from dependency_injector.wiring import Provide, inject
from fastapi import APIRouter, Depends, Query

from agribooks.container import Container
from agribooks.db.models import AlertType
from agribooks.deps import CurrentUser
from agribooks.reminders import AlertSink
from agribooks.schemas import AlertRead

router = APIRouter(prefix="/api/alerts", tags=["alerts"])


@router.get("", response_model=list[AlertRead])
@inject
def list_alerts(
    user: CurrentUser,
    is_read: bool | None = Query(default=None, alias="isRead"),
    alert_type: AlertType | None = Query(default=None, alias="type"),
    sink: AlertSink = Depends(Provide[Container.alert_sink]),
):
    """Newest first."""
    return sink.list_for_user(user.id, is_read=is_read, alert_type=alert_type)


@router.patch("/{alert_id}/read", response_model=AlertRead)
@inject
def mark_alert_read(
    alert_id: str,
    user: CurrentUser,
    sink: AlertSink = Depends(Provide[Container.alert_sink]),
):
    return sink.mark_read(alert_id, user.id)


@router.get("/{alert_id}", response_model=AlertRead)
@inject
def get_alert(
    alert_id: str,
    user: CurrentUser,
    sink: AlertSink = Depends(Provide[Container.alert_sink]),
):
    return sink.get(alert_id, user.id)


@router.delete("/{alert_id}")
@inject
def delete_alert(
    alert_id: str,
    user: CurrentUser,
    sink: AlertSink = Depends(Provide[Container.alert_sink]),
) -> dict[str, str]:
    sink.delete(alert_id, user.id)
    return {"message": "Alert deleted successfully"}
