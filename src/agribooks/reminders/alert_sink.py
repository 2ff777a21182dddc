"""Durable recording of user notifications."""
import logging

from sqlalchemy.engine import Engine
from sqlmodel import col, select

from agribooks.core.exceptions import AlertSinkFailure, NotFoundError
from agribooks.db.models import Alert, AlertType
from agribooks.reminders.store import storage_session

logger = logging.getLogger(__name__)


class AlertSink:
    """Accepts (user, severity, message) and stores it as an unread Alert."""

    def __init__(self, engine: Engine) -> None:
        self._engine = engine

    def record(self, user_id: str, severity: AlertType, message: str) -> Alert:
        """Persist a new unread alert.

        Raises:
            AlertSinkFailure: the write failed for any reason (including an
                unreachable database). Callers do not retry.
        """
        alert = Alert(user_id=user_id, type=severity, message=message)
        try:
            with storage_session(self._engine) as session:
                session.add(alert)
                session.flush()
                session.refresh(alert)
        except Exception as e:
            logger.error(
                "Failed to record alert: %s",
                e,
                extra={"user_id": user_id, "alert_type": severity.value},
            )
            raise AlertSinkFailure(f"Failed to record alert for user {user_id}") from e
        logger.info(
            "Alert created",
            extra={"alert_id": alert.id, "user_id": user_id, "alert_type": severity.value},
        )
        return alert

    def list_for_user(
        self,
        user_id: str,
        *,
        is_read: bool | None = None,
        alert_type: AlertType | None = None,
    ) -> list[Alert]:
        """Alerts for ``user_id``, newest first."""
        with storage_session(self._engine) as session:
            statement = select(Alert).where(Alert.user_id == user_id)
            if is_read is not None:
                statement = statement.where(Alert.is_read == is_read)
            if alert_type is not None:
                statement = statement.where(Alert.type == alert_type)
            statement = statement.order_by(col(Alert.created_at).desc())
            return list(session.exec(statement).all())

    def mark_read(self, alert_id: str, user_id: str) -> Alert:
        with storage_session(self._engine) as session:
            alert = session.exec(
                select(Alert).where(Alert.id == alert_id, Alert.user_id == user_id)
            ).first()
            if alert is None:
                raise NotFoundError("Alert not found")
            alert.is_read = True
            session.add(alert)
            session.flush()
            session.refresh(alert)
            return alert

    def get(self, alert_id: str, user_id: str) -> Alert:
        with storage_session(self._engine) as session:
            alert = session.exec(
                select(Alert).where(Alert.id == alert_id, Alert.user_id == user_id)
            ).first()
        if alert is None:
            raise NotFoundError("Alert not found")
        return alert

    def delete(self, alert_id: str, user_id: str) -> None:
        """Remove one of ``user_id``'s alerts. NotFoundError if it is not theirs."""
        with storage_session(self._engine) as session:
            alert = session.exec(
                select(Alert).where(Alert.id == alert_id, Alert.user_id == user_id)
            ).first()
            if alert is None:
                raise NotFoundError("Alert not found")
            session.delete(alert)
        logger.info("Alert deleted", extra={"alert_id": alert_id, "user_id": user_id})
