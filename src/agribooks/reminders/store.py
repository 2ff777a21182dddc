"""Typed read/update access to reminder records."""
import logging
from collections.abc import Generator
from contextlib import contextmanager
from datetime import datetime

from sqlalchemy import exc as sa_exc
from sqlalchemy import update
from sqlalchemy.engine import Engine
from sqlmodel import Session, col, select

from agribooks.core.exceptions import NotFoundError, StorageUnavailable
from agribooks.db.models import Category, Reminder, ReminderType
from agribooks.db.sessions import get_session

logger = logging.getLogger(__name__)

# Connectivity failures the store reports as retryable; other SQLAlchemy errors propagate.
_UNAVAILABLE_ERRORS: tuple[type[Exception], ...] = (
    sa_exc.OperationalError,
    sa_exc.InterfaceError,
    sa_exc.TimeoutError,
)


@contextmanager
def storage_session(bind: Engine) -> Generator[Session, None, None]:
    """Session scope that raises StorageUnavailable when the database is unreachable."""
    try:
        with get_session(bind) as session:
            yield session
    except _UNAVAILABLE_ERRORS as e:
        logger.warning("Database unavailable: %s", e)
        raise StorageUnavailable("Database is unavailable") from e


class ReminderStore:
    """Reminder queries scoped by user, type, completion state and due date.

    The scheduler-facing queries (find_due_reminders) are system-wide; all
    CRUD helpers take the owning user_id.
    """

    def __init__(self, engine: Engine) -> None:
        self._engine = engine

    # ---- Engine queries ----
    def find_active_threshold_reminders(self, user_id: str, category_id: str) -> list[Reminder]:
        """Incomplete THRESHOLD reminders watching ``category_id`` with an amount set."""
        with storage_session(self._engine) as session:
            statement = select(Reminder).where(
                Reminder.user_id == user_id,
                Reminder.reminder_type == ReminderType.THRESHOLD,
                Reminder.completed == False,  # noqa: E712
                Reminder.category_id == category_id,
                col(Reminder.threshold_amount).is_not(None),
            )
            return list(session.exec(statement).all())

    def find_due_reminders(self, reminder_type: ReminderType, as_of: datetime) -> list[Reminder]:
        """Incomplete reminders of ``reminder_type`` due at or before ``as_of``, across all users."""
        with storage_session(self._engine) as session:
            statement = (
                select(Reminder)
                .where(
                    Reminder.reminder_type == reminder_type,
                    Reminder.completed == False,  # noqa: E712
                    Reminder.due_date <= as_of,
                )
                .order_by(col(Reminder.due_date))
            )
            return list(session.exec(statement).all())

    def mark_completed(self, reminder_id: str) -> bool:
        """Set completed=true. Idempotent.

        Uses a conditional UPDATE so concurrent callers cannot both perform the
        transition.

        Returns:
            True when this call completed the reminder, False if it already was.
        """
        with storage_session(self._engine) as session:
            result = session.exec(
                update(Reminder)
                .where(col(Reminder.id) == reminder_id, col(Reminder.completed) == False)  # noqa: E712
                .values(completed=True, updated_at=datetime.now())
            )
            if result.rowcount:
                return True
            if session.get(Reminder, reminder_id) is None:
                raise NotFoundError("Reminder not found")
            return False

    def category_name(self, category_id: str | None) -> str | None:
        if category_id is None:
            return None
        with storage_session(self._engine) as session:
            category = session.get(Category, category_id)
            return category.name if category else None

    # ---- User-scoped CRUD ----
    def list_for_user(
        self,
        user_id: str,
        *,
        completed: bool | None = None,
        due_before: datetime | None = None,
    ) -> list[Reminder]:
        with storage_session(self._engine) as session:
            statement = select(Reminder).where(Reminder.user_id == user_id)
            if completed is not None:
                statement = statement.where(Reminder.completed == completed)
            if due_before is not None:
                statement = statement.where(Reminder.due_date <= due_before)
            return list(session.exec(statement.order_by(col(Reminder.due_date))).all())

    def get_for_user(self, reminder_id: str, user_id: str) -> Reminder:
        """Fetch one reminder owned by ``user_id``. Raises NotFoundError otherwise."""
        with storage_session(self._engine) as session:
            reminder = session.exec(
                select(Reminder).where(Reminder.id == reminder_id, Reminder.user_id == user_id)
            ).first()
        if reminder is None:
            raise NotFoundError("Reminder not found")
        return reminder

    def category_visible_to(self, category_id: str, user_id: str) -> bool:
        """True for system categories and categories owned by ``user_id``."""
        with storage_session(self._engine) as session:
            category = session.get(Category, category_id)
        return category is not None and category.user_id in (None, user_id)

    def save(self, reminder: Reminder) -> Reminder:
        """Insert or update ``reminder`` and return the persisted row."""
        with storage_session(self._engine) as session:
            merged = session.merge(reminder)
            session.flush()
            session.refresh(merged)
            return merged

    def delete(self, reminder_id: str, user_id: str) -> None:
        with storage_session(self._engine) as session:
            reminder = session.exec(
                select(Reminder).where(Reminder.id == reminder_id, Reminder.user_id == user_id)
            ).first()
            if reminder is None:
                raise NotFoundError("Reminder not found")
            session.delete(reminder)
