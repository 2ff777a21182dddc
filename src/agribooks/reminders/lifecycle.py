"""Reminder type normalization and create/update validation.

Type handling is two explicit stages: map_legacy() accepts tags sent by old
clients, validate_reminder_type() rejects everything outside the accepted set.
"""
import logging
from datetime import datetime

from agribooks.core.exceptions import InvalidArgument, NotFoundError
from agribooks.core.utils import to_local_naive, to_money
from agribooks.db.models import Reminder, ReminderType
from agribooks.reminders.store import ReminderStore
from agribooks.schemas import ReminderCreate, ReminderUpdate

logger = logging.getLogger(__name__)

ACCEPTED_REMINDER_TYPES: tuple[str, ...] = tuple(t.value for t in ReminderType)

# Deprecated tag -> current tag.
LEGACY_REMINDER_TYPES: dict[str, ReminderType] = {
    "BUDGET_ALERT": ReminderType.THRESHOLD,
}


def map_legacy(raw: str) -> str:
    """Rewrite a deprecated reminder type tag; other values pass through unchanged."""
    mapped = LEGACY_REMINDER_TYPES.get(raw)
    if mapped is None:
        return raw
    logger.info(
        "Mapped legacy reminderType %s to %s",
        raw,
        mapped.value,
        extra={"legacy_reminder_type": raw},
    )
    return mapped.value


def validate_reminder_type(candidate: str) -> ReminderType:
    """Return the ReminderType for ``candidate``; exact, case-sensitive match.

    Raises:
        InvalidArgument: ``candidate`` is not one of GENERAL, TRANSACTION, THRESHOLD.
    """
    if candidate not in ACCEPTED_REMINDER_TYPES:
        raise InvalidArgument(
            f"Invalid reminderType: {candidate}. "
            f"Valid values are: {', '.join(ACCEPTED_REMINDER_TYPES)}"
        )
    return ReminderType(candidate)


def normalize_and_validate(raw: str | None) -> ReminderType:
    """Normalize a client-supplied reminder type. Omitted (None) means GENERAL."""
    if raw is None:
        return ReminderType.GENERAL
    return validate_reminder_type(map_legacy(raw))


class ReminderLifecycleManager:
    """Validates reminder payloads and persists them through the store.

    Policy enforced before every write:
    - reminder types are normalized (legacy tags mapped, unknown tags rejected);
    - a THRESHOLD reminder needs both category_id and threshold_amount;
    - a referenced category must exist and be a system category or the
      user's own.
    """

    def __init__(self, store: ReminderStore) -> None:
        self._store = store

    def list_for_user(
        self,
        user_id: str,
        *,
        completed: bool | None = None,
        due_before: datetime | None = None,
    ) -> list[Reminder]:
        return self._store.list_for_user(user_id, completed=completed, due_before=due_before)

    def get(self, reminder_id: str, user_id: str) -> Reminder:
        return self._store.get_for_user(reminder_id, user_id)

    def create(self, user_id: str, data: ReminderCreate) -> Reminder:
        reminder_type = normalize_and_validate(data.reminder_type)
        reminder = Reminder(
            user_id=user_id,
            title=data.title,
            description=data.description,
            due_date=to_local_naive(data.due_date),
            reminder_type=reminder_type,
            category_id=data.category_id,
            threshold_amount=to_money(data.threshold_amount),
            transaction_type=data.transaction_type,
            transaction_amount=to_money(data.transaction_amount),
        )
        self._check_fields(reminder)
        saved = self._store.save(reminder)
        logger.info(
            "Reminder created",
            extra={"reminder_id": saved.id, "user_id": user_id, "reminder_type": reminder_type.value},
        )
        return saved

    def update(self, reminder_id: str, user_id: str, data: ReminderUpdate) -> Reminder:
        reminder = self._store.get_for_user(reminder_id, user_id)
        changes = data.model_dump(exclude_unset=True)

        if "reminder_type" in changes:
            raw = changes.pop("reminder_type")
            if raw is None:
                raise InvalidArgument(
                    "Invalid reminderType: null. "
                    f"Valid values are: {', '.join(ACCEPTED_REMINDER_TYPES)}"
                )
            reminder.reminder_type = normalize_and_validate(raw)
        for field in ("threshold_amount", "transaction_amount"):
            if field in changes:
                changes[field] = to_money(changes[field])
        for field in ("title", "due_date", "completed"):
            if field in changes and changes[field] is None:
                raise InvalidArgument(f"{field} cannot be null")
        if changes.get("due_date") is not None:
            changes["due_date"] = to_local_naive(changes["due_date"])

        for field, value in changes.items():
            setattr(reminder, field, value)
        reminder.updated_at = datetime.now()

        self._check_fields(reminder)
        saved = self._store.save(reminder)
        logger.info("Reminder updated", extra={"reminder_id": reminder_id, "user_id": user_id})
        return saved

    def toggle(self, reminder_id: str, user_id: str) -> Reminder:
        """Flip completed; both directions are always allowed."""
        reminder = self._store.get_for_user(reminder_id, user_id)
        reminder.completed = not reminder.completed
        reminder.updated_at = datetime.now()
        saved = self._store.save(reminder)
        logger.info(
            "Reminder toggled",
            extra={"reminder_id": reminder_id, "user_id": user_id, "completed": saved.completed},
        )
        return saved

    def delete(self, reminder_id: str, user_id: str) -> None:
        self._store.delete(reminder_id, user_id)
        logger.info("Reminder deleted", extra={"reminder_id": reminder_id, "user_id": user_id})

    def _check_fields(self, reminder: Reminder) -> None:
        if reminder.reminder_type == ReminderType.THRESHOLD:
            if reminder.category_id is None:
                raise InvalidArgument("categoryId is required for THRESHOLD reminders")
            if reminder.threshold_amount is None:
                raise InvalidArgument("thresholdAmount is required for THRESHOLD reminders")
        if reminder.category_id is not None and not self._store.category_visible_to(
            reminder.category_id, reminder.user_id
        ):
            raise NotFoundError("Category not found")
