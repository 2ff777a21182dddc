"""Trigger decisions for reminders and the alerts they produce.

Three evaluation paths, one per reminder type:

- THRESHOLD: reactive, an observed expense reaches the watched amount.
- TRANSACTION / GENERAL: scheduled, the due date falls on or before today.

Decision helpers (threshold_reached, is_due) are pure. Evaluation methods read
what they need, decide, then write through the alert sink; the decision always
completes before the write, but the two are not atomic.
"""
import logging
from datetime import datetime
from decimal import Decimal

from agribooks.core.utils import format_money
from agribooks.db.models import (Alert, AlertType, Reminder, ReminderType,
                                 TransactionType)
from agribooks.reminders.alert_sink import AlertSink
from agribooks.reminders.store import ReminderStore

logger = logging.getLogger(__name__)

UNKNOWN_CATEGORY = "this category"


def threshold_reached(reminder: Reminder, observed_amount: Decimal) -> bool:
    """True when an expense of ``observed_amount`` triggers ``reminder``.

    Inclusive boundary. Reminders missing a category or amount are never
    eligible.
    """
    if reminder.reminder_type != ReminderType.THRESHOLD or reminder.completed:
        return False
    if reminder.threshold_amount is None or reminder.category_id is None:
        return False
    return Decimal(str(observed_amount)) >= Decimal(str(reminder.threshold_amount))


def is_due(due_date: datetime, now: datetime) -> bool:
    """Due today or earlier, compared by calendar date rather than timestamp."""
    return due_date.date() <= now.date()


def threshold_message(reminder: Reminder, observed_amount: Decimal, category_name: str | None) -> str:
    return (
        f"Threshold reminder: {reminder.title}. "
        f"Expense of ${format_money(observed_amount)} in {category_name or UNKNOWN_CATEGORY} "
        f"has exceeded the threshold of ${format_money(reminder.threshold_amount)}"
    )


def transaction_due_message(reminder: Reminder, category_name: str | None) -> str:
    kind = "Income" if reminder.transaction_type == TransactionType.INCOME else "Expense"
    amount = (
        f" of ${format_money(reminder.transaction_amount)}"
        if reminder.transaction_amount is not None
        else ""
    )
    category = f" in {category_name}" if category_name else ""
    return f"Transaction reminder: {reminder.title}. {kind} transaction{amount}{category} is due today."


def general_due_message(reminder: Reminder) -> str:
    description = f" - {reminder.description}" if reminder.description else ""
    return f"Reminder: {reminder.title}{description}"


class TriggerEvaluator:
    """Evaluates one reminder against its context and emits at most one alert.

    Args:
        store: Used to resolve category names and, when enabled, to complete
            due-date reminders after they fire.
        sink: Where triggered alerts are recorded.
        complete_on_trigger: Mark TRANSACTION/GENERAL reminders completed once
            their alert is recorded. THRESHOLD reminders are budget watches and
            are never completed by the evaluator.
    """

    def __init__(
        self,
        store: ReminderStore,
        sink: AlertSink,
        *,
        complete_on_trigger: bool = False,
    ) -> None:
        self._store = store
        self._sink = sink
        self._complete_on_trigger = complete_on_trigger

    def evaluate_threshold(self, reminder: Reminder, observed_amount: Decimal) -> Alert | None:
        """Emit a WARNING alert when ``observed_amount`` reaches the threshold."""
        if not threshold_reached(reminder, observed_amount):
            return None
        category_name = self._store.category_name(reminder.category_id)
        alert = self._sink.record(
            reminder.user_id,
            AlertType.WARNING,
            threshold_message(reminder, observed_amount, category_name),
        )
        logger.info(
            "Threshold reminder triggered",
            extra={
                "reminder_id": reminder.id,
                "user_id": reminder.user_id,
                "threshold_amount": reminder.threshold_amount,
                "actual_amount": observed_amount,
            },
        )
        return alert

    def evaluate_transaction_due(self, reminder: Reminder, now: datetime) -> Alert | None:
        """Emit an INFO alert for a TRANSACTION reminder due today or earlier."""
        if reminder.reminder_type != ReminderType.TRANSACTION or reminder.completed:
            return None
        if not is_due(reminder.due_date, now):
            return None
        category_name = self._store.category_name(reminder.category_id)
        alert = self._sink.record(
            reminder.user_id,
            AlertType.INFO,
            transaction_due_message(reminder, category_name),
        )
        logger.info(
            "Transaction reminder triggered",
            extra={"reminder_id": reminder.id, "user_id": reminder.user_id, "due_date": reminder.due_date},
        )
        self._complete_if_enabled(reminder)
        return alert

    def evaluate_general_due(self, reminder: Reminder, now: datetime) -> Alert | None:
        """Emit an INFO alert for a GENERAL reminder due today or earlier."""
        if reminder.reminder_type != ReminderType.GENERAL or reminder.completed:
            return None
        if not is_due(reminder.due_date, now):
            return None
        alert = self._sink.record(reminder.user_id, AlertType.INFO, general_due_message(reminder))
        logger.info(
            "General reminder triggered",
            extra={"reminder_id": reminder.id, "user_id": reminder.user_id, "due_date": reminder.due_date},
        )
        self._complete_if_enabled(reminder)
        return alert

    def evaluate_due(self, reminder: Reminder, now: datetime) -> Alert | None:
        """Dispatch a due-date reminder to its path by type."""
        if reminder.reminder_type == ReminderType.TRANSACTION:
            return self.evaluate_transaction_due(reminder, now)
        if reminder.reminder_type == ReminderType.GENERAL:
            return self.evaluate_general_due(reminder, now)
        return None

    def _complete_if_enabled(self, reminder: Reminder) -> None:
        """Complete a fired reminder. Failures are logged; the alert already stands."""
        if not self._complete_on_trigger:
            return
        try:
            self._store.mark_completed(reminder.id)
        except Exception as e:  # pylint: disable=broad-except
            logger.error(
                "Failed to complete triggered reminder: %s",
                e,
                extra={
                    "reminder_id": reminder.id,
                    "user_id": reminder.user_id,
                    "reminder_type": reminder.reminder_type.value,
                },
            )
