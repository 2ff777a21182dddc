"""Trigger decisions, alert messages and evaluator side effects."""
from datetime import datetime, timedelta
from decimal import Decimal

import pytest

from agribooks.core.exceptions import AlertSinkFailure
from agribooks.db.models import (AlertType, Reminder, ReminderType,
                                 TransactionType)
from agribooks.reminders import TriggerEvaluator
from agribooks.reminders.evaluator import (general_due_message, is_due,
                                           threshold_message,
                                           threshold_reached,
                                           transaction_due_message)

from .conftest import NOW


def _threshold(amount="500", category_id="util-cat", **fields) -> Reminder:
    return Reminder(
        user_id="user-1",
        title=fields.pop("title", "Utility budget"),
        due_date=NOW,
        reminder_type=ReminderType.THRESHOLD,
        category_id=category_id,
        threshold_amount=Decimal(amount) if amount is not None else None,
        **fields,
    )


class TestThresholdReached:
    def test_boundary_is_inclusive(self):
        reminder = _threshold("500")
        assert threshold_reached(reminder, Decimal("500.00"))
        assert threshold_reached(reminder, Decimal("500.01"))
        assert not threshold_reached(reminder, Decimal("499.99"))

    def test_missing_fields_never_trigger(self):
        assert not threshold_reached(_threshold(amount=None), Decimal("1000000"))
        assert not threshold_reached(_threshold(category_id=None), Decimal("1000000"))

    def test_completed_never_triggers(self):
        assert not threshold_reached(_threshold(completed=True), Decimal("1000"))

    def test_other_types_never_trigger(self):
        reminder = _threshold()
        reminder.reminder_type = ReminderType.GENERAL
        assert not threshold_reached(reminder, Decimal("1000"))


class TestIsDue:
    @pytest.mark.parametrize(
        "due_date, expected",
        [
            (datetime(2024, 6, 14, 23, 59), True),
            (datetime(2024, 6, 15, 8, 0), True),
            (datetime(2024, 6, 15, 23, 59, 59), True),
            (datetime(2024, 6, 16, 0, 1), False),
            (datetime(2023, 1, 1), True),
        ],
    )
    def test_compares_calendar_dates(self, due_date, expected):
        assert is_due(due_date, NOW) is expected


class TestMessages:
    def test_threshold_message(self):
        message = threshold_message(_threshold("500"), Decimal("500"), "Utilities")
        assert message == (
            "Threshold reminder: Utility budget. Expense of $500.00 in Utilities "
            "has exceeded the threshold of $500.00"
        )

    def test_threshold_message_unknown_category(self):
        assert "in this category" in threshold_message(_threshold(), Decimal("600"), None)

    def test_transaction_due_message_full(self):
        reminder = Reminder(
            user_id="user-1",
            title="Seed payment",
            due_date=NOW,
            reminder_type=ReminderType.TRANSACTION,
            transaction_type=TransactionType.EXPENSE,
            transaction_amount=Decimal("120.5"),
        )
        assert transaction_due_message(reminder, "Seeds") == (
            "Transaction reminder: Seed payment. Expense transaction of $120.50 in Seeds is due today."
        )

    def test_transaction_due_message_minimal(self):
        reminder = Reminder(
            user_id="user-1",
            title="Harvest sale",
            due_date=NOW,
            reminder_type=ReminderType.TRANSACTION,
            transaction_type=TransactionType.INCOME,
        )
        assert transaction_due_message(reminder, None) == (
            "Transaction reminder: Harvest sale. Income transaction is due today."
        )

    def test_transaction_without_type_reads_as_expense(self):
        reminder = Reminder(
            user_id="user-1", title="Loan", due_date=NOW, reminder_type=ReminderType.TRANSACTION
        )
        assert "Expense transaction" in transaction_due_message(reminder, None)

    def test_general_due_message(self):
        with_description = Reminder(user_id="u", title="Call vet", description="cow 12", due_date=NOW)
        without = Reminder(user_id="u", title="Call vet", due_date=NOW)
        assert general_due_message(with_description) == "Reminder: Call vet - cow 12"
        assert general_due_message(without) == "Reminder: Call vet"


class TestTriggerEvaluator:
    def test_threshold_emits_warning_and_keeps_reminder_active(
        self, evaluator, sink, store, add_reminder, user, category
    ):
        reminder = add_reminder(
            reminder_type=ReminderType.THRESHOLD, category_id=category.id, threshold_amount="500"
        )
        alert = evaluator.evaluate_threshold(reminder, Decimal("500"))

        assert alert is not None
        assert alert.type is AlertType.WARNING
        assert alert.is_read is False
        assert "500" in alert.message and "Utilities" in alert.message
        assert len(sink.list_for_user(user.id)) == 1
        assert store.get_for_user(reminder.id, user.id).completed is False

    def test_threshold_below_does_nothing(self, evaluator, sink, add_reminder, user, category):
        reminder = add_reminder(
            reminder_type=ReminderType.THRESHOLD, category_id=category.id, threshold_amount="500"
        )
        assert evaluator.evaluate_threshold(reminder, Decimal("499.99")) is None
        assert sink.list_for_user(user.id) == []

    def test_due_general_emits_info(self, evaluator, sink, add_reminder, user):
        reminder = add_reminder(title="Call vet", due_date=NOW - timedelta(days=1))
        alert = evaluator.evaluate_due(reminder, NOW)
        assert alert.type is AlertType.INFO
        assert alert.message == "Reminder: Call vet"

    def test_not_yet_due_does_nothing(self, evaluator, add_reminder):
        reminder = add_reminder(due_date=NOW + timedelta(days=1))
        assert evaluator.evaluate_due(reminder, NOW) is None

    def test_due_transaction_uses_category_name(self, evaluator, add_reminder, category):
        reminder = add_reminder(
            reminder_type=ReminderType.TRANSACTION,
            category_id=category.id,
            transaction_type=TransactionType.EXPENSE,
        )
        alert = evaluator.evaluate_due(reminder, NOW)
        assert "in Utilities is due today." in alert.message

    def test_due_evaluation_ignores_threshold_reminders(self, evaluator, add_reminder, category):
        reminder = add_reminder(
            reminder_type=ReminderType.THRESHOLD, category_id=category.id, threshold_amount="1"
        )
        assert evaluator.evaluate_due(reminder, NOW) is None

    def test_completes_when_enabled(self, store, sink, add_reminder, user):
        evaluator = TriggerEvaluator(store, sink, complete_on_trigger=True)
        reminder = add_reminder()
        assert evaluator.evaluate_due(reminder, NOW) is not None
        assert store.get_for_user(reminder.id, user.id).completed is True

    def test_stays_active_by_default(self, evaluator, store, add_reminder, user):
        reminder = add_reminder()
        evaluator.evaluate_due(reminder, NOW)
        assert store.get_for_user(reminder.id, user.id).completed is False

    def test_sink_failure_propagates(self, store, add_reminder):
        class BrokenSink:
            def record(self, *args):
                raise AlertSinkFailure("down")

        evaluator = TriggerEvaluator(store, BrokenSink(), complete_on_trigger=True)
        reminder = add_reminder()
        with pytest.raises(AlertSinkFailure):
            evaluator.evaluate_due(reminder, NOW)
