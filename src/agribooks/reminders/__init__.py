"""Reminder notification engine.

- ReminderStore: reminder queries and atomic completion
- AlertSink: durable, unread notifications
- TriggerEvaluator: per-type trigger decisions and alert messages
- ReminderLifecycleManager: type normalization and payload validation
- NotificationService: reactive threshold fan-out and due-date sweeps
- ReminderScheduler: periodic, cancellable sweep driver
"""
from agribooks.reminders.alert_sink import AlertSink
from agribooks.reminders.evaluator import TriggerEvaluator
from agribooks.reminders.lifecycle import (ReminderLifecycleManager,
                                           map_legacy, normalize_and_validate,
                                           validate_reminder_type)
from agribooks.reminders.notifications import NotificationService
from agribooks.reminders.scheduler import ReminderScheduler
from agribooks.reminders.store import ReminderStore

__all__ = [
    "AlertSink",
    "NotificationService",
    "ReminderLifecycleManager",
    "ReminderScheduler",
    "ReminderStore",
    "TriggerEvaluator",
    "map_legacy",
    "normalize_and_validate",
    "validate_reminder_type",
]
