"""Database package: models and session management."""
from agribooks.db.models import (Alert, AlertType, Category, Reminder,
                                 ReminderType, Transaction, TransactionType,
                                 User)

__all__ = [
    "Alert",
    "AlertType",
    "Category",
    "Reminder",
    "ReminderType",
    "Transaction",
    "TransactionType",
    "User",
]
