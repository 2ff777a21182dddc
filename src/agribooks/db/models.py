"""Database models for the bookkeeping backend.

Users own categories, transactions, reminders and alerts. The reminder engine
reads transactions and categories and writes alerts; it never owns the
transaction lifecycle.

Timestamps are naive server-local time. Datetime columns are declared with
SQLAlchemy's plain DateTime type, which binds timezone-less values.
"""
import uuid
from datetime import datetime
from decimal import Decimal
from enum import Enum

from sqlalchemy import DateTime, Index
from sqlmodel import Field, SQLModel


def new_id() -> str:
    return str(uuid.uuid4())


class TransactionType(str, Enum):
    INCOME = "INCOME"
    EXPENSE = "EXPENSE"


class ReminderType(str, Enum):
    GENERAL = "GENERAL"
    TRANSACTION = "TRANSACTION"
    THRESHOLD = "THRESHOLD"


class AlertType(str, Enum):
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    SUCCESS = "SUCCESS"


class User(SQLModel, table=True):
    """Account resolved from the X-User-Id header."""

    id: str = Field(default_factory=new_id, primary_key=True)
    name: str
    email: str = Field(unique=True, index=True)
    role: str = Field(default="user")  # user | admin
    created_at: datetime = Field(default_factory=datetime.now, sa_type=DateTime)


class Category(SQLModel, table=True):
    """Income or expense category; system categories have no owner."""

    id: str = Field(default_factory=new_id, primary_key=True)
    user_id: str | None = Field(default=None, foreign_key="user.id", index=True)
    name: str
    type: TransactionType
    created_at: datetime = Field(default_factory=datetime.now, sa_type=DateTime)


class Transaction(SQLModel, table=True):
    """A recorded income or expense."""

    id: str = Field(default_factory=new_id, primary_key=True)
    user_id: str = Field(foreign_key="user.id", index=True)
    type: TransactionType
    amount: Decimal = Field(max_digits=10, decimal_places=2)
    category_id: str = Field(foreign_key="category.id", index=True)
    description: str | None = None
    created_at: datetime = Field(default_factory=datetime.now, sa_type=DateTime)
    updated_at: datetime = Field(default_factory=datetime.now, sa_type=DateTime)


class Reminder(SQLModel, table=True):
    """User-owned obligation (due date) or condition watch (threshold)."""

    __table_args__ = (
        Index("ix_reminder_user_type_completed", "user_id", "reminder_type", "completed"),
    )

    id: str = Field(default_factory=new_id, primary_key=True)
    user_id: str = Field(foreign_key="user.id", index=True)
    title: str
    description: str | None = None
    due_date: datetime = Field(sa_type=DateTime)
    completed: bool = Field(default=False)
    reminder_type: ReminderType = Field(default=ReminderType.GENERAL)
    # Watched category for THRESHOLD; informative for TRANSACTION.
    category_id: str | None = Field(
        default=None, foreign_key="category.id", index=True, ondelete="SET NULL"
    )
    threshold_amount: Decimal | None = Field(default=None, max_digits=10, decimal_places=2)
    transaction_type: TransactionType | None = None
    transaction_amount: Decimal | None = Field(default=None, max_digits=10, decimal_places=2)
    created_at: datetime = Field(default_factory=datetime.now, sa_type=DateTime)
    updated_at: datetime = Field(default_factory=datetime.now, sa_type=DateTime)


class Alert(SQLModel, table=True):
    """Notification shown to a user; only is_read ever changes."""

    id: str = Field(default_factory=new_id, primary_key=True)
    user_id: str = Field(foreign_key="user.id", index=True)
    type: AlertType
    message: str
    is_read: bool = Field(default=False)
    created_at: datetime = Field(default_factory=datetime.now, sa_type=DateTime)
