"""Pydantic schemas for API payloads. Not persisted to DB.

Clients send camelCase keys (reminderType, dueDate, ...); snake_case is
accepted too. Responses are serialized with the camelCase aliases.
"""
from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field

from agribooks.db.models import AlertType, ReminderType, TransactionType


class ReminderCreate(BaseModel):
    """Payload for creating a reminder.

    reminder_type stays a plain string so legacy tags reach the lifecycle
    manager instead of failing schema validation.
    """

    model_config = ConfigDict(populate_by_name=True)

    title: str = Field(min_length=1)
    description: str | None = None
    due_date: datetime = Field(alias="dueDate")
    reminder_type: str | None = Field(default=None, alias="reminderType")
    category_id: str | None = Field(default=None, alias="categoryId")
    threshold_amount: Decimal | None = Field(default=None, alias="thresholdAmount", ge=0)
    transaction_type: TransactionType | None = Field(default=None, alias="transactionType")
    transaction_amount: Decimal | None = Field(default=None, alias="transactionAmount", ge=0)


class ReminderUpdate(BaseModel):
    """Partial update; only fields present in the payload are applied."""

    model_config = ConfigDict(populate_by_name=True)

    title: str | None = Field(default=None, min_length=1)
    description: str | None = None
    due_date: datetime | None = Field(default=None, alias="dueDate")
    completed: bool | None = None
    reminder_type: str | None = Field(default=None, alias="reminderType")
    category_id: str | None = Field(default=None, alias="categoryId")
    threshold_amount: Decimal | None = Field(default=None, alias="thresholdAmount", ge=0)
    transaction_type: TransactionType | None = Field(default=None, alias="transactionType")
    transaction_amount: Decimal | None = Field(default=None, alias="transactionAmount", ge=0)


class ReminderRead(BaseModel):
    model_config = ConfigDict(populate_by_name=True, from_attributes=True)

    id: str
    user_id: str = Field(alias="userId")
    title: str
    description: str | None = None
    due_date: datetime = Field(alias="dueDate")
    completed: bool
    reminder_type: ReminderType = Field(alias="reminderType")
    category_id: str | None = Field(default=None, alias="categoryId")
    threshold_amount: Decimal | None = Field(default=None, alias="thresholdAmount")
    transaction_type: TransactionType | None = Field(default=None, alias="transactionType")
    transaction_amount: Decimal | None = Field(default=None, alias="transactionAmount")


class AlertRead(BaseModel):
    model_config = ConfigDict(populate_by_name=True, from_attributes=True)

    id: str
    user_id: str = Field(alias="userId")
    type: AlertType
    message: str
    is_read: bool = Field(alias="isRead")
    created_at: datetime = Field(alias="createdAt")


class CategoryCreate(BaseModel):
    name: str = Field(min_length=1)
    type: TransactionType


class CategoryRead(BaseModel):
    model_config = ConfigDict(populate_by_name=True, from_attributes=True)

    id: str
    user_id: str | None = Field(default=None, alias="userId")
    name: str
    type: TransactionType


class TransactionCreate(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    type: TransactionType
    amount: Decimal = Field(gt=0)
    category_id: str = Field(alias="categoryId")
    description: str | None = None


class TransactionUpdate(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    amount: Decimal | None = Field(default=None, gt=0)
    category_id: str | None = Field(default=None, alias="categoryId")
    description: str | None = None


class TransactionRead(BaseModel):
    model_config = ConfigDict(populate_by_name=True, from_attributes=True)

    id: str
    user_id: str = Field(alias="userId")
    type: TransactionType
    amount: Decimal
    category_id: str = Field(alias="categoryId")
    description: str | None = None
    created_at: datetime = Field(alias="createdAt")


class SweepReport(BaseModel):
    """Outcome of one scheduler sweep for a reminder type."""

    reminder_type: str
    checked: int = 0
    triggered: int = 0
    failed: int = 0
    skipped: bool = False


__all__ = [
    "AlertRead",
    "CategoryCreate",
    "CategoryRead",
    "ReminderCreate",
    "ReminderRead",
    "ReminderUpdate",
    "SweepReport",
    "TransactionCreate",
    "TransactionRead",
    "TransactionUpdate",
]
