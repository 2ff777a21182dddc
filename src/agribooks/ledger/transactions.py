"""Transaction writes and the threshold-reminder hook that follows them."""
import logging

from agribooks.core.exceptions import InvalidArgument
from agribooks.core.utils import to_money
from agribooks.db.models import Transaction, TransactionType
from agribooks.ledger.store import LedgerStore
from agribooks.reminders.notifications import NotificationService
from agribooks.schemas import TransactionCreate, TransactionUpdate

logger = logging.getLogger(__name__)


class TransactionService:
    """Creates and updates transactions.

    After an EXPENSE is committed, threshold reminders for its category are
    checked on the notification service's worker pool. The write never waits
    for, or fails because of, that check.
    """

    def __init__(self, ledger: LedgerStore, notifications: NotificationService) -> None:
        self._ledger = ledger
        self._notifications = notifications

    def create(self, user_id: str, data: TransactionCreate) -> Transaction:
        logger.info(
            "Creating transaction",
            extra={"user_id": user_id, "transaction_type": data.type.value, "amount": data.amount},
        )
        category = self._ledger.get_category(data.category_id, user_id)
        if category.type != data.type:
            raise InvalidArgument("Category type does not match transaction type")

        transaction = self._ledger.save_transaction(
            Transaction(
                user_id=user_id,
                type=data.type,
                amount=to_money(data.amount),
                category_id=data.category_id,
                description=data.description,
            )
        )
        logger.info(
            "Transaction created",
            extra={"transaction_id": transaction.id, "user_id": user_id},
        )
        self._after_write(transaction)
        return transaction

    def update(self, transaction_id: str, user_id: str, data: TransactionUpdate) -> Transaction:
        transaction = self._ledger.get_transaction(transaction_id, user_id)
        changes = data.model_dump(exclude_unset=True)

        if changes.get("category_id") is not None:
            category = self._ledger.get_category(changes["category_id"], user_id)
            if category.type != transaction.type:
                raise InvalidArgument("Category type does not match transaction type")
        for field in ("amount", "category_id"):
            if field in changes and changes[field] is None:
                raise InvalidArgument(f"{field} cannot be null")
        if "amount" in changes:
            changes["amount"] = to_money(changes["amount"])

        for field, value in changes.items():
            setattr(transaction, field, value)
        saved = self._ledger.save_transaction(transaction)
        logger.info("Transaction updated", extra={"transaction_id": transaction_id, "user_id": user_id})
        self._after_write(saved)
        return saved

    def _after_write(self, transaction: Transaction) -> None:
        if transaction.type != TransactionType.EXPENSE:
            return
        self._notifications.dispatch_threshold_check(
            transaction.user_id, transaction.category_id, transaction.amount
        )
