"""Access to users, categories and transactions.

These records belong to the bookkeeping side of the system; the reminder
engine only reads them.
"""
from datetime import datetime

from sqlalchemy.engine import Engine
from sqlmodel import col, or_, select

from agribooks.core.exceptions import NotFoundError
from agribooks.db.models import Category, Transaction, User
from agribooks.reminders.store import storage_session


class LedgerStore:
    """User, category and transaction persistence."""

    def __init__(self, engine: Engine) -> None:
        self._engine = engine

    # ---- Users ----
    def get_user(self, user_id: str) -> User:
        with storage_session(self._engine) as session:
            user = session.get(User, user_id)
        if user is None:
            raise NotFoundError("User not found")
        return user

    def add_user(self, user: User) -> User:
        with storage_session(self._engine) as session:
            session.add(user)
            session.flush()
            session.refresh(user)
            return user

    # ---- Categories ----
    def get_category(self, category_id: str, user_id: str) -> Category:
        """A system category or one owned by ``user_id``; NotFoundError otherwise."""
        with storage_session(self._engine) as session:
            category = session.get(Category, category_id)
        if category is None or category.user_id not in (None, user_id):
            raise NotFoundError("Category not found")
        return category

    def list_categories(self, user_id: str) -> list[Category]:
        """System categories plus the user's own, by name."""
        with storage_session(self._engine) as session:
            statement = (
                select(Category)
                .where(or_(col(Category.user_id).is_(None), Category.user_id == user_id))
                .order_by(col(Category.name))
            )
            return list(session.exec(statement).all())

    def add_category(self, category: Category) -> Category:
        with storage_session(self._engine) as session:
            session.add(category)
            session.flush()
            session.refresh(category)
            return category

    # ---- Transactions ----
    def get_transaction(self, transaction_id: str, user_id: str) -> Transaction:
        with storage_session(self._engine) as session:
            transaction = session.exec(
                select(Transaction).where(
                    Transaction.id == transaction_id, Transaction.user_id == user_id
                )
            ).first()
        if transaction is None:
            raise NotFoundError("Transaction not found")
        return transaction

    def save_transaction(self, transaction: Transaction) -> Transaction:
        transaction.updated_at = datetime.now()
        with storage_session(self._engine) as session:
            merged = session.merge(transaction)
            session.flush()
            session.refresh(merged)
            return merged
