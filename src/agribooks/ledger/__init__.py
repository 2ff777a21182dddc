"""Bookkeeping records the reminder engine reads: users, categories, transactions."""
from agribooks.ledger.store import LedgerStore
from agribooks.ledger.transactions import TransactionService

__all__ = ["LedgerStore", "TransactionService"]
