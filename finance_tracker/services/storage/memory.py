"""In-memory transaction storage, used by tests and dry runs."""

from typing import Optional

from finance_tracker.models.transaction import Transaction
from finance_tracker.services.storage.interface import TransactionStorageInterface


class InMemoryTransactionStorage(TransactionStorageInterface):
    """List-backed storage. Nothing survives the process."""

    def __init__(self, transactions: Optional[list[Transaction]] = None):
        self._transactions = list(transactions or [])
        self.save_count = 0

    @property
    def location(self) -> str:
        return "memory"

    def load(self) -> list[Transaction]:
        return list(self._transactions)

    def save(self, transactions: list[Transaction]) -> None:
        self._transactions = list(transactions)
        self.save_count += 1
