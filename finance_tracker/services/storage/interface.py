"""
Abstract Storage Interface

DESIGN DECISION: We define an abstract interface for storage operations.
This allows us to:
1. Swap the JSON file for a real database later
2. Use in-memory storage for testing
3. Keep business logic decoupled from storage implementation

The interface is intentionally tiny: the whole transaction list is
read at once and written back at once.
"""

from abc import ABC, abstractmethod

from finance_tracker.models.transaction import Transaction


class TransactionStorageInterface(ABC):
    """
    Abstract interface for transaction storage.

    Any storage implementation (JSON file, SQLite, etc.)
    must implement these methods.
    """

    @property
    @abstractmethod
    def location(self) -> str:
        """Human-readable name of where the data lives (used in logs)."""
        pass

    @abstractmethod
    def load(self) -> list[Transaction]:
        """
        Load every persisted transaction.

        Returns:
            Transactions in insertion order, or an empty list
            if nothing has been stored yet

        Raises:
            StorageError: If the stored data can't be read
            CorruptStorageError: If the stored data can't be parsed
        """
        pass

    @abstractmethod
    def save(self, transactions: list[Transaction]) -> None:
        """
        Replace the persisted data with the given full list.

        Args:
            transactions: Every transaction, in insertion order

        Raises:
            StorageError: If the write fails
        """
        pass


class StorageError(Exception):
    """Base exception for storage operations."""
    pass


class CorruptStorageError(StorageError):
    """Persisted data exists but cannot be parsed."""
    pass


class NotFoundError(LookupError):
    """Requested transaction does not exist."""
    pass
