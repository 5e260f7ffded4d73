"""Services package."""

from finance_tracker.services.storage import (
    CorruptStorageError,
    InMemoryTransactionStorage,
    JsonFileTransactionStorage,
    NotFoundError,
    StorageError,
    TransactionStorageInterface,
)

__all__ = [
    "CorruptStorageError",
    "InMemoryTransactionStorage",
    "JsonFileTransactionStorage",
    "NotFoundError",
    "StorageError",
    "TransactionStorageInterface",
]
