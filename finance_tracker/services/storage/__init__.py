"""
Storage Services Package

Provides the abstract interface and concrete implementations for
transaction storage. The JSON file backend is the default.
"""

from finance_tracker.services.storage.interface import (
    CorruptStorageError,
    NotFoundError,
    StorageError,
    TransactionStorageInterface,
)
from finance_tracker.services.storage.json_file import JsonFileTransactionStorage
from finance_tracker.services.storage.memory import InMemoryTransactionStorage

__all__ = [
    # Interfaces
    "TransactionStorageInterface",
    # Exceptions
    "CorruptStorageError",
    "NotFoundError",
    "StorageError",
    # Implementations
    "InMemoryTransactionStorage",
    "JsonFileTransactionStorage",
]
