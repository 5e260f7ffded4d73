"""
JSON File Storage Implementation

DESIGN DECISION: A single JSON file is the storage backend because:
1. Users can read and back up their data with any text editor
2. No database setup required
3. The whole list fits comfortably in memory for personal use

TRADEOFFS:
- Every save rewrites the whole file
- No locking (one user, one process at a time)

Writes go to a temporary file beside the target which is then renamed
over it, so an interrupted save never leaves a half-written file.
"""

import json
import os
import tempfile
from decimal import Decimal
from pathlib import Path
from typing import Union

from pydantic import ValidationError as PydanticValidationError

from finance_tracker.models.transaction import Transaction
from finance_tracker.services.storage.interface import (
    CorruptStorageError,
    StorageError,
    TransactionStorageInterface,
)


# Field order in each persisted record
TRANSACTION_FIELDS = [
    "id",
    "type",
    "amount",
    "category",
    "description",
    "date",
]


class JsonFileTransactionStorage(TransactionStorageInterface):
    """
    JSON file implementation of transaction storage.

    The file holds a list of objects, one per transaction.
    Amounts are written as strings so no precision is lost;
    plain JSON numbers are accepted when reading.
    """

    def __init__(self, path: Union[str, Path]):
        self._path = Path(path)

    @property
    def location(self) -> str:
        return str(self._path)

    def _record_to_transaction(self, index: int, record: object) -> Transaction:
        """Convert one stored record to a Transaction."""
        if not isinstance(record, dict):
            raise CorruptStorageError(
                f"{self._path}: record #{index + 1} is not an object"
            )
        try:
            return Transaction.model_validate(record)
        except PydanticValidationError as e:
            raise CorruptStorageError(
                f"{self._path}: record #{index + 1} is invalid: {e}"
            ) from e

    def _transaction_to_record(self, transaction: Transaction) -> dict:
        """Convert a Transaction to a stored record with stable key order."""
        data = transaction.to_record()
        return {name: data[name] for name in TRANSACTION_FIELDS}

    def load(self) -> list[Transaction]:
        """Load all transactions, or an empty list if the file doesn't exist."""
        if not self._path.exists():
            return []

        try:
            raw = self._path.read_text(encoding="utf-8")
        except OSError as e:
            raise StorageError(f"Failed to read {self._path}: {e}") from e

        if not raw.strip():
            return []

        try:
            data = json.loads(raw, parse_float=Decimal)
        except json.JSONDecodeError as e:
            raise CorruptStorageError(f"{self._path} is not valid JSON: {e}") from e

        if not isinstance(data, list):
            raise CorruptStorageError(
                f"{self._path} must contain a list of transactions"
            )

        transactions = [
            self._record_to_transaction(index, record)
            for index, record in enumerate(data)
        ]

        seen_ids = set()
        for transaction in transactions:
            if transaction.id in seen_ids:
                raise CorruptStorageError(
                    f"{self._path}: duplicate transaction id {transaction.id}"
                )
            seen_ids.add(transaction.id)

        return transactions

    def save(self, transactions: list[Transaction]) -> None:
        """Rewrite the whole file with the given transactions."""
        records = [self._transaction_to_record(t) for t in transactions]
        payload = json.dumps(records, indent=2, ensure_ascii=False) + "\n"

        tmp_name = None
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                prefix=f".{self._path.name}.",
                suffix=".tmp",
                dir=self._path.parent,
            )
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                handle.write(payload)
            os.replace(tmp_name, self._path)
        except OSError as e:
            if tmp_name is not None and os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise StorageError(f"Failed to write {self._path}: {e}") from e
