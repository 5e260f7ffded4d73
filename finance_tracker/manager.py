"""
Transaction Manager

This module ties storage, validation and querying together and
defines every operation the CLI exposes:
1. Add (raw input → validate → append → persist)
2. Read (list, filter, summarize, lookup by id)

DESIGN DECISION: The manager owns the in-process transaction list.
It is loaded lazily on first use and written back in full after each
successful add. A rejected entry never reaches storage.
"""

from decimal import Decimal
from typing import Optional, Union

from finance_tracker.audit import AuditLogger
from finance_tracker.config import get_settings
from finance_tracker.models.transaction import (
    FilterResult,
    Summary,
    Transaction,
    TransactionFilter,
    TransactionType,
)
from finance_tracker.queries import QueryExecutor
from finance_tracker.services.storage import (
    JsonFileTransactionStorage,
    NotFoundError,
    StorageError,
    TransactionStorageInterface,
)
from finance_tracker.validation import TransactionValidator, ValidationError


class TransactionManager:
    """
    Validates, records and queries income and expense transactions.

    Usage:
        manager = TransactionManager(JsonFileTransactionStorage("data.json"))
        manager.add_income("1000", "Salary", "2024-01-01")
        manager.summarize().balance
    """

    def __init__(
        self,
        storage: TransactionStorageInterface,
        validator: Optional[TransactionValidator] = None,
        audit_logger: Optional[AuditLogger] = None,
    ):
        self._storage = storage
        self._validator = validator or TransactionValidator()
        self._audit_logger = audit_logger or AuditLogger()
        self._transactions: Optional[list[Transaction]] = None

    @property
    def storage(self) -> TransactionStorageInterface:
        return self._storage

    @property
    def audit_logger(self) -> AuditLogger:
        return self._audit_logger

    def _load(self) -> list[Transaction]:
        """Load transactions from storage on first access."""
        if self._transactions is None:
            try:
                self._transactions = self._storage.load()
            except StorageError as e:
                self._audit_logger.log_storage_error(self._storage.location, str(e))
                raise
            self._audit_logger.log_storage_loaded(
                self._storage.location, len(self._transactions)
            )
        return self._transactions

    def _next_id(self) -> int:
        transactions = self._load()
        return max((t.id for t in transactions), default=0) + 1

    def _add(
        self,
        transaction_type: TransactionType,
        amount: Union[str, int, float, Decimal, None],
        description: Optional[str],
        date_text: Optional[str],
        category: Optional[str] = None,
    ) -> Transaction:
        """Validate, append and persist one transaction."""
        result = self._validator.validate(
            transaction_type=transaction_type,
            amount=amount,
            description=description,
            date_text=date_text,
            category=category,
        )

        if not result.is_valid:
            self._audit_logger.log_validation_failed(
                transaction_type.value,
                [issue.model_dump() for issue in result.errors],
            )
            raise ValidationError(result)

        if result.warnings:
            self._audit_logger.log_validation_warning(
                transaction_type.value, result.warnings
            )

        transactions = self._load()
        transaction = Transaction(
            id=self._next_id(),
            type=transaction_type,
            amount=result.amount,
            category=category.strip() if category and category.strip() else None,
            description=description,
            date=result.parsed_date,
        )

        updated = transactions + [transaction]
        try:
            self._storage.save(updated)
        except StorageError as e:
            self._audit_logger.log_storage_error(self._storage.location, str(e))
            raise
        self._transactions = updated

        self._audit_logger.log_storage_saved(self._storage.location, len(updated))
        self._audit_logger.log_transaction_added(
            transaction.id, transaction_type.value, str(transaction.amount)
        )
        return transaction

    def add_income(
        self,
        amount: Union[str, int, float, Decimal, None],
        description: Optional[str],
        date: Optional[str],
    ) -> Transaction:
        """
        Record an income entry.

        Raises:
            ValidationError: If the amount, description or date is invalid
            StorageError: If the data file can't be read or written
        """
        return self._add(TransactionType.INCOME, amount, description, date)

    def add_expense(
        self,
        amount: Union[str, int, float, Decimal, None],
        category: Optional[str],
        description: Optional[str],
        date: Optional[str],
    ) -> Transaction:
        """
        Record an expense entry. Same rules as add_income, plus a category.

        Raises:
            ValidationError: If any field is invalid or the category is missing
            StorageError: If the data file can't be read or written
        """
        return self._add(TransactionType.EXPENSE, amount, description, date, category)

    def list_transactions(self) -> list[Transaction]:
        """Every transaction in insertion order."""
        return list(self._load())

    def filter_transactions(
        self,
        query: Optional[TransactionFilter] = None,
        **predicates,
    ) -> FilterResult:
        """
        Transactions matching every given predicate.

        Accepts either a TransactionFilter or keyword predicates
        (category=, month=, year=). No predicates means no constraint.
        """
        if query is None:
            query = TransactionFilter(**predicates)
        elif predicates:
            raise TypeError("Pass either a TransactionFilter or keyword predicates, not both")

        result = QueryExecutor(self._load()).filter(query)
        self._audit_logger.log_query_executed(query.describe(), result.result_count)
        return result

    def summarize(self) -> Summary:
        """Total income, total expense and balance over every transaction."""
        return QueryExecutor(self._load()).summarize()

    def get_transaction(self, transaction_id: int) -> Transaction:
        """
        Look up one transaction.

        Raises:
            NotFoundError: If no transaction has this id
        """
        for transaction in self._load():
            if transaction.id == transaction_id:
                return transaction
        raise NotFoundError(f"Transaction not found: {transaction_id}")

    def categories(self) -> list[str]:
        """Categories in use, in first-seen order."""
        return QueryExecutor(self._load()).categories()


def create_manager(
    data_file: Optional[str] = None,
    audit_logger: Optional[AuditLogger] = None,
) -> TransactionManager:
    """
    Build a TransactionManager backed by the JSON data file.

    Uses the configured data file unless one is given.
    """
    path = data_file or get_settings().storage.data_file
    return TransactionManager(
        storage=JsonFileTransactionStorage(path),
        audit_logger=audit_logger,
    )
