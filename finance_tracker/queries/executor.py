"""
Query Execution Engine

DESIGN DECISION: Filtering and aggregation are pure functions of the
transaction list. They never touch storage, which keeps them trivially
testable and lets the manager and the report generator share them.

GUARANTEES:
- Input order is preserved
- Only returns real records, never estimates
- An empty match is a normal result, not an error
"""

from decimal import Decimal
from typing import Iterable

from finance_tracker.models.transaction import (
    FilterResult,
    Summary,
    Transaction,
    TransactionFilter,
)


class QueryExecutor:
    """Executes filters and aggregations over a list of transactions."""

    def __init__(self, transactions: Iterable[Transaction]):
        self._transactions = list(transactions)

    def filter(self, query: TransactionFilter) -> FilterResult:
        """Return the subsequence matching every predicate in the query."""
        if query.is_empty:
            return FilterResult(filter=query, transactions=list(self._transactions))
        matched = [t for t in self._transactions if query.matches(t)]
        return FilterResult(filter=query, transactions=matched)

    def summarize(self) -> Summary:
        return summarize(self._transactions)

    def expenses_by_category(self) -> dict[str, Decimal]:
        return expenses_by_category(self._transactions)

    def categories(self) -> list[str]:
        """Distinct categories in first-seen order."""
        seen = {}
        for transaction in self._transactions:
            if transaction.category:
                seen.setdefault(transaction.category, None)
        return list(seen)


def summarize(transactions: Iterable[Transaction]) -> Summary:
    """Total income, total expense and count over the given transactions."""
    total_income = Decimal("0")
    total_expense = Decimal("0")
    count = 0

    for transaction in transactions:
        count += 1
        if transaction.is_income:
            total_income += transaction.amount
        else:
            total_expense += transaction.amount

    return Summary(
        total_income=total_income,
        total_expense=total_expense,
        transaction_count=count,
    )


def expenses_by_category(transactions: Iterable[Transaction]) -> dict[str, Decimal]:
    """
    Sum expenses per category.

    Largest total first; ties keep first-seen order.
    """
    groups: dict[str, Decimal] = {}

    for transaction in transactions:
        if not transaction.is_expense:
            continue
        key = transaction.category or "Uncategorized"
        groups[key] = groups.get(key, Decimal("0")) + transaction.amount

    return dict(sorted(groups.items(), key=lambda item: item[1], reverse=True))
