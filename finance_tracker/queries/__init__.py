"""Query execution package."""

from finance_tracker.queries.executor import QueryExecutor, expenses_by_category, summarize

__all__ = ["QueryExecutor", "expenses_by_category", "summarize"]
