"""
Data Models Package

This package contains all Pydantic models used in the Personal Finance Tracker.
All data flowing through the system must conform to these schemas.
"""

from finance_tracker.models.transaction import (
    FilterResult,
    MonthlyReport,
    Summary,
    Transaction,
    TransactionFilter,
    TransactionType,
    ValidationIssue,
    ValidationResult,
)
from finance_tracker.models.audit import (
    AuditEvent,
    AuditEventBuilder,
    AuditEventType,
    AuditSeverity,
)
from finance_tracker.models.commands import (
    AddExpenseOptions,
    AddIncomeOptions,
    FilterOptions,
    ReportOptions,
    ShowOptions,
)

__all__ = [
    # Transaction models
    "FilterResult",
    "MonthlyReport",
    "Summary",
    "Transaction",
    "TransactionFilter",
    "TransactionType",
    "ValidationIssue",
    "ValidationResult",
    # Audit models
    "AuditEvent",
    "AuditEventBuilder",
    "AuditEventType",
    "AuditSeverity",
    # Command options
    "AddExpenseOptions",
    "AddIncomeOptions",
    "FilterOptions",
    "ReportOptions",
    "ShowOptions",
]
