"""Reporting package."""

from finance_tracker.reports.formatting import (
    NO_TRANSACTIONS,
    format_amount,
    format_summary,
    format_transaction,
    format_transactions,
    render_report,
)
from finance_tracker.reports.generator import ReportGenerator

__all__ = [
    "NO_TRANSACTIONS",
    "ReportGenerator",
    "format_amount",
    "format_summary",
    "format_transaction",
    "format_transactions",
    "render_report",
]
