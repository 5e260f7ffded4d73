"""
Report Generator

Builds a read-only monthly report from the Transaction Manager.
Nothing is persisted: a report is derived from the stored
transactions every time it is requested.
"""

from typing import Optional, Union

from finance_tracker.audit import AuditLogger
from finance_tracker.manager import TransactionManager
from finance_tracker.models.transaction import MonthlyReport, TransactionFilter
from finance_tracker.queries import expenses_by_category, summarize
from finance_tracker.reports.formatting import render_report


class ReportGenerator:
    """Produces monthly income/expense reports."""

    def __init__(
        self,
        manager: TransactionManager,
        audit_logger: Optional[AuditLogger] = None,
    ):
        self._manager = manager
        self._audit_logger = audit_logger or manager.audit_logger

    def build_report(
        self,
        month: Union[int, str],
        year: Union[int, str],
    ) -> MonthlyReport:
        """
        Collect the totals for one month.

        Month and year accept the same forms as the filter
        ("05", "5" or 5). An invalid month or year raises a
        pydantic ValidationError (a ValueError).
        """
        query = TransactionFilter(month=month, year=year)
        transactions = self._manager.filter_transactions(query).transactions

        report = MonthlyReport(
            month=query.month,
            year=query.year,
            summary=summarize(transactions),
            expenses_by_category=expenses_by_category(transactions),
            transactions=transactions,
        )

        self._audit_logger.log_report_generated(
            report.month, report.year, report.summary.transaction_count
        )
        return report

    def generate_report(
        self,
        month: Union[int, str],
        year: Union[int, str],
        currency_symbol: Optional[str] = None,
    ) -> str:
        """Build the report for one month and render it as text."""
        return render_report(self.build_report(month, year), currency_symbol)
