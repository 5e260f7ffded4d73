"""Plain-text rendering of transactions, summaries and reports."""

from decimal import Decimal
from typing import Iterable, Optional

from finance_tracker.config import get_settings
from finance_tracker.models.transaction import MonthlyReport, Summary, Transaction


NO_TRANSACTIONS = "No transactions found."


def format_amount(amount: Decimal, currency_symbol: Optional[str] = None) -> str:
    """Format an amount with two decimals and thousands separators."""
    if currency_symbol is None:
        currency_symbol = get_settings().app.currency_symbol
    sign = "-" if amount < 0 else ""
    return f"{sign}{currency_symbol}{abs(amount):,.2f}"


def format_transaction(transaction: Transaction, currency_symbol: Optional[str] = None) -> str:
    """One line per transaction: id, date, type, amount, category, description."""
    return (
        f"#{transaction.id:<4} {transaction.date.isoformat()}  "
        f"{transaction.type.value:<7}  "
        f"{format_amount(transaction.amount, currency_symbol):>12}  "
        f"{(transaction.category or '-'):<15}  "
        f"{transaction.description}"
    )


def format_transactions(
    transactions: Iterable[Transaction],
    currency_symbol: Optional[str] = None,
) -> str:
    lines = [format_transaction(t, currency_symbol) for t in transactions]
    return "\n".join(lines) if lines else NO_TRANSACTIONS


def format_summary(summary: Summary, currency_symbol: Optional[str] = None) -> str:
    return "\n".join([
        f"Total Income:  {format_amount(summary.total_income, currency_symbol)}",
        f"Total Expense: {format_amount(summary.total_expense, currency_symbol)}",
        f"Balance:       {format_amount(summary.balance, currency_symbol)}",
    ])


def render_report(report: MonthlyReport, currency_symbol: Optional[str] = None) -> str:
    """
    Render a monthly report.

    Layout:
        header with the period
        income / expense / balance
        expenses broken down by category (if any)
        the period's transactions, or a not-found line
    """
    title = f"Financial Report for {report.period_label}"
    lines = [title, "=" * len(title)]
    lines.append(format_summary(report.summary, currency_symbol))

    if report.expenses_by_category:
        lines.append("")
        lines.append("Expenses by Category:")
        for category, total in report.expenses_by_category.items():
            lines.append(f"  {category:<15} {format_amount(total, currency_symbol):>12}")

    lines.append("")
    lines.append(f"Transactions ({report.summary.transaction_count}):")
    lines.append(format_transactions(report.transactions, currency_symbol))

    return "\n".join(lines)
