"""
Command-Line Frontend for Personal Finance Tracker

This is the interface users interact with daily:

    finance-tracker add-income --amount 1000 --description Salary --date 2024-01-01
    finance-tracker add-expense --amount 200 --category Food --description Lunch --date 2024-01-02
    finance-tracker summary
    finance-tracker report --month 01 --year 2024

DESIGN PRINCIPLES:
1. One invocation, one operation
2. Clear error messages, never a traceback for bad input
3. Command output on stdout, problems on stderr
4. Nothing is saved unless validation passes

Exit codes: 0 on success, 1 for rejected input or storage problems,
2 for usage errors (missing command or required flags).
"""

import argparse
import sys
from typing import Callable, Optional

from pydantic import ValidationError as PydanticValidationError

from finance_tracker import __version__
from finance_tracker.audit import AuditLogger, configure_logging
from finance_tracker.config import get_settings, validate_all_settings
from finance_tracker.manager import TransactionManager, create_manager
from finance_tracker.models.commands import (
    AddExpenseOptions,
    AddIncomeOptions,
    FilterOptions,
    ReportOptions,
    ShowOptions,
)
from finance_tracker.reports import (
    NO_TRANSACTIONS,
    ReportGenerator,
    format_summary,
    format_transaction,
    format_transactions,
)
from finance_tracker.services.storage import NotFoundError, StorageError
from finance_tracker.validation import ValidationError, format_validation_errors


EXIT_OK = 0
EXIT_ERROR = 1

MISSING_COMMAND = "You need to specify a command to run the application."


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser with one subcommand per operation."""
    parser = argparse.ArgumentParser(
        prog="finance-tracker",
        description="Track income and expenses, and report on them.",
    )
    parser.add_argument(
        "--data-file",
        help="JSON file holding the transactions (default: $FINANCE_DATA_FILE or transactions.json)",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )

    subparsers = parser.add_subparsers(dest="command", metavar="<command>")

    # Add Income Command
    add_income = subparsers.add_parser("add-income", help="Add a new income entry")
    add_income.add_argument("--amount", required=True, help="Amount of income")
    add_income.add_argument("--description", required=True, help="Description of income")
    add_income.add_argument("--date", required=True, help="Date of income (YYYY-MM-DD)")
    add_income.set_defaults(handler=run_add_income)

    # Add Expense Command
    add_expense = subparsers.add_parser("add-expense", help="Add a new expense entry")
    add_expense.add_argument("--amount", required=True, help="Amount of expense")
    add_expense.add_argument("--category", required=True, help="Category of expense")
    add_expense.add_argument("--description", required=True, help="Description of expense")
    add_expense.add_argument("--date", required=True, help="Date of expense (YYYY-MM-DD)")
    add_expense.set_defaults(handler=run_add_expense)

    # List All Transactions Command
    list_cmd = subparsers.add_parser("list", help="List all transactions")
    list_cmd.set_defaults(handler=run_list)

    # Summary Command
    summary = subparsers.add_parser("summary", help="Show income, expenses, and balance summary")
    summary.set_defaults(handler=run_summary)

    # Filter Transactions Command
    filter_cmd = subparsers.add_parser("filter", help="Filter transactions by category or date")
    filter_cmd.add_argument("--category", help="Category to filter by")
    filter_cmd.add_argument("--month", help="Month to filter by (MM)")
    filter_cmd.add_argument("--year", help="Year to filter by (YYYY)")
    filter_cmd.set_defaults(handler=run_filter)

    # Generate Report Command
    report = subparsers.add_parser("report", help="Generate a financial report")
    report.add_argument("--month", required=True, help="Month for report (MM)")
    report.add_argument("--year", required=True, help="Year for report (YYYY)")
    report.set_defaults(handler=run_report)

    # Show One Transaction Command
    show = subparsers.add_parser("show", help="Show a single transaction by ID")
    show.add_argument("--id", required=True, type=int, help="Transaction ID")
    show.set_defaults(handler=run_show)

    return parser


# =============================================================================
# COMMAND HANDLERS
# =============================================================================

def run_add_income(manager: TransactionManager, args: argparse.Namespace) -> int:
    options = AddIncomeOptions(amount=args.amount, description=args.description, date=args.date)
    transaction = manager.add_income(options.amount, options.description, options.date)
    print(f"Income added successfully (ID: {transaction.id}).")
    return EXIT_OK


def run_add_expense(manager: TransactionManager, args: argparse.Namespace) -> int:
    options = AddExpenseOptions(
        amount=args.amount,
        category=args.category,
        description=args.description,
        date=args.date,
    )
    transaction = manager.add_expense(
        options.amount, options.category, options.description, options.date
    )
    print(f"Expense added successfully (ID: {transaction.id}).")
    return EXIT_OK


def run_list(manager: TransactionManager, args: argparse.Namespace) -> int:
    print(format_transactions(manager.list_transactions()))
    return EXIT_OK


def run_summary(manager: TransactionManager, args: argparse.Namespace) -> int:
    print(format_summary(manager.summarize()))
    return EXIT_OK


def run_filter(manager: TransactionManager, args: argparse.Namespace) -> int:
    options = FilterOptions(category=args.category, month=args.month, year=args.year)
    result = manager.filter_transactions(options.to_filter())
    if not result.data_found:
        print(NO_TRANSACTIONS)
    else:
        print(format_transactions(result.transactions))
    return EXIT_OK


def run_report(manager: TransactionManager, args: argparse.Namespace) -> int:
    options = ReportOptions(month=args.month, year=args.year)
    generator = ReportGenerator(manager)
    print(generator.generate_report(options.month, options.year))
    return EXIT_OK


def run_show(manager: TransactionManager, args: argparse.Namespace) -> int:
    options = ShowOptions(id=args.id)
    print(format_transaction(manager.get_transaction(options.id)))
    return EXIT_OK


# =============================================================================
# ENTRY POINT
# =============================================================================

def _describe_pydantic_error(error: PydanticValidationError) -> str:
    """Flatten a pydantic error into one line per bad option."""
    lines = []
    for detail in error.errors():
        field = ".".join(str(part) for part in detail.get("loc", ())) or "input"
        lines.append(f"  - {field}: {detail.get('msg')}")
    return "Invalid options:\n" + "\n".join(lines)


def _describe_settings_errors(status: dict) -> Optional[str]:
    """Collect the load errors reported by validate_all_settings, if any."""
    errors = [
        f"  - {key[: -len('_error')]}: {value}"
        for key, value in status.items()
        if key.endswith("_error")
    ]
    if not errors:
        return None
    return "Invalid configuration:\n" + "\n".join(errors)


def main(argv: Optional[list[str]] = None) -> int:
    """Parse arguments, run one command and return the exit code."""
    parser = build_parser()
    args = parser.parse_args(argv)

    handler: Optional[Callable[[TransactionManager, argparse.Namespace], int]] = getattr(
        args, "handler", None
    )
    if handler is None:
        parser.error(MISSING_COMMAND)

    problems = _describe_settings_errors(validate_all_settings())
    if problems:
        print(problems, file=sys.stderr)
        return EXIT_ERROR

    settings = get_settings().app
    configure_logging(settings.log_level)
    audit_logger = AuditLogger()

    manager = create_manager(data_file=args.data_file, audit_logger=audit_logger)

    try:
        return handler(manager, args)
    except ValidationError as e:
        print(format_validation_errors(e.result), file=sys.stderr)
    except PydanticValidationError as e:
        print(_describe_pydantic_error(e), file=sys.stderr)
    except NotFoundError as e:
        print(f"Error: {e}", file=sys.stderr)
    except StorageError as e:
        print(f"Storage error: {e}", file=sys.stderr)
    return EXIT_ERROR


if __name__ == "__main__":
    sys.exit(main())
