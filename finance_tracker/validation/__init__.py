"""Input validation package."""

from finance_tracker.validation.validator import (
    TransactionValidator,
    ValidationError,
    format_validation_errors,
    parse_amount,
    parse_date,
)

__all__ = [
    "TransactionValidator",
    "ValidationError",
    "format_validation_errors",
    "parse_amount",
    "parse_date",
]
