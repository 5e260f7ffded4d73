"""
Two-Stage Validation Pipeline

DESIGN DECISION: Validation happens in two distinct stages:

STAGE 1 - SCHEMA VALIDATION:
- Required field presence
- Amount is a finite, positive number with at most two decimals
- Date is a real calendar date in YYYY-MM-DD form

STAGE 2 - SEMANTIC VALIDATION:
- Future date detection
- Absurd amount detection
- Description length

Stage 2 only runs once stage 1 passes, since it needs the parsed
amount and date.

IMPORTANT: Validation NEVER silently fixes issues.
Errors reject the entry; warnings are reported and logged.
"""

import re
from datetime import date, datetime, timedelta
from decimal import Decimal, InvalidOperation
from typing import Optional, Union

from finance_tracker.config import get_settings
from finance_tracker.models.transaction import (
    TransactionType,
    ValidationIssue,
    ValidationResult,
)


DATE_FORMAT = "%Y-%m-%d"
MAX_CATEGORY_LENGTH = 100
CENTS = Decimal("0.01")
AMOUNT_PATTERN = re.compile(r"[+-]?([0-9]+(\.[0-9]*)?|\.[0-9]+)")

AmountInput = Union[str, int, float, Decimal, None]


class ValidationError(ValueError):
    """
    Raised when user input is rejected.

    Carries the full ValidationResult so callers can show every issue.
    """

    def __init__(self, result: ValidationResult):
        self.result = result
        messages = [issue.message for issue in result.errors]
        super().__init__("; ".join(messages) or "Validation failed")


def parse_amount(raw: AmountInput) -> Optional[Decimal]:
    """
    Parse a user-supplied amount.

    Only plain decimal text is accepted (an optional sign, digits and
    an optional fraction). Exponents, underscores, NaN and infinity
    return None. Floats go through str() so 0.1 stays 0.1.
    """
    if raw is None or isinstance(raw, bool):
        return None
    text = str(raw).strip()
    if not AMOUNT_PATTERN.fullmatch(text):
        return None
    return Decimal(text)


def decimal_places(amount: Decimal) -> int:
    """Count fractional digits, ignoring trailing zeros."""
    _, digits, exponent = amount.as_tuple()
    places = max(-exponent, 0)
    index = len(digits) - 1
    while places > 0 and index >= 0 and digits[index] == 0:
        places -= 1
        index -= 1
    return places


def parse_date(raw: Optional[str]) -> Optional[date]:
    """Parse a strict YYYY-MM-DD date. Returns None if malformed."""
    if raw is None:
        return None
    text = str(raw).strip()
    # strptime accepts single-digit months and days; the stored format doesn't
    if len(text) != 10:
        return None
    try:
        return datetime.strptime(text, DATE_FORMAT).date()
    except ValueError:
        return None


class TransactionValidator:
    """
    Validates raw transaction input through a two-stage pipeline.

    Stage 1: Schema validation
    Stage 2: Semantic validation
    """

    def __init__(self, today: Optional[date] = None):
        """
        Initialize validator.

        Args:
            today: Reference date for the future-date check.
                   Defaults to the real current date.
        """
        self._settings = get_settings().app
        self._today = today

    def _validate_schema(
        self,
        transaction_type: Union[TransactionType, str],
        amount: AmountInput,
        description: Optional[str],
        date_text: Optional[str],
        category: Optional[str],
    ) -> tuple[bool, list[ValidationIssue], Optional[Decimal], Optional[date]]:
        """
        Stage 1: Schema validation.

        Returns: (is_valid, list_of_issues, parsed_amount, parsed_date)
        """
        issues = []

        # Type
        try:
            transaction_type = TransactionType(transaction_type)
        except ValueError:
            issues.append(ValidationIssue(
                field="type",
                issue_type="invalid_value",
                message=f"Unknown transaction type: {transaction_type}",
                severity="error",
                suggested_fix="Use 'income' or 'expense'",
            ))
            transaction_type = None

        # Amount
        parsed_amount = None
        if amount is None or (isinstance(amount, str) and not amount.strip()):
            issues.append(ValidationIssue(
                field="amount",
                issue_type="missing",
                message="Amount is required",
                severity="error",
            ))
        else:
            parsed_amount = parse_amount(amount)
            if parsed_amount is None:
                issues.append(ValidationIssue(
                    field="amount",
                    issue_type="invalid_format",
                    message=f"Amount must be a number, got {amount!r}",
                    severity="error",
                    suggested_fix="Enter a plain number such as 12.50",
                ))
            elif parsed_amount <= 0:
                issues.append(ValidationIssue(
                    field="amount",
                    issue_type="invalid_value",
                    message="Amount must be greater than zero",
                    severity="error",
                ))
                parsed_amount = None
            elif decimal_places(parsed_amount) > 2:
                issues.append(ValidationIssue(
                    field="amount",
                    issue_type="invalid_format",
                    message="Amount can have at most two decimal places",
                    severity="error",
                    suggested_fix="Round the amount to cents",
                ))
                parsed_amount = None
            else:
                try:
                    parsed_amount = parsed_amount.quantize(CENTS)
                except InvalidOperation:
                    issues.append(ValidationIssue(
                        field="amount",
                        issue_type="invalid_value",
                        message="Amount is too large",
                        severity="error",
                    ))
                    parsed_amount = None

        # Description
        if description is None or not description.strip():
            issues.append(ValidationIssue(
                field="description",
                issue_type="missing",
                message="Description is required",
                severity="error",
            ))

        # Date
        parsed_date = None
        if date_text is None or not str(date_text).strip():
            issues.append(ValidationIssue(
                field="date",
                issue_type="missing",
                message="Date is required",
                severity="error",
            ))
        else:
            parsed_date = parse_date(date_text)
            if parsed_date is None:
                issues.append(ValidationIssue(
                    field="date",
                    issue_type="invalid_format",
                    message=f"Date must be a valid calendar date in YYYY-MM-DD format, got {date_text!r}",
                    severity="error",
                    suggested_fix="Use a date like 2024-01-31",
                ))

        # Category
        if transaction_type == TransactionType.EXPENSE and (
            category is None or not category.strip()
        ):
            issues.append(ValidationIssue(
                field="category",
                issue_type="missing",
                message="Category is required for expenses",
                severity="error",
                suggested_fix="Pass --category, e.g. --category Food",
            ))
        elif category is not None and len(category.strip()) > MAX_CATEGORY_LENGTH:
            issues.append(ValidationIssue(
                field="category",
                issue_type="too_long",
                message=f"Category is longer than {MAX_CATEGORY_LENGTH} characters",
                severity="error",
            ))

        is_valid = not any(issue.severity == "error" for issue in issues)

        return is_valid, issues, parsed_amount, parsed_date

    def _validate_semantic(
        self,
        amount: Decimal,
        transaction_date: date,
        description: str,
    ) -> tuple[bool, list[ValidationIssue]]:
        """
        Stage 2: Semantic validation.

        Returns: (is_valid, list_of_issues)
        """
        issues = []
        today = self._today or date.today()

        max_future_date = today + timedelta(days=self._settings.future_date_tolerance_days)
        if transaction_date > max_future_date:
            issues.append(ValidationIssue(
                field="date",
                issue_type="future_date",
                message=f"Date ({transaction_date}) is in the future",
                severity="warning",
                suggested_fix="Please verify the date is correct",
            ))

        max_amount = Decimal(str(self._settings.max_transaction_amount))
        if amount > max_amount:
            issues.append(ValidationIssue(
                field="amount",
                issue_type="suspicious_value",
                message=f"Amount ({amount:,.2f}) seems unusually high",
                severity="warning",
                suggested_fix="Please verify this amount is correct",
            ))

        max_length = self._settings.max_description_length
        if len(description.strip()) > max_length:
            issues.append(ValidationIssue(
                field="description",
                issue_type="too_long",
                message=f"Description is longer than {max_length} characters",
                severity="error",
                suggested_fix="Shorten the description",
            ))

        is_valid = not any(issue.severity == "error" for issue in issues)

        return is_valid, issues

    def validate(
        self,
        transaction_type: Union[TransactionType, str],
        amount: AmountInput,
        description: Optional[str],
        date_text: Optional[str],
        category: Optional[str] = None,
    ) -> ValidationResult:
        """
        Run full two-stage validation pipeline.

        Returns:
            ValidationResult with all issues found. On success it also
            carries the parsed amount and date.
        """
        all_issues = []

        schema_valid, schema_issues, parsed_amount, parsed_date = self._validate_schema(
            transaction_type, amount, description, date_text, category,
        )
        all_issues.extend(schema_issues)

        # Only run stage 2 if stage 1 passes
        semantic_valid = False
        if schema_valid:
            semantic_valid, semantic_issues = self._validate_semantic(
                parsed_amount, parsed_date, description,
            )
            all_issues.extend(semantic_issues)

        warnings = [issue.message for issue in all_issues if issue.severity == "warning"]
        is_valid = schema_valid and semantic_valid

        return ValidationResult(
            schema_valid=schema_valid,
            semantic_valid=semantic_valid,
            is_valid=is_valid,
            issues=all_issues,
            warnings=warnings,
            amount=parsed_amount if is_valid else None,
            parsed_date=parsed_date if is_valid else None,
        )


def format_validation_errors(result: ValidationResult) -> str:
    """
    Render a rejected result as text for the terminal.

    One line per error, with the suggested fix indented below it.
    """
    lines = ["Entry rejected:"]
    for issue in result.errors:
        lines.append(f"  - {issue.message}")
        if issue.suggested_fix:
            lines.append(f"    hint: {issue.suggested_fix}")
    return "\n".join(lines)
