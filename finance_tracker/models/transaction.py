"""
Core Data Models for Personal Finance Tracker

These models define the strict schemas for all data flowing through the system.
They are designed to:
1. Enforce type safety at runtime
2. Provide clear validation error messages
3. Be serializable for storage and logging

DESIGN DECISION: A Transaction is immutable once created.
The tracker only ever appends; nothing edits or deletes a stored record.
"""

import datetime as dt
from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Optional, Union

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    field_validator,
    model_validator,
)


# =============================================================================
# ENUMS
# =============================================================================

class TransactionType(str, Enum):
    """Direction of money flow."""
    INCOME = "income"
    EXPENSE = "expense"


# =============================================================================
# CORE TRANSACTION MODEL
# =============================================================================

class Transaction(BaseModel):
    """
    A single income or expense record.

    Field names match the persisted JSON keys exactly:
    id, type, amount, category, description, date.
    """
    model_config = ConfigDict(str_strip_whitespace=True, frozen=True)

    id: int = Field(
        ...,
        ge=1,
        description="Sequential identifier, unique within the data file"
    )
    type: TransactionType = Field(
        ...,
        description="income or expense"
    )
    amount: Decimal = Field(
        ...,
        gt=0,
        decimal_places=2,
        allow_inf_nan=False,
        description="Positive amount"
    )
    category: Optional[str] = Field(
        default=None,
        max_length=100,
        description="Category (required for expenses)"
    )
    description: str = Field(
        ...,
        min_length=1,
        max_length=1000,
        description="What the money was for"
    )
    date: dt.date = Field(
        ...,
        description="Calendar date of the transaction"
    )

    @field_validator('category')
    @classmethod
    def blank_category_is_none(cls, v: Optional[str]) -> Optional[str]:
        """Treat an empty category the same as a missing one."""
        return v or None

    @model_validator(mode='after')
    def validate_category(self) -> 'Transaction':
        """Expenses must be categorized."""
        if self.type == TransactionType.EXPENSE and not self.category:
            raise ValueError("Expense transactions require a category")
        return self

    @property
    def is_income(self) -> bool:
        return self.type == TransactionType.INCOME

    @property
    def is_expense(self) -> bool:
        return self.type == TransactionType.EXPENSE

    def to_record(self) -> dict:
        """Convert to the dict written to storage."""
        return self.model_dump(mode="json")


# =============================================================================
# VALIDATION MODELS
# =============================================================================

class ValidationIssue(BaseModel):
    """A single validation issue found."""

    field: str = Field(
        ...,
        description="Field with the issue"
    )
    issue_type: str = Field(
        ...,
        description="Type of issue (e.g., 'missing', 'invalid_format', 'suspicious_value')"
    )
    message: str = Field(
        ...,
        description="Human-readable description of the issue"
    )
    severity: str = Field(
        ...,
        pattern="^(error|warning|info)$",
        description="Issue severity"
    )
    suggested_fix: Optional[str] = Field(
        default=None,
        description="Suggested fix if available"
    )


class ValidationResult(BaseModel):
    """
    Result of the two-stage validation.

    Stage 1: Schema validation (types, required fields, formats)
    Stage 2: Semantic validation (plausibility checks)

    When is_valid is True, `amount` and `parsed_date` hold the
    normalized values the transaction should be created with.
    """

    schema_valid: bool = Field(
        ...,
        description="Did schema validation pass?"
    )
    semantic_valid: bool = Field(
        ...,
        description="Did semantic validation pass?"
    )
    is_valid: bool = Field(
        ...,
        description="Overall validation result"
    )

    issues: list[ValidationIssue] = Field(
        default_factory=list,
        description="All validation issues found"
    )
    warnings: list[str] = Field(
        default_factory=list,
        description="Non-blocking warnings"
    )

    # Normalized input
    amount: Optional[Decimal] = None
    parsed_date: Optional[date] = None

    @property
    def errors(self) -> list[ValidationIssue]:
        return [issue for issue in self.issues if issue.severity == "error"]


# =============================================================================
# QUERY MODELS
# =============================================================================

class TransactionFilter(BaseModel):
    """
    Optional predicates narrowing the transaction set.

    Month and year are compared as integers, so "05", "5" and 5
    all select May. Absent predicates impose no constraint.
    """
    model_config = ConfigDict(str_strip_whitespace=True)

    category: Optional[str] = None
    month: Optional[int] = Field(default=None, ge=1, le=12)
    year: Optional[int] = Field(default=None, ge=1, le=9999)

    @field_validator('month', 'year', mode='before')
    @classmethod
    def parse_number(cls, v: Union[str, int, None]) -> Optional[int]:
        """Accept zero-padded strings from the command line."""
        if v is None or isinstance(v, int):
            return v
        text = str(v).strip()
        if not text:
            return None
        if not text.isdigit():
            raise ValueError(f"Expected a number, got {v!r}")
        return int(text)

    @field_validator('category')
    @classmethod
    def blank_category_is_none(cls, v: Optional[str]) -> Optional[str]:
        return v or None

    @property
    def is_empty(self) -> bool:
        return self.category is None and self.month is None and self.year is None

    def matches(self, transaction: Transaction) -> bool:
        """Check whether a transaction satisfies every provided predicate."""
        if self.category is not None and transaction.category != self.category:
            return False
        if self.month is not None and transaction.date.month != self.month:
            return False
        if self.year is not None and transaction.date.year != self.year:
            return False
        return True

    def describe(self) -> str:
        """Human-readable description of the active predicates."""
        parts = []
        if self.category is not None:
            parts.append(f"category: {self.category}")
        if self.month is not None:
            parts.append(f"month: {self.month:02d}")
        if self.year is not None:
            parts.append(f"year: {self.year}")
        return " | ".join(parts) if parts else "all transactions"


class Summary(BaseModel):
    """Aggregate totals over a set of transactions."""

    total_income: Decimal = Decimal("0")
    total_expense: Decimal = Decimal("0")
    transaction_count: int = Field(default=0, ge=0)

    @property
    def balance(self) -> Decimal:
        """Total income minus total expense."""
        return self.total_income - self.total_expense


class FilterResult(BaseModel):
    """
    Result of filtering transactions.

    An empty match is a normal result (data_found=False), not an error.
    """

    filter: TransactionFilter
    transactions: list[Transaction] = Field(default_factory=list)

    @property
    def data_found(self) -> bool:
        return len(self.transactions) > 0

    @property
    def result_count(self) -> int:
        return len(self.transactions)


class MonthlyReport(BaseModel):
    """Totals and breakdown for one calendar month."""

    month: int = Field(..., ge=1, le=12)
    year: int = Field(..., ge=1, le=9999)
    summary: Summary
    expenses_by_category: dict[str, Decimal] = Field(default_factory=dict)
    transactions: list[Transaction] = Field(default_factory=list)

    @property
    def period_label(self) -> str:
        return date(self.year, self.month, 1).strftime("%B %Y")
