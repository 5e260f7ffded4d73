"""
Command Option Models

Each CLI command maps its parsed arguments onto one of these models,
so the rest of the system receives typed fields instead of a loose
argparse namespace.

Amounts and dates stay as raw strings here: turning them into numbers
and calendar dates is the validator's job, which reports problems as
validation errors rather than usage errors.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from finance_tracker.models.transaction import TransactionFilter


class AddIncomeOptions(BaseModel):
    """Options for `add-income`."""
    model_config = ConfigDict(str_strip_whitespace=True, frozen=True)

    amount: str = Field(..., description="Amount of income")
    description: str = Field(..., description="Description of income")
    date: str = Field(..., description="Date of income (YYYY-MM-DD)")


class AddExpenseOptions(BaseModel):
    """Options for `add-expense`."""
    model_config = ConfigDict(str_strip_whitespace=True, frozen=True)

    amount: str = Field(..., description="Amount of expense")
    category: str = Field(..., description="Category of expense")
    description: str = Field(..., description="Description of expense")
    date: str = Field(..., description="Date of expense (YYYY-MM-DD)")


class FilterOptions(BaseModel):
    """Options for `filter`. Every predicate is optional."""
    model_config = ConfigDict(str_strip_whitespace=True, frozen=True)

    category: Optional[str] = Field(default=None, description="Category to filter by")
    month: Optional[str] = Field(default=None, description="Month to filter by (MM)")
    year: Optional[str] = Field(default=None, description="Year to filter by (YYYY)")

    def to_filter(self) -> TransactionFilter:
        return TransactionFilter(
            category=self.category,
            month=self.month,
            year=self.year,
        )


class ReportOptions(BaseModel):
    """Options for `report`."""
    model_config = ConfigDict(str_strip_whitespace=True, frozen=True)

    month: str = Field(..., description="Month for report (MM)")
    year: str = Field(..., description="Year for report (YYYY)")


class ShowOptions(BaseModel):
    """Options for `show`."""
    model_config = ConfigDict(frozen=True)

    id: int = Field(..., ge=1, description="Transaction ID")
