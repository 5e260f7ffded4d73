"""Tests for the two-stage transaction validator."""

import pytest
from datetime import date
from decimal import Decimal

from finance_tracker.models.transaction import TransactionType
from finance_tracker.validation import (
    TransactionValidator,
    ValidationError,
    format_validation_errors,
    parse_amount,
    parse_date,
)


def issue_fields(result):
    return [issue.field for issue in result.errors]


class TestParsers:
    """Tests for the amount and date parsers."""

    @pytest.mark.parametrize("raw,expected", [
        ("1000", Decimal("1000")),
        ("12.50", Decimal("12.50")),
        (" 7 ", Decimal("7")),
        (0.1, Decimal("0.1")),
        (5, Decimal("5")),
        (Decimal("3.25"), Decimal("3.25")),
    ])
    def test_parse_amount(self, raw, expected):
        assert parse_amount(raw) == expected

    @pytest.mark.parametrize("raw", [
        "abc", "", "NaN", "Infinity", "-inf", None, True,
        "1E+3", "1e-2", "1_000", "1E+100000000", "\u0661\u0662",
    ])
    def test_parse_amount_rejects(self, raw):
        assert parse_amount(raw) is None

    def test_parse_date(self):
        assert parse_date("2024-02-29") == date(2024, 2, 29)

    @pytest.mark.parametrize("raw", [
        "2023-02-29",   # not a leap year
        "2024-13-01",
        "2024-1-1",
        "01/02/2024",
        "2024-01-01T10:00",
        "yesterday",
        None,
    ])
    def test_parse_date_rejects(self, raw):
        assert parse_date(raw) is None


class TestSchemaValidation:
    """Stage 1: required fields and formats."""

    def test_valid_income(self, validator):
        result = validator.validate(
            TransactionType.INCOME, "1000", "Salary", "2024-01-01"
        )
        assert result.is_valid is True
        assert result.schema_valid is True
        assert result.semantic_valid is True
        assert result.amount == Decimal("1000")
        assert result.parsed_date == date(2024, 1, 1)
        assert result.issues == []

    def test_valid_expense(self, validator):
        result = validator.validate(
            "expense", "200", "Lunch", "2024-01-02", category="Food"
        )
        assert result.is_valid is True

    @pytest.mark.parametrize("amount", ["0", "-5", 0, -5])
    def test_non_positive_amount_rejected(self, validator, amount):
        result = validator.validate("income", amount, "Salary", "2024-01-01")
        assert result.is_valid is False
        assert issue_fields(result) == ["amount"]
        assert result.errors[0].message == "Amount must be greater than zero"
        assert result.amount is None

    @pytest.mark.parametrize("amount", ["ten", "NaN", "inf", "1,000"])
    def test_non_numeric_amount_rejected(self, validator, amount):
        result = validator.validate("income", amount, "Salary", "2024-01-01")
        assert result.is_valid is False
        assert result.errors[0].issue_type == "invalid_format"

    def test_missing_amount_rejected(self, validator):
        result = validator.validate("income", None, "Salary", "2024-01-01")
        assert result.errors[0].issue_type == "missing"

    def test_too_many_decimals_rejected(self, validator):
        result = validator.validate("income", "10.005", "Salary", "2024-01-01")
        assert result.is_valid is False
        assert "two decimal places" in result.errors[0].message

    def test_trailing_zeros_are_accepted(self, validator):
        result = validator.validate("income", "10.500", "Salary", "2024-01-01")
        assert result.is_valid is True
        assert result.amount == Decimal("10.50")
        assert result.amount.as_tuple().exponent == -2

    def test_accepted_amount_is_fixed_point(self, validator):
        result = validator.validate("income", "1000", "Salary", "2024-01-01")
        assert str(result.amount) == "1000.00"

    @pytest.mark.parametrize("amount", ["1E+3", "1_000", "1E+100000000"])
    def test_exponent_and_underscore_forms_rejected(self, validator, amount):
        result = validator.validate("income", amount, "Salary", "2024-01-01")
        assert result.is_valid is False
        assert result.errors[0].issue_type == "invalid_format"

    def test_amount_beyond_decimal_precision_rejected(self, validator):
        result = validator.validate("income", "1" + "0" * 40, "Salary", "2024-01-01")
        assert result.is_valid is False
        assert result.errors[0].message == "Amount is too large"

    @pytest.mark.parametrize("bad_date", ["2024-02-30", "02-01-2024", "2024/01/01", "soon"])
    def test_malformed_date_rejected(self, validator, bad_date):
        result = validator.validate("income", "100", "Salary", bad_date)
        assert result.is_valid is False
        assert issue_fields(result) == ["date"]
        assert result.errors[0].issue_type == "invalid_format"

    def test_missing_date_rejected(self, validator):
        result = validator.validate("income", "100", "Salary", "")
        assert result.errors[0].issue_type == "missing"

    @pytest.mark.parametrize("description", [None, "", "   "])
    def test_missing_description_rejected(self, validator, description):
        result = validator.validate("income", "100", description, "2024-01-01")
        assert issue_fields(result) == ["description"]

    @pytest.mark.parametrize("category", [None, "", "  "])
    def test_expense_requires_category(self, validator, category):
        result = validator.validate("expense", "100", "Lunch", "2024-01-01", category=category)
        assert issue_fields(result) == ["category"]

    def test_income_without_category_is_fine(self, validator):
        result = validator.validate("income", "100", "Gift", "2024-01-01", category=None)
        assert result.is_valid is True

    def test_overlong_category_rejected(self, validator):
        result = validator.validate("expense", "100", "Lunch", "2024-01-01", category="x" * 101)
        assert issue_fields(result) == ["category"]

    def test_unknown_type_rejected(self, validator):
        result = validator.validate("transfer", "100", "Move", "2024-01-01")
        assert issue_fields(result) == ["type"]

    def test_reports_every_error(self, validator):
        """All schema problems are reported at once."""
        result = validator.validate("expense", "-1", "", "bad", category=None)
        assert sorted(issue_fields(result)) == ["amount", "category", "date", "description"]
        assert len(result.errors) == 4

    def test_semantic_stage_skipped_when_schema_fails(self, validator):
        result = validator.validate("income", "0", "Salary", "2099-01-01")
        assert result.schema_valid is False
        assert result.semantic_valid is False
        assert all(issue.issue_type != "future_date" for issue in result.issues)


class TestSemanticValidation:
    """Stage 2: plausibility checks."""

    def test_future_date_is_a_warning(self, validator):
        result = validator.validate("income", "100", "Bonus", "2024-07-30")
        assert result.is_valid is True
        assert len(result.warnings) == 1
        assert "in the future" in result.warnings[0]

    def test_date_within_tolerance_has_no_warning(self, validator):
        result = validator.validate("income", "100", "Bonus", "2024-06-20")
        assert result.warnings == []

    def test_large_amount_is_a_warning(self, validator):
        result = validator.validate("income", "5000000", "Lottery", "2024-01-01")
        assert result.is_valid is True
        assert any("unusually high" in w for w in result.warnings)

    def test_overlong_description_rejected(self, validator):
        result = validator.validate("income", "100", "x" * 201, "2024-01-01")
        assert result.schema_valid is True
        assert result.semantic_valid is False
        assert result.is_valid is False
        assert issue_fields(result) == ["description"]

    def test_thresholds_come_from_settings(self, monkeypatch):
        monkeypatch.setenv("FINANCE_MAX_TRANSACTION_AMOUNT", "100")
        validator = TransactionValidator(today=date(2024, 1, 1))
        result = validator.validate("income", "150", "Bonus", "2024-01-01")
        assert any("unusually high" in w for w in result.warnings)


class TestValidationError:
    """Tests for the ValidationError exception."""

    def test_message_lists_errors(self, validator):
        result = validator.validate("expense", "0", "Lunch", "2024-01-01", category=None)
        error = ValidationError(result)
        assert "Amount must be greater than zero" in str(error)
        assert "Category is required for expenses" in str(error)
        assert error.result is result
        assert isinstance(error, ValueError)

    def test_format_validation_errors(self, validator):
        result = validator.validate("income", "abc", "Salary", "2024-01-01")
        text = format_validation_errors(result)
        assert text.startswith("Entry rejected:")
        assert "Amount must be a number" in text
        assert "hint: Enter a plain number such as 12.50" in text
