"""Shared fixtures for the test suite."""

from datetime import date

import pytest

from finance_tracker.audit import AuditLogger
from finance_tracker.config import get_settings
from finance_tracker.manager import TransactionManager
from finance_tracker.services.storage import InMemoryTransactionStorage
from finance_tracker.validation import TransactionValidator


@pytest.fixture(autouse=True)
def clean_settings(monkeypatch):
    """Keep tests independent of the developer's environment."""
    for name in (
        "FINANCE_DATA_FILE",
        "FINANCE_LOG_LEVEL",
        "FINANCE_CURRENCY_SYMBOL",
        "FINANCE_FUTURE_DATE_TOLERANCE_DAYS",
        "FINANCE_MAX_TRANSACTION_AMOUNT",
        "FINANCE_MAX_DESCRIPTION_LENGTH",
    ):
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def validator():
    return TransactionValidator(today=date(2024, 6, 15))


@pytest.fixture
def storage():
    return InMemoryTransactionStorage()


@pytest.fixture
def manager(storage, validator):
    return TransactionManager(
        storage=storage,
        validator=validator,
        audit_logger=AuditLogger(),
    )
