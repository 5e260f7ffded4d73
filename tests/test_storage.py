"""Tests for the storage backends."""

import json

import pytest
from datetime import date
from decimal import Decimal

from finance_tracker.models.transaction import Transaction, TransactionType
from finance_tracker.services.storage import (
    CorruptStorageError,
    InMemoryTransactionStorage,
    JsonFileTransactionStorage,
    StorageError,
)


def sample_transactions():
    return [
        Transaction(
            id=1,
            type=TransactionType.INCOME,
            amount=Decimal("1000"),
            description="Salary",
            date=date(2024, 1, 1),
        ),
        Transaction(
            id=2,
            type=TransactionType.EXPENSE,
            amount=Decimal("19.99"),
            category="Food",
            description="Groceries",
            date=date(2024, 1, 2),
        ),
    ]


def write_json(path, data):
    path.write_text(json.dumps(data), encoding="utf-8")


class TestJsonFileStorage:
    """Tests for JsonFileTransactionStorage."""

    def test_missing_file_loads_empty(self, tmp_path):
        storage = JsonFileTransactionStorage(tmp_path / "transactions.json")
        assert storage.load() == []

    def test_empty_file_loads_empty(self, tmp_path):
        path = tmp_path / "transactions.json"
        path.write_text("  \n", encoding="utf-8")
        assert JsonFileTransactionStorage(path).load() == []

    def test_save_then_load(self, tmp_path):
        storage = JsonFileTransactionStorage(tmp_path / "transactions.json")
        transactions = sample_transactions()
        storage.save(transactions)
        assert storage.load() == transactions

    def test_file_format(self, tmp_path):
        """Records use the documented field names, in order."""
        path = tmp_path / "transactions.json"
        JsonFileTransactionStorage(path).save(sample_transactions())

        data = json.loads(path.read_text(encoding="utf-8"))
        assert isinstance(data, list)
        assert list(data[0].keys()) == ["id", "type", "amount", "category", "description", "date"]
        assert data[0] == {
            "id": 1,
            "type": "income",
            "amount": "1000",
            "category": None,
            "description": "Salary",
            "date": "2024-01-01",
        }
        assert data[1]["amount"] == "19.99"

    def test_save_overwrites_whole_file(self, tmp_path):
        storage = JsonFileTransactionStorage(tmp_path / "transactions.json")
        storage.save(sample_transactions())
        storage.save(sample_transactions()[:1])
        assert len(storage.load()) == 1

    def test_save_creates_parent_directories(self, tmp_path):
        path = tmp_path / "nested" / "dir" / "transactions.json"
        JsonFileTransactionStorage(path).save(sample_transactions())
        assert path.exists()

    def test_save_leaves_no_temp_files(self, tmp_path):
        JsonFileTransactionStorage(tmp_path / "transactions.json").save(sample_transactions())
        assert [p.name for p in tmp_path.iterdir()] == ["transactions.json"]

    def test_accepts_numeric_amounts(self, tmp_path):
        """Hand-edited files may contain plain JSON numbers."""
        path = tmp_path / "transactions.json"
        path.write_text(
            '[{"id": 1, "type": "expense", "amount": 12.5, "category": "Food",'
            ' "description": "Lunch", "date": "2024-05-03"}]',
            encoding="utf-8",
        )
        transactions = JsonFileTransactionStorage(path).load()
        assert transactions[0].amount == Decimal("12.5")

    def test_invalid_json_is_corrupt(self, tmp_path):
        path = tmp_path / "transactions.json"
        path.write_text("{not json", encoding="utf-8")
        with pytest.raises(CorruptStorageError, match="not valid JSON"):
            JsonFileTransactionStorage(path).load()

    def test_top_level_must_be_list(self, tmp_path):
        path = tmp_path / "transactions.json"
        write_json(path, {"transactions": []})
        with pytest.raises(CorruptStorageError, match="must contain a list"):
            JsonFileTransactionStorage(path).load()

    def test_non_object_record_is_corrupt(self, tmp_path):
        path = tmp_path / "transactions.json"
        write_json(path, ["oops"])
        with pytest.raises(CorruptStorageError, match="record #1 is not an object"):
            JsonFileTransactionStorage(path).load()

    def test_invalid_record_is_corrupt(self, tmp_path):
        path = tmp_path / "transactions.json"
        write_json(path, [{
            "id": 1,
            "type": "income",
            "amount": "-3",
            "category": None,
            "description": "Salary",
            "date": "2024-01-01",
        }])
        with pytest.raises(CorruptStorageError, match="record #1 is invalid"):
            JsonFileTransactionStorage(path).load()

    def test_duplicate_ids_are_corrupt(self, tmp_path):
        path = tmp_path / "transactions.json"
        record = sample_transactions()[0].to_record()
        write_json(path, [record, record])
        with pytest.raises(CorruptStorageError, match="duplicate transaction id 1"):
            JsonFileTransactionStorage(path).load()

    def test_unreadable_path_is_storage_error(self, tmp_path):
        """A directory where the file should be can't be read."""
        with pytest.raises(StorageError, match="Failed to read"):
            JsonFileTransactionStorage(tmp_path).load()

    def test_corrupt_is_a_storage_error(self):
        assert issubclass(CorruptStorageError, StorageError)

    def test_location(self, tmp_path):
        path = tmp_path / "transactions.json"
        assert JsonFileTransactionStorage(path).location == str(path)


class TestInMemoryStorage:
    """Tests for InMemoryTransactionStorage."""

    def test_starts_empty(self):
        assert InMemoryTransactionStorage().load() == []

    def test_save_replaces_contents(self):
        storage = InMemoryTransactionStorage(sample_transactions())
        storage.save(sample_transactions()[:1])
        assert len(storage.load()) == 1
        assert storage.save_count == 1

    def test_load_returns_a_copy(self):
        storage = InMemoryTransactionStorage(sample_transactions())
        storage.load().clear()
        assert len(storage.load()) == 2
