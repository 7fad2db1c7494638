"""
Tests for key-value storage backends
"""

import json
import os

import pytest

from novabank.services.storage import (
    InMemoryKeyValueStorage,
    JsonFileKeyValueStorage,
    StorageError,
    StorageWriteError,
)


class TestInMemoryStorage:
    """Tests for the dict-backed storage."""

    def test_get_missing_key(self):
        """Test that absent keys read as None."""
        assert InMemoryKeyValueStorage().get_item("nope") is None

    def test_set_get_remove(self):
        """Test basic operations."""
        storage = InMemoryKeyValueStorage()
        storage.set_item("a", "1")
        assert storage.get_item("a") == "1"

        storage.remove_item("a")
        storage.remove_item("a")
        assert storage.get_item("a") is None

    def test_initial_values_are_copied(self):
        """Test that the seed dict is not shared."""
        initial = {"a": "1"}
        storage = InMemoryKeyValueStorage(initial)
        storage.set_item("b", "2")
        assert "b" not in initial

    def test_clear(self):
        """Test clearing all keys."""
        storage = InMemoryKeyValueStorage({"a": "1", "b": "2"})
        storage.clear()
        assert storage.keys() == []

    def test_set_items(self):
        """Test writing several keys at once."""
        storage = InMemoryKeyValueStorage({"a": "old"})
        storage.set_items({"a": "1", "b": "2"})
        assert storage.get_item("a") == "1"
        assert storage.get_item("b") == "2"


class TestJsonFileStorage:
    """Tests for the file-backed storage."""

    def test_missing_file_is_empty(self, tmp_path):
        """Test that a store with no file yet reads as empty."""
        storage = JsonFileKeyValueStorage(tmp_path / "store.json")
        assert storage.get_item("nova_balance") is None

    def test_values_survive_new_instance(self, tmp_path):
        """Test durability across instances."""
        path = tmp_path / "nested" / "store.json"
        JsonFileKeyValueStorage(path).set_item("nova_balance", "11950.00")

        assert JsonFileKeyValueStorage(path).get_item("nova_balance") == "11950.00"
        assert json.loads(path.read_text()) == {"nova_balance": "11950.00"}

    def test_set_keeps_other_keys(self, tmp_path):
        """Test that writes merge rather than replace the file."""
        storage = JsonFileKeyValueStorage(tmp_path / "store.json")
        storage.set_item("a", "1")
        storage.set_item("b", "2")
        assert storage.get_item("a") == "1"
        assert storage.get_item("b") == "2"

    def test_remove_and_clear(self, tmp_path):
        """Test deletions."""
        storage = JsonFileKeyValueStorage(tmp_path / "store.json")
        storage.set_item("a", "1")
        storage.set_item("b", "2")

        storage.remove_item("a")
        assert storage.get_item("a") is None
        assert storage.get_item("b") == "2"

        storage.clear()
        assert storage.get_item("b") is None

    def test_corrupt_file_reads_as_empty(self, tmp_path):
        """Test that garbage on disk is not fatal."""
        path = tmp_path / "store.json"
        path.write_text("{{{ definitely not json")
        storage = JsonFileKeyValueStorage(path)

        assert storage.get_item("nova_balance") is None
        storage.set_item("nova_balance", "1.00")
        assert storage.get_item("nova_balance") == "1.00"

    def test_non_object_file_reads_as_empty(self, tmp_path):
        """Test that a JSON array on disk is ignored."""
        path = tmp_path / "store.json"
        path.write_text("[1, 2, 3]")
        assert JsonFileKeyValueStorage(path).get_item("0") is None

    def test_non_string_values_are_ignored(self, tmp_path):
        """Test that only string values are exposed."""
        path = tmp_path / "store.json"
        path.write_text(json.dumps({"a": 1, "b": "two"}))
        storage = JsonFileKeyValueStorage(path)
        assert storage.get_item("a") is None
        assert storage.get_item("b") == "two"

    def test_no_temp_files_left_behind(self, tmp_path):
        """Test that atomic writes clean up after themselves."""
        storage = JsonFileKeyValueStorage(tmp_path / "store.json")
        storage.set_item("a", "1")
        assert [p.name for p in tmp_path.iterdir()] == ["store.json"]

    def test_write_failure_raises_storage_error(self, tmp_path):
        """Test that an unwritable location raises StorageWriteError."""
        blocker = tmp_path / "blocker"
        blocker.write_text("i am a file")
        storage = JsonFileKeyValueStorage(blocker / "store.json")

        with pytest.raises(StorageWriteError):
            storage.set_item("a", "1")

    def test_set_items_is_one_file_replace(self, tmp_path, monkeypatch):
        """Test that a batch write lands in a single atomic replace."""
        path = tmp_path / "store.json"
        storage = JsonFileKeyValueStorage(path)
        storage.set_item("keep", "x")

        replaced = []
        real_replace = os.replace

        def counting_replace(src, dst):
            replaced.append(dst)
            real_replace(src, dst)

        monkeypatch.setattr(os, "replace", counting_replace)
        storage.set_items({"nova_balance": "11950.00", "nova_transactions": "[]"})

        assert len(replaced) == 1
        assert json.loads(path.read_text()) == {
            "keep": "x",
            "nova_balance": "11950.00",
            "nova_transactions": "[]",
        }

    def test_failed_set_items_writes_nothing(self, tmp_path):
        """Test that a failed batch leaves no key behind."""
        blocker = tmp_path / "blocker"
        blocker.write_text("i am a file")
        storage = JsonFileKeyValueStorage(blocker / "store.json")

        with pytest.raises(StorageWriteError):
            storage.set_items({"a": "1", "b": "2"})
        assert storage.get_item("a") is None

    def test_write_error_is_storage_error(self):
        """Test the exception hierarchy."""
        assert issubclass(StorageWriteError, StorageError)


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
