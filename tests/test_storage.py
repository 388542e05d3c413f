"""Tests for the key/value storage backends."""

import json

import pytest

from finance_tracker.services.storage import (
    InMemoryKeyValueStorage,
    JsonFileKeyValueStorage,
    StorageError,
)


class TestInMemoryStorage:
    """Tests for InMemoryKeyValueStorage."""

    def test_get_absent_returns_none(self):
        """Test that a missing key reads as None."""
        assert InMemoryKeyValueStorage().get("transactions") is None

    def test_set_then_get(self):
        """Test basic write and read."""
        storage = InMemoryKeyValueStorage()
        storage.set("transactions", "[]")
        assert storage.get("transactions") == "[]"

    def test_set_overwrites(self):
        """Test that set replaces the previous value."""
        storage = InMemoryKeyValueStorage({"k": "old"})
        storage.set("k", "new")
        assert storage.get("k") == "new"

    def test_delete(self):
        """Test delete reports whether the key existed."""
        storage = InMemoryKeyValueStorage({"k": "v"})
        assert storage.delete("k") is True
        assert storage.delete("k") is False
        assert storage.get("k") is None


class TestJsonFileStorage:
    """Tests for JsonFileKeyValueStorage."""

    def test_missing_file_reads_empty(self, tmp_path):
        """Test that no file means no keys."""
        storage = JsonFileKeyValueStorage(tmp_path / "data.json")
        assert storage.get("transactions") is None

    def test_set_creates_file_and_parent_dirs(self, tmp_path):
        """Test the first write creates the directory and file."""
        path = tmp_path / "nested" / "data.json"
        storage = JsonFileKeyValueStorage(path)
        storage.set("transactions", "[]")

        assert path.exists()
        assert json.loads(path.read_text(encoding="utf-8")) == {"transactions": "[]"}

    def test_values_survive_new_instance(self, tmp_path):
        """Test persistence across storage instances."""
        path = tmp_path / "data.json"
        JsonFileKeyValueStorage(path).set("transactions", '[{"id": "1"}]')
        assert JsonFileKeyValueStorage(path).get("transactions") == '[{"id": "1"}]'

    def test_keys_are_independent(self, tmp_path):
        """Test that writing one key keeps the others."""
        storage = JsonFileKeyValueStorage(tmp_path / "data.json")
        storage.set("a", "1")
        storage.set("b", "2")
        assert storage.get("a") == "1"
        assert storage.get("b") == "2"

    def test_delete(self, tmp_path):
        """Test deleting a key."""
        storage = JsonFileKeyValueStorage(tmp_path / "data.json")
        storage.set("a", "1")
        assert storage.delete("a") is True
        assert storage.delete("a") is False
        assert storage.get("a") is None

    def test_no_temp_files_left_behind(self, tmp_path):
        """Test that atomic writes clean up after themselves."""
        storage = JsonFileKeyValueStorage(tmp_path / "data.json")
        for i in range(3):
            storage.set("transactions", str(i))
        assert sorted(p.name for p in tmp_path.iterdir()) == ["data.json"]

    def test_corrupt_file_raises_storage_error(self, tmp_path):
        """Test that an unreadable file is reported, not ignored."""
        path = tmp_path / "data.json"
        path.write_text("{broken", encoding="utf-8")
        with pytest.raises(StorageError, match="Failed to read"):
            JsonFileKeyValueStorage(path).get("transactions")

    def test_non_object_file_raises_storage_error(self, tmp_path):
        """Test that a top-level array is rejected."""
        path = tmp_path / "data.json"
        path.write_text("[]", encoding="utf-8")
        with pytest.raises(StorageError, match="JSON object"):
            JsonFileKeyValueStorage(path).get("transactions")

    def test_write_failure_raises_storage_error(self, tmp_path):
        """Test that an unwritable location is reported."""
        blocker = tmp_path / "not_a_dir"
        blocker.write_text("", encoding="utf-8")
        storage = JsonFileKeyValueStorage(blocker / "data.json")
        with pytest.raises(StorageError, match="Failed to write"):
            storage.set("transactions", "[]")

    def test_non_string_value_raises_storage_error(self, tmp_path):
        """Test that a hand-edited value is reported and never dropped on write."""
        path = tmp_path / "data.json"
        original = {"transactions": [{"id": "1"}], "other": "kept"}
        path.write_text(json.dumps(original), encoding="utf-8")
        storage = JsonFileKeyValueStorage(path)

        with pytest.raises(StorageError, match="non-string values for: transactions"):
            storage.get("other")
        with pytest.raises(StorageError):
            storage.set("other", "new")
        assert json.loads(path.read_text(encoding="utf-8")) == original
