"""Tests for the JSON file store adapter."""

import json
from unittest.mock import patch

import pytest

from tasktracker.adapters.json_store import JsonFileStore
from tasktracker.core.errors import StoreIOError


class TestRead:
    def test_missing_file_reads_empty_and_creates_dir(self, tmp_path):
        path = tmp_path / "nested" / "dir" / "tasks.json"
        store = JsonFileStore(path)

        assert store.read() == []
        assert path.parent.is_dir()
        assert not path.exists()

    def test_empty_file_reads_empty(self, tasks_file):
        tasks_file.parent.mkdir(parents=True)
        tasks_file.write_text("  \n")
        assert JsonFileStore(tasks_file).read() == []

    def test_reads_records(self, tasks_file):
        tasks_file.parent.mkdir(parents=True)
        tasks_file.write_text(json.dumps([{"id": 1}, {"id": 2}]))
        assert JsonFileStore(tasks_file).read() == [{"id": 1}, {"id": 2}]

    def test_malformed_json(self, tasks_file):
        tasks_file.parent.mkdir(parents=True)
        tasks_file.write_text("[{not json")
        with pytest.raises(StoreIOError, match="Malformed"):
            JsonFileStore(tasks_file).read()

    def test_non_array_document(self, tasks_file):
        tasks_file.parent.mkdir(parents=True)
        tasks_file.write_text('{"tasks": []}')
        with pytest.raises(StoreIOError, match="expected a JSON array"):
            JsonFileStore(tasks_file).read()

    def test_expands_user(self):
        store = JsonFileStore("~/tasks.json")
        assert "~" not in str(store.file_path)


class TestWrite:
    def test_creates_file_and_dir(self, tmp_path):
        path = tmp_path / "a" / "b" / "tasks.json"
        store = JsonFileStore(path)
        store.write([{"id": 1}])

        assert json.loads(path.read_text()) == [{"id": 1}]
        assert store.exists()

    def test_exists_after_first_write(self, store):
        assert not store.exists()
        store.read()
        assert not store.exists()
        store.write([])
        assert store.exists()

    def test_replaces_content(self, store, tasks_file):
        store.write([{"id": 1}, {"id": 2}])
        store.write([{"id": 3}])
        assert store.read() == [{"id": 3}]

    def test_no_temp_file_left(self, store, tasks_file):
        store.write([{"id": 1}])
        assert [p.name for p in tasks_file.parent.iterdir()] == ["tasks.json"]

    def test_failed_write_keeps_previous_content(self, store, tasks_file):
        store.write([{"id": 1}])

        with patch("pathlib.Path.replace", side_effect=OSError("disk full")):
            with pytest.raises(StoreIOError, match="Cannot write"):
                store.write([{"id": 2}])

        assert store.read() == [{"id": 1}]
        assert not tasks_file.with_name("tasks.json.tmp").exists()

    def test_unicode_preserved(self, store, tasks_file):
        store.write([{"description": "café ✓"}])
        assert "café ✓" in tasks_file.read_text(encoding="utf-8")


class TestBackup:
    def test_backup_without_file(self, store):
        assert store.backup() is None

    def test_backup_copies_current(self, store, tasks_file):
        store.write([{"id": 1}])
        backup = store.backup()
        assert backup == tasks_file.with_name("tasks.json.backup")
        assert json.loads(backup.read_text()) == [{"id": 1}]

    def test_backup_on_write_keeps_previous_version(self, tasks_file):
        store = JsonFileStore(tasks_file, backup_on_write=True)
        store.write([{"id": 1}])
        store.write([{"id": 2}])
        assert json.loads(store.backup_path.read_text()) == [{"id": 1}]
