"""Tests for the local fallback store."""

import json

import pytest

from kanban.client.storage import TASKS_KEY, LocalStorage, LocalStorageError, LocalTaskStore, new_local_task
from kanban.exceptions import NotFoundError, ValidationError


class TestLocalStorage:
    def test_missing_file_is_empty(self, tmp_path):
        storage = LocalStorage(str(tmp_path / "store.json"))
        assert storage.get_item("anything") is None
        assert not storage.has_item("anything")

    def test_set_and_get(self, tmp_path):
        path = tmp_path / "nested" / "store.json"
        storage = LocalStorage(str(path))

        storage.set_item("greeting", "hello")

        assert storage.get_item("greeting") == "hello"
        assert json.loads(path.read_text()) == {"greeting": "hello"}

    def test_unreadable_file_is_empty(self, tmp_path):
        path = tmp_path / "store.json"
        path.write_text("{not json")
        assert LocalStorage(str(path)).get_item("x") is None

    def test_write_failure(self, tmp_path):
        blocker = tmp_path / "blocker"
        blocker.write_text("")
        storage = LocalStorage(str(blocker / "store.json"))

        with pytest.raises(LocalStorageError):
            storage.set_item("k", "v")


class TestLocalTaskStore:
    def test_exists_only_after_save(self, local_store):
        assert not local_store.exists()
        local_store.save([])
        assert local_store.exists()

    def test_tasks_saved_under_fixed_key(self, local_store):
        task = new_local_task("Write spec")
        local_store.add(task)

        raw = local_store.storage.get_item(TASKS_KEY)
        assert json.loads(raw) == [task]

    def test_new_local_task(self):
        task = new_local_task("Write spec")
        assert task["column"] == "TODO"
        assert task["id"].startswith("task-")
        assert task["createdAt"] == task["updatedAt"]

    def test_corrupt_entry_loads_empty(self, local_store):
        local_store.storage.set_item(TASKS_KEY, "[oops")
        assert local_store.load() == []

    def test_non_list_entry_loads_empty(self, local_store):
        local_store.storage.set_item(TASKS_KEY, json.dumps({"id": "x"}))
        assert local_store.load() == []

    def test_remove(self, local_store):
        keep, drop = new_local_task("Keep"), new_local_task("Drop")
        local_store.save([keep, drop])

        assert local_store.remove(drop["id"]) is True
        assert local_store.remove(drop["id"]) is False
        assert local_store.load() == [keep]

    def test_move_normalizes_column(self, local_store):
        task = new_local_task("Write spec")
        local_store.add(task)

        moved = local_store.move(task["id"], "in_progress")

        assert moved["column"] == "IN_PROGRESS"
        assert local_store.load()[0]["column"] == "IN_PROGRESS"
        assert moved["updatedAt"] >= task["updatedAt"]

    def test_move_invalid_column(self, local_store):
        task = new_local_task("Write spec")
        local_store.add(task)

        with pytest.raises(ValidationError, match="garbage"):
            local_store.move(task["id"], "garbage")

    def test_move_unknown_task(self, local_store):
        local_store.save([])
        with pytest.raises(NotFoundError):
            local_store.move("bogus-id", "DONE")

    def test_custom_key(self, tmp_path):
        storage = LocalStorage(str(tmp_path / "store.json"))
        store = LocalTaskStore(storage, key="other")
        store.save([])
        assert storage.has_item("other")
        assert not storage.has_item(TASKS_KEY)
