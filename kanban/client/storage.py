"""Local fallback persistence for the board client.

``LocalStorage`` mimics the browser's string key-value store with a JSON file;
``LocalTaskStore`` keeps the board's tasks under a single key in it.
"""

import json
import logging
import os
from datetime import datetime, timezone
from typing import Any

from kanban.columns import Column, generate_task_id, normalize_column
from kanban.exceptions import NotFoundError


logger = logging.getLogger(__name__)

TASKS_KEY = "kanban_tasks"


class LocalStorageError(Exception):
    """The local store could not be written."""


def isoformat_now() -> str:
    return datetime.now(timezone.utc).isoformat()


def new_local_task(content: str) -> dict[str, Any]:
    """Build a TODO task the way the server would, for offline use."""
    now = isoformat_now()
    return {
        "id": generate_task_id(),
        "content": content,
        "column": Column.TODO.value,
        "createdAt": now,
        "updatedAt": now,
    }


class LocalStorage:
    """String key-value store persisted as one JSON object in ``path``."""

    def __init__(self, path: str) -> None:
        self.path = os.path.expanduser(path)

    def _read(self) -> dict[str, str]:
        try:
            with open(self.path, encoding="utf-8") as fh:
                data = json.load(fh)
        except FileNotFoundError:
            return {}
        except (OSError, ValueError) as exc:
            logger.error(f"Unreadable local storage {self.path}: {exc}")
            return {}
        return data if isinstance(data, dict) else {}

    def get_item(self, key: str) -> str | None:
        return self._read().get(key)

    def has_item(self, key: str) -> bool:
        return key in self._read()

    def set_item(self, key: str, value: str) -> None:
        data = self._read()
        data[key] = value
        try:
            directory = os.path.dirname(self.path)
            if directory:
                os.makedirs(directory, exist_ok=True)
            tmp_path = f"{self.path}.tmp"
            with open(tmp_path, "w", encoding="utf-8") as fh:
                json.dump(data, fh)
            os.replace(tmp_path, self.path)
        except OSError as exc:
            raise LocalStorageError(f"Could not write {self.path}: {exc}") from exc


class LocalTaskStore:
    """Tasks kept as a JSON array under ``key`` in a LocalStorage."""

    def __init__(self, storage: LocalStorage, key: str = TASKS_KEY) -> None:
        self.storage = storage
        self.key = key

    def exists(self) -> bool:
        return self.storage.has_item(self.key)

    def load(self) -> list[dict[str, Any]]:
        raw = self.storage.get_item(self.key)
        if raw is None:
            return []
        try:
            tasks = json.loads(raw)
        except ValueError as exc:
            logger.error(f"Corrupt {self.key} entry, starting empty: {exc}")
            return []
        if not isinstance(tasks, list):
            logger.error(f"Corrupt {self.key} entry, expected a list")
            return []
        return tasks

    def save(self, tasks: list[dict[str, Any]]) -> None:
        self.storage.set_item(self.key, json.dumps(tasks))
        logger.debug(f"Saved {len(tasks)} tasks to local storage")

    def add(self, task: dict[str, Any]) -> None:
        tasks = self.load()
        tasks.append(task)
        self.save(tasks)

    def remove(self, task_id: str) -> bool:
        """Drop a task; returns whether it was present."""
        tasks = self.load()
        remaining = [task for task in tasks if task.get("id") != task_id]
        self.save(remaining)
        return len(remaining) != len(tasks)

    def move(self, task_id: str, column) -> dict[str, Any]:
        """Move a stored task, applying the same column rules as the API.

        Raises:
            ValidationError: If the column is not a known column.
            NotFoundError: If no stored task has ``task_id``.
        """
        target = normalize_column(column)
        tasks = self.load()
        for task in tasks:
            if task.get("id") == task_id:
                task["column"] = target.value
                task["updatedAt"] = isoformat_now()
                self.save(tasks)
                return task
        raise NotFoundError(f"Task not found: {task_id}")
