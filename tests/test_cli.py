"""Tests for the kanban-board command line."""

import json
from unittest.mock import patch

import pytest
from click.testing import CliRunner

from kanban.client.api import ApiError, ApiUnavailable
from kanban.client.cli import cli


TASK = {
    "id": "task-1",
    "content": "Write spec",
    "column": "TODO",
    "createdAt": "2026-01-01T00:00:00",
    "updatedAt": "2026-01-01T00:00:00",
}


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def api():
    with patch("kanban.client.cli.TaskApiClient") as api_cls:
        api = api_cls.return_value
        api.list_tasks.return_value = [dict(TASK)]
        yield api


@pytest.fixture
def storage_path(tmp_path):
    return str(tmp_path / "local_storage.json")


def _invoke(runner, storage_path, *args):
    return runner.invoke(cli, ["--api-url", "http://kanban.test", "--storage", storage_path, *args])


class TestCli:
    def test_show(self, runner, api, storage_path):
        result = _invoke(runner, storage_path, "show")

        assert result.exit_code == 0
        assert "To Do" in result.output
        assert "task-1  Write spec" in result.output
        assert "offline" not in result.output

    def test_show_offline(self, runner, api, storage_path):
        api.list_tasks.side_effect = ApiUnavailable("refused")

        result = _invoke(runner, storage_path, "show")

        assert result.exit_code == 0
        assert "(offline mode)" in result.output

    def test_add(self, runner, api, storage_path):
        api.create_task.return_value = {**TASK, "id": "task-2", "content": "Ship it"}

        result = _invoke(runner, storage_path, "add", "Ship it")

        assert result.exit_code == 0
        assert "Added task-2" in result.output
        api.create_task.assert_called_once_with("Ship it")

    def test_add_blank(self, runner, api, storage_path):
        result = _invoke(runner, storage_path, "add", "  ")
        assert result.exit_code != 0
        assert "content is required" in result.output

    def test_rm(self, runner, api, storage_path):
        result = _invoke(runner, storage_path, "rm", "task-1")

        assert result.exit_code == 0
        assert "Deleted task-1" in result.output
        api.delete_task.assert_called_once_with("task-1")

    def test_rm_rejected_by_server_stays_online(self, runner, api, storage_path):
        api.delete_task.side_effect = ApiError("Task not found: bogus-id", 404)

        result = _invoke(runner, storage_path, "rm", "bogus-id")

        assert result.exit_code == 1
        assert "Deleted" not in result.output
        assert "Failed to delete task" in result.output

        api.list_tasks.reset_mock()
        result = _invoke(runner, storage_path, "show")

        assert "offline" not in result.output
        api.list_tasks.assert_called_once()

    def test_help_does_not_contact_api(self, runner, api, storage_path):
        result = _invoke(runner, storage_path, "show", "--help")

        assert result.exit_code == 0
        assert "Print the board." in result.output
        api.list_tasks.assert_not_called()

    def test_load_rejected_by_server(self, runner, api, storage_path):
        api.list_tasks.side_effect = ApiError("Bad request", 400)

        result = _invoke(runner, storage_path, "show")

        assert result.exit_code == 1
        assert "Bad request" in result.output

    def test_move_to_done_celebrates(self, runner, api, storage_path):
        api.move_task.return_value = {**TASK, "column": "DONE"}

        result = _invoke(runner, storage_path, "move", "task-1", "done")

        assert result.exit_code == 0
        assert "Moved task-1 to Done" in result.output
        assert "Nice work! 'Write spec' is done." in result.output
        api.move_task.assert_called_once_with("task-1", "DONE")

    def test_move_invalid_column(self, runner, api, storage_path):
        result = _invoke(runner, storage_path, "move", "task-1", "garbage")

        assert result.exit_code != 0
        assert "garbage" in result.output
        api.move_task.assert_not_called()

    def test_move_unknown_task(self, runner, api, storage_path):
        result = _invoke(runner, storage_path, "move", "bogus-id", "done")
        assert result.exit_code != 0
        assert "bogus-id" in result.output

    def test_move_offline_writes_local_store(self, runner, api, storage_path):
        api.move_task.side_effect = ApiUnavailable("refused")

        result = _invoke(runner, storage_path, "move", "task-1", "in_progress")

        assert result.exit_code == 0
        with open(storage_path, encoding="utf-8") as fh:
            stored = json.loads(json.load(fh)["kanban_tasks"])
        assert stored[0]["column"] == "IN_PROGRESS"
