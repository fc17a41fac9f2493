"""Tests for the HTTP task client."""

from unittest.mock import MagicMock

import pytest
import requests

from kanban.client.api import ApiError, ApiUnavailable, TaskApiClient


def _response(status_code=200, body=None):
    response = MagicMock()
    response.status_code = status_code
    response.ok = 200 <= status_code < 300
    response.content = b"" if body is None else b"{}"
    if body is None:
        response.json.side_effect = ValueError("no body")
    else:
        response.json.return_value = body
    return response


@pytest.fixture
def session():
    return MagicMock(spec=requests.Session)


@pytest.fixture
def api(session):
    return TaskApiClient("http://kanban.test/", session=session, timeout=2.0)


class TestTaskApiClient:
    def test_list_tasks(self, api, session):
        session.request.return_value = _response(body=[{"id": "task-1"}])

        assert api.list_tasks() == [{"id": "task-1"}]
        session.request.assert_called_once_with("GET", "http://kanban.test/tasks", timeout=2.0)

    def test_create_task(self, api, session):
        session.request.return_value = _response(201, {"id": "task-1", "column": "TODO"})

        assert api.create_task("Write spec")["column"] == "TODO"
        session.request.assert_called_once_with(
            "POST", "http://kanban.test/tasks", timeout=2.0, json={"content": "Write spec"}
        )

    def test_move_task(self, api, session):
        session.request.return_value = _response(body={"id": "task-1", "column": "DONE"})

        api.move_task("task-1", "DONE")
        session.request.assert_called_once_with(
            "PUT", "http://kanban.test/tasks/task-1/move", timeout=2.0, json={"column": "DONE"}
        )

    def test_delete_task_no_content(self, api, session):
        session.request.return_value = _response(204)

        assert api.delete_task("task-1") is None
        session.request.assert_called_once_with("DELETE", "http://kanban.test/tasks/task-1", timeout=2.0)

    def test_error_response_carries_server_message(self, api, session):
        session.request.return_value = _response(404, {"error": "Task not found: bogus-id"})

        with pytest.raises(ApiError) as exc_info:
            api.move_task("bogus-id", "DONE")
        assert exc_info.value.status_code == 404
        assert exc_info.value.message == "Task not found: bogus-id"

    def test_error_response_without_json(self, api, session):
        session.request.return_value = _response(502)

        with pytest.raises(ApiError, match="API error: 502"):
            api.list_tasks()

    @pytest.mark.parametrize("exc", [requests.ConnectionError("refused"), requests.Timeout("slow")])
    def test_unreachable(self, api, session, exc):
        session.request.side_effect = exc

        with pytest.raises(ApiUnavailable) as exc_info:
            api.list_tasks()
        assert exc_info.value.status_code is None
