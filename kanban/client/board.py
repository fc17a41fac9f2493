"""Board state and the controller that keeps it in sync with the API.

The controller updates the board first and confirms with the API afterwards.
When the API cannot be reached, or fails with a 5xx, it switches to the
local task store for the rest of the session.
"""

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

from kanban.client.api import ApiError, ApiUnavailable, TaskApiClient
from kanban.client.storage import LocalStorageError, LocalTaskStore, new_local_task
from kanban.columns import Column
from kanban.exceptions import TaskError, ValidationError


logger = logging.getLogger(__name__)

COLUMN_TO_UI = {
    Column.TODO.value: "todo",
    Column.IN_PROGRESS.value: "inprogress",
    Column.DONE.value: "done",
}
UI_TO_COLUMN = {ui: Column(value) for value, ui in COLUMN_TO_UI.items()}
UI_COLUMNS = tuple(COLUMN_TO_UI.values())

TaskData = dict[str, Any]


def should_fall_back(exc: ApiError) -> bool:
    """Only an unreachable or failing server sends the client offline.

    A 4xx means the server answered and refused; that is a normal failure.
    """
    return isinstance(exc, ApiUnavailable) or (exc.status_code or 0) >= 500


def ui_column_for(column: str) -> str:
    """UI column id for a canonical column; unknown values are lowercased."""
    return COLUMN_TO_UI.get(column, column.lower())


def render_board(tasks: list[TaskData]) -> dict[str, list[TaskData]]:
    """Group tasks into the three UI columns, keeping their order."""
    board: dict[str, list[TaskData]] = {ui: [] for ui in UI_COLUMNS}
    for task in tasks:
        ui_column = ui_column_for(str(task.get("column", "")))
        if ui_column not in board:
            logger.error(f"Column not found for task: {task.get('id')}, column: {task.get('column')}")
            continue
        board[ui_column].append(task)
    return board


@dataclass
class BoardState:
    """What the board currently shows, plus the client's mode flags."""

    columns: dict[str, list[TaskData]] = field(default_factory=lambda: render_board([]))
    offline: bool = False
    adding: bool = False

    def locate(self, task_id: str) -> tuple[str, int] | None:
        for ui_column, tasks in self.columns.items():
            for index, task in enumerate(tasks):
                if task.get("id") == task_id:
                    return ui_column, index
        return None

    def tasks(self) -> list[TaskData]:
        return [task for ui in UI_COLUMNS for task in self.columns.get(ui, [])]


class BoardController:
    """Applies user actions to the board and persists them.

    Args:
        api: Client for the task API.
        local_store: Fallback store used while offline.
        state: Initial state. By default the board starts offline when the
            local store already holds tasks from an earlier session.
        on_celebrate: Called with the task after a move into DONE is confirmed.
        on_alert: Called with a message when a delete fails on both paths.
    """

    def __init__(
        self,
        api: TaskApiClient,
        local_store: LocalTaskStore,
        state: BoardState | None = None,
        on_celebrate: Callable[[TaskData], None] | None = None,
        on_alert: Callable[[str], None] | None = None,
    ) -> None:
        self.api = api
        self.local_store = local_store
        self.state = state if state is not None else BoardState(offline=local_store.exists())
        self.on_celebrate = on_celebrate
        self.on_alert = on_alert

    def load(self) -> dict[str, list[TaskData]]:
        """Fetch every task and rebuild the board.

        Raises:
            ApiError: If the server refuses the request with a 4xx.
        """
        tasks = None
        if not self.state.offline:
            try:
                tasks = self.api.list_tasks()
            except ApiError as exc:
                if not should_fall_back(exc):
                    raise
                logger.warning(f"API unavailable, falling back to local storage: {exc.message}")
                self.state.offline = True
        if tasks is None:
            tasks = self.local_store.load()

        self.state.columns = render_board(tasks)
        return self.state.columns

    def add_task(self, text: str) -> TaskData | None:
        """Add a task to the TODO column.

        Returns:
            The new task, or None when neither the API nor local storage
            accepted it.

        Raises:
            ValidationError: If ``text`` is blank.
        """
        content = text.strip() if isinstance(text, str) else ""
        if not content:
            raise ValidationError("content is required")

        self.state.adding = True
        try:
            task = self._persist_new_task(content)
        except (ApiError, TaskError, LocalStorageError) as exc:
            logger.error(f"Error adding task: {exc}")
            return None
        finally:
            self.state.adding = False

        self.state.columns[ui_column_for(task["column"])].append(task)
        return task

    def _persist_new_task(self, content: str) -> TaskData:
        if not self.state.offline:
            try:
                return self.api.create_task(content)
            except ApiError as exc:
                if not should_fall_back(exc):
                    raise
                logger.error(f"API error, falling back to local storage: {exc.message}")
                self._go_offline()

        task = new_local_task(content)
        self.local_store.add(task)
        return task

    def delete_task(self, task_id: str) -> bool:
        """Delete a task from the board and its store."""
        try:
            self._persist_delete(task_id)
        except (ApiError, TaskError, LocalStorageError) as exc:
            logger.error(f"Error deleting task: {exc}")
            if self.on_alert:
                self.on_alert("Failed to delete task. Please check the logs for details.")
            return False

        located = self.state.locate(task_id)
        if located:
            ui_column, index = located
            del self.state.columns[ui_column][index]
        return True

    def _persist_delete(self, task_id: str) -> None:
        if not self.state.offline:
            try:
                self.api.delete_task(task_id)
                return
            except ApiError as exc:
                if not should_fall_back(exc):
                    raise
                logger.error(f"API error, falling back to local storage: {exc.message}")
                self._go_offline()

        self.local_store.remove(task_id)

    def drop(self, task_id: str, target_ui_column: str) -> bool:
        """Handle a card dropped onto a column.

        The card moves on the board straight away. Returns True once the move
        is persisted; a failed confirmation leaves the board as moved.
        """
        located = self.state.locate(task_id)
        target = UI_TO_COLUMN.get(target_ui_column)
        if located is None or target is None:
            return False

        current_ui_column, index = located
        if current_ui_column == target_ui_column:
            return False

        task = self.state.columns[current_ui_column].pop(index)
        task["column"] = target.value
        self.state.columns[target_ui_column].append(task)

        try:
            confirmed = self._persist_move(task_id, target)
        except (ApiError, TaskError, LocalStorageError) as exc:
            logger.error(f"Error moving task: {exc}")
            return False

        task.update(confirmed)
        if target is Column.DONE and self.on_celebrate:
            self.on_celebrate(task)
        return True

    def _persist_move(self, task_id: str, target: Column) -> TaskData:
        if not self.state.offline:
            try:
                return self.api.move_task(task_id, target.value)
            except ApiError as exc:
                if not should_fall_back(exc):
                    raise
                logger.error(f"API error, falling back to local storage: {exc.message}")
                self._go_offline()

        return self.local_store.move(task_id, target)

    def _go_offline(self) -> None:
        """Switch to local storage, seeding it with the board if it is empty."""
        self.state.offline = True
        if not self.local_store.exists():
            self.local_store.save(self.state.tasks())
