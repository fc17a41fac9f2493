"""Board client: renders tasks into columns and syncs user actions."""

from kanban.client.api import ApiError, ApiUnavailable, TaskApiClient
from kanban.client.board import BoardController, BoardState, render_board, ui_column_for
from kanban.client.storage import LocalStorage, LocalStorageError, LocalTaskStore


__all__ = [
    "ApiError",
    "ApiUnavailable",
    "TaskApiClient",
    "BoardController",
    "BoardState",
    "render_board",
    "ui_column_for",
    "LocalStorage",
    "LocalStorageError",
    "LocalTaskStore",
]
