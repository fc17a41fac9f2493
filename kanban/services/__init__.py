"""Service modules."""

from kanban.services.tasks import create_task, list_tasks, move_task, remove_task


__all__ = ["list_tasks", "create_task", "remove_task", "move_task"]
