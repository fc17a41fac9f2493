"""Marshmallow schemas for serialization and validation."""

from kanban.schemas.task import TaskCreateSchema, TaskMoveSchema, TaskSchema


__all__ = [
    "TaskSchema",
    "TaskCreateSchema",
    "TaskMoveSchema",
]
