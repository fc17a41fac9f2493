"""Task lifecycle operations.

Every write to the task store goes through this module: inputs are validated
and columns normalized here, so the routes and any other caller only ever hand
canonical values to the database.
"""

import logging
from contextlib import contextmanager

from sqlalchemy.exc import SQLAlchemyError

from kanban.columns import Column, generate_task_id, normalize_column
from kanban.exceptions import NotFoundError, StoreError, ValidationError
from kanban.extensions import db
from kanban.models import Task
from kanban.models.task import utcnow
from kanban.telemetry import get_meter, get_tracer


logger = logging.getLogger(__name__)
tracer = get_tracer(__name__)
meter = get_meter(__name__)

tasks_created = meter.create_counter(
    name="tasks.created",
    description="Tasks created",
    unit="1",
)

tasks_moved = meter.create_counter(
    name="tasks.moved",
    description="Tasks moved between columns",
    unit="1",
)

tasks_deleted = meter.create_counter(
    name="tasks.deleted",
    description="Tasks deleted",
    unit="1",
)


def list_tasks() -> list[Task]:
    """Return every task, oldest first.

    Raises:
        StoreError: If the store cannot be queried.
    """
    query = db.select(Task).order_by(Task.created_at.asc(), Task.id.asc())
    with _store_errors():
        return list(db.session.scalars(query))


def create_task(content) -> Task:
    """Create a task in the TODO column.

    Args:
        content: Card text. Must be a non-blank string.

    Returns:
        The stored task.

    Raises:
        ValidationError: If content is missing or blank.
        StoreError: If the store rejects the insert.
    """
    if not isinstance(content, str) or not content.strip():
        raise ValidationError("content is required")

    with tracer.start_as_current_span("task.create") as span:
        now = utcnow()
        task = Task(
            id=generate_task_id(),
            content=content,
            column=Column.TODO,
            created_at=now,
            updated_at=now,
        )
        _commit(task)

        span.set_attribute("task.id", task.id)
        tasks_created.add(1)
        logger.info(f"Task created: {task.id}")

        return task


def remove_task(task_id: str) -> None:
    """Delete a task.

    Raises:
        NotFoundError: If no task has ``task_id``, including one already removed.
        StoreError: If the store rejects the delete.
    """
    with tracer.start_as_current_span("task.delete") as span:
        span.set_attribute("task.id", task_id)

        task = _get_task(task_id)
        db.session.delete(task)
        _commit()

        tasks_deleted.add(1)
        logger.info(f"Task deleted: {task_id}")


def move_task(task_id: str, column) -> Task:
    """Move a task to another column.

    The column is normalized before the store is touched, so an invalid value
    fails even for an unknown id.

    Args:
        task_id: Id of the task to move.
        column: Column name in any case; ``INPROGRESS`` is accepted for
            ``IN_PROGRESS``.

    Returns:
        The updated task.

    Raises:
        ValidationError: If the column is missing or unknown.
        NotFoundError: If no task has ``task_id``.
        StoreError: If the store rejects the update.
    """
    target = normalize_column(column)

    with tracer.start_as_current_span("task.move") as span:
        span.set_attribute("task.id", task_id)
        span.set_attribute("task.column", target.value)

        task = _get_task(task_id)
        task.move_to(target)
        _commit()

        tasks_moved.add(1, {"column": target.value})
        logger.info(f"Task moved: {task_id} -> {target.value}")

        return task


def _get_task(task_id: str) -> Task:
    with _store_errors():
        task = db.session.get(Task, task_id)
    if task is None:
        logger.warning(f"Task not found: {task_id}")
        raise NotFoundError(f"Task not found: {task_id}")
    return task


@contextmanager
def _store_errors():
    """Roll back and re-raise store failures as StoreError."""
    try:
        yield
    except SQLAlchemyError as exc:
        db.session.rollback()
        logger.error(f"Task store error: {exc}")
        raise StoreError(str(exc.orig) if getattr(exc, "orig", None) else str(exc)) from exc


def _commit(task: Task | None = None) -> None:
    with _store_errors():
        if task is not None:
            db.session.add(task)
        db.session.commit()
