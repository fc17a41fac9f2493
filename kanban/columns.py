"""Task column vocabulary shared by the service and the board client."""

import enum
import time
import uuid

from kanban.exceptions import ValidationError


class Column(str, enum.Enum):
    """Closed set of board columns a task can sit in."""

    TODO = "TODO"
    IN_PROGRESS = "IN_PROGRESS"
    DONE = "DONE"


_ALIASES = {
    "TODO": Column.TODO,
    "INPROGRESS": Column.IN_PROGRESS,
    "IN_PROGRESS": Column.IN_PROGRESS,
    "DONE": Column.DONE,
}


def normalize_column(raw) -> Column:
    """Map a user-supplied column name onto a canonical Column.

    Matching is case-insensitive and accepts both ``IN_PROGRESS`` and
    ``INPROGRESS`` for the middle column.

    Args:
        raw: Column name as received.

    Returns:
        The canonical Column member.

    Raises:
        ValidationError: If the value is missing or not a known column.
    """
    if isinstance(raw, Column):
        return raw
    if raw is None or not isinstance(raw, str):
        raise ValidationError("column is required")

    column = _ALIASES.get(raw.upper())
    if column is None:
        # Report the value exactly as the caller sent it
        raise ValidationError(f"Invalid column value: {raw}")
    return column


def generate_task_id() -> str:
    """Generate a task id of the form ``task-<epoch ms>-<suffix>``."""
    timestamp = int(time.time() * 1000)
    return f"task-{timestamp}-{uuid.uuid4().hex[:9]}"
