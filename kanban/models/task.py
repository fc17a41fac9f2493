"""Task model."""

from datetime import datetime, timezone

from sqlalchemy import DateTime, Enum, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from kanban.columns import Column
from kanban.extensions import db


def utcnow() -> datetime:
    """Current time, timezone-aware in UTC."""
    return datetime.now(timezone.utc)


class Task(db.Model):
    """A single card on the board."""

    __tablename__ = "tasks"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    column: Mapped[Column] = mapped_column(
        Enum(Column, name="task_column"), default=Column.TODO, nullable=False
    )
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow, index=True)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, onupdate=utcnow
    )

    def move_to(self, column: Column, when: datetime | None = None) -> None:
        """Place the task in ``column`` and refresh its update stamp."""
        self.column = column
        self.updated_at = when or utcnow()

    def __repr__(self) -> str:
        return f"<Task {self.id}>"
