"""SQLModel database entity models with Pydantic integration.

This module provides the SQLModel table definition that backs the task
store, together with conversions to and from the business models.
"""

from datetime import datetime

from sqlalchemy import Column, DateTime, Index
from sqlmodel import Field, SQLModel

from .unified_models import (
    DESCRIPTION_MAX_LENGTH,
    TITLE_MAX_LENGTH,
    TaskCreate,
    TaskRead,
    utc_now,
)


class BaseEntityModel(SQLModel):
    """Base for database entity models with an automatic creation timestamp."""

    created_at: datetime = Field(
        default_factory=utc_now,
        sa_column=Column(DateTime(timezone=True), nullable=False),
    )


class Task(BaseEntityModel, table=True):
    """SQLModel task table.

    ``sqlite_autoincrement`` keeps ids from being reused after a delete.
    """

    __tablename__ = "tasks"
    __table_args__ = (
        Index("ix_tasks_completed", "completed"),
        {"sqlite_autoincrement": True},
    )

    id: int | None = Field(default=None, primary_key=True)
    title: str = Field(max_length=TITLE_MAX_LENGTH)
    description: str | None = Field(default=None, max_length=DESCRIPTION_MAX_LENGTH)
    completed: bool = Field(default=False)

    def to_read_model(self) -> TaskRead:
        """Convert to the TaskRead business model."""
        return TaskRead.model_validate(self, from_attributes=True)

    @classmethod
    def from_create_model(cls, task_create: TaskCreate) -> "Task":
        """Create from a validated TaskCreate body."""
        return cls(title=task_create.title, description=task_create.description)

    def __repr__(self) -> str:
        return f"<Task {self.id} {self.title!r} completed={self.completed}>"
